"""Product catalog snapshot and the normalization rules for catalog records."""
from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when catalog data cannot be turned into products."""


class Category(str, Enum):
    FIGURAS = "figuras"
    POLERAS = "poleras"
    POSTERS = "posters"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.FIGURAS: "Figuras",
    Category.POLERAS: "Poleras",
    Category.POSTERS: "Pósters",
}


def _first_present(record: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


class Product(BaseModel):
    """A catalog product. Unit prices are whole pesos."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    title: str = "Producto"
    description: str = ""
    category: Category
    price: int = Field(0, ge=0)
    image: str = ""
    alt: str = "Producto"

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        # Catalog files in the wild use either English or Spanish keys.
        if not isinstance(data, dict):
            return data
        title = _first_present(data, "title", "nombre", default="Producto")
        description = _first_present(data, "description", "descripcion", default="")
        category = _first_present(data, "category", "categoria", default="")
        if not isinstance(category, Category):
            category = str(category).lower()
        return {
            "id": data.get("id"),
            "title": title,
            "description": description,
            "category": category,
            "price": _first_present(data, "price", "precio", default=0),
            "image": _first_present(data, "image", "imagen", default=""),
            "alt": _first_present(
                data, "alt", "altText", "descripcion", "title", "nombre", default="Producto"
            ),
        }


class Catalog:
    """Immutable, ordered snapshot of the products available for pricing."""

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        if products is None:
            products = _demo_products()
        self._products: Tuple[Product, ...] = tuple(products)
        self._by_id: Dict[int, Product] = {}
        for product in self._products:
            if product.id in self._by_id:
                raise CatalogError(f"Duplicate product id={product.id} in catalog")
            self._by_id[product.id] = product

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    def get(self, product_id: int) -> Product:
        if product_id not in self._by_id:
            raise KeyError(f"Unknown product: {product_id}")
        return self._by_id[product_id]

    def find(self, product_id: int) -> Optional[Product]:
        return self._by_id.get(product_id)

    def by_category(self, category: Category) -> Tuple[Product, ...]:
        return tuple(p for p in self._products if p.category is category)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._by_id

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "record"
    return f"{location}: {first['msg']}"


def parse_product(record: Any) -> Product:
    try:
        return Product.model_validate(record)
    except ValidationError as exc:
        product_id = record.get("id") if isinstance(record, dict) else None
        if any(err["loc"] == ("category",) for err in exc.errors()):
            allowed = " | ".join(c.value for c in Category)
            raise CatalogError(
                f"Invalid category in product id={product_id}. Use: {allowed}"
            ) from exc
        raise CatalogError(
            f"Invalid product id={product_id} ({_describe_validation_error(exc)})"
        ) from exc


def parse_catalog(raw: Any) -> Catalog:
    """Build a catalog from decoded JSON.

    The payload must be a non-empty list of product records. Every record is
    normalized (see ``Product``) and validated; the first bad record aborts
    the whole load so a half-valid catalog never reaches pricing.
    """
    if not isinstance(raw, list) or not raw:
        raise CatalogError("catalog JSON does not contain valid products")
    return Catalog(parse_product(record) for record in raw)


def load_catalog(path: Path) -> Catalog:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Could not read catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {path} is not valid JSON: {exc}") from exc

    catalog = parse_catalog(raw)
    logger.info("Loaded %d products from %s", len(catalog), path)
    return catalog


def _demo_products() -> Tuple[Product, ...]:
    return (
        Product(
            id=1,
            title="Figura Goku Super Saiyan",
            description="Figura de colección de 18 cm",
            category=Category.FIGURAS,
            price=60000,
        ),
        Product(
            id=2,
            title="Figura Naruto Sennin",
            description="Figura articulada de 16 cm",
            category=Category.FIGURAS,
            price=50000,
        ),
        Product(
            id=3,
            title="Polera One Piece",
            description="Polera de algodón estampada",
            category=Category.POLERAS,
            price=22000,
        ),
        Product(
            id=4,
            title="Polera Attack on Titan",
            description="Polera negra talla M",
            category=Category.POLERAS,
            price=20000,
        ),
        Product(
            id=5,
            title="Póster Demon Slayer",
            description="Póster A3 en papel couché",
            category=Category.POSTERS,
            price=9000,
        ),
        Product(
            id=6,
            title="Póster Jujutsu Kaisen",
            description="Póster A3 edición limitada",
            category=Category.POSTERS,
            price=8000,
        ),
    )
