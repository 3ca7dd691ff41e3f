"""Tests for catalog normalization, validation, and lookup."""
import json

import pytest

from catalog import Catalog, CatalogError, Category, Product, load_catalog, parse_catalog, parse_product


class TestNormalization:
    def test_spanish_keys_are_accepted(self):
        product = parse_product(
            {
                "id": "3",
                "nombre": "Polera Naruto",
                "descripcion": "Algodón",
                "categoria": "Poleras",
                "precio": "22000",
                "imagen": "polera.jpg",
            }
        )

        assert product.id == 3
        assert product.title == "Polera Naruto"
        assert product.description == "Algodón"
        assert product.category is Category.POLERAS
        assert product.price == 22000
        assert product.image == "polera.jpg"
        assert product.alt == "Algodón"

    def test_defaults_for_missing_fields(self):
        product = parse_product({"id": 1, "category": "figuras"})

        assert product.title == "Producto"
        assert product.description == ""
        assert product.price == 0
        assert product.alt == "Producto"

    def test_english_keys_win_over_spanish(self):
        product = parse_product(
            {"id": 1, "title": "Figure", "nombre": "Figura", "category": "FIGURAS", "price": 10}
        )

        assert product.title == "Figure"
        assert product.alt == "Figure"

    def test_products_are_immutable(self):
        product = parse_product({"id": 1, "category": "figuras"})

        with pytest.raises(Exception):
            product.price = 5


class TestValidation:
    def test_unknown_category_names_the_product(self):
        with pytest.raises(CatalogError, match=r"id=9.*figuras \| poleras \| posters"):
            parse_product({"id": 9, "category": "tazas", "price": 1000})

    def test_negative_price_is_rejected(self):
        with pytest.raises(CatalogError, match="id=1"):
            parse_product({"id": 1, "category": "figuras", "price": -5})

    def test_missing_id_is_rejected(self):
        with pytest.raises(CatalogError):
            parse_product({"category": "figuras"})

    @pytest.mark.parametrize("raw", [[], {}, "products", None])
    def test_payload_must_be_a_non_empty_list(self, raw):
        with pytest.raises(CatalogError, match="does not contain valid products"):
            parse_catalog(raw)

    def test_duplicate_ids_are_rejected(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            parse_catalog(
                [
                    {"id": 1, "category": "figuras"},
                    {"id": 1, "category": "posters"},
                ]
            )


class TestLoadCatalog:
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "productos.json"
        path.write_text(
            json.dumps(
                [
                    {"id": 1, "nombre": "Figura", "categoria": "figuras", "precio": 60000},
                    {"id": 2, "title": "Poster", "category": "posters", "price": 9000},
                ]
            ),
            encoding="utf-8",
        )

        catalog = load_catalog(path)

        assert len(catalog) == 2
        assert catalog.get(2).title == "Poster"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Could not read"):
            load_catalog(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "productos.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(CatalogError, match="not valid JSON"):
            load_catalog(path)


class TestCatalogLookup:
    def test_get_and_find(self, catalog: Catalog):
        assert catalog.get(1).price == 60000
        assert catalog.find(42) is None
        with pytest.raises(KeyError):
            catalog.get(42)

    def test_membership_and_order(self, catalog: Catalog):
        assert 3 in catalog
        assert 42 not in catalog
        assert [p.id for p in catalog] == [1, 2, 3, 4]

    def test_by_category(self, catalog: Catalog):
        assert [p.id for p in catalog.by_category(Category.FIGURAS)] == [1, 2]

    def test_demo_catalog_covers_every_category(self):
        catalog = Catalog()

        assert {p.category for p in catalog} == set(Category)

    def test_category_labels(self):
        assert [c.label for c in Category] == ["Figuras", "Poleras", "Pósters"]

    def test_direct_construction(self):
        product = Product(id=5, title="X", category=Category.POSTERS, price=100)

        assert product.category is Category.POSTERS
