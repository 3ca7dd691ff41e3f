"""Keeps a priced view of the cart in step with cart mutations."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Tuple

from cart import CartEntry, CartStore
from catalog import Catalog, Product
from pricing import LineItem, PricingResult, price
from promotions import DEFAULT_PROMOTIONS, PromotionTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int

    @property
    def line_item(self) -> LineItem:
        return LineItem(
            category=self.product.category,
            unit_price=self.product.price,
            quantity=self.quantity,
        )

    @property
    def line_total(self) -> int:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartSummary:
    lines: Tuple[CartLine, ...] = ()
    item_count: int = 0
    pricing: PricingResult = field(default_factory=PricingResult)

    @property
    def is_empty(self) -> bool:
        return not self.lines


Renderer = Callable[[CartSummary], None]


def resolve_lines(entries: Iterable[CartEntry], catalog: Catalog) -> Tuple[CartLine, ...]:
    lines = []
    for entry in entries:
        product = catalog.find(entry.product_id)
        if product is None:
            logger.debug("Dropping cart entry for unknown product %d", entry.product_id)
            continue
        lines.append(CartLine(product=product, quantity=entry.quantity))
    return tuple(lines)


def summarize(
    entries: Iterable[CartEntry],
    catalog: Catalog,
    promotions: PromotionTable = DEFAULT_PROMOTIONS,
) -> CartSummary:
    lines = resolve_lines(entries, catalog)
    return CartSummary(
        lines=lines,
        item_count=sum(line.quantity for line in lines),
        pricing=price((line.line_item for line in lines), promotions),
    )


class CartView:
    """Re-prices the cart after every store mutation and hands it to a renderer."""

    def __init__(
        self,
        store: CartStore,
        catalog: Catalog,
        promotions: PromotionTable = DEFAULT_PROMOTIONS,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._promotions = promotions
        self._renderer = renderer
        self._summary = CartSummary()
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_change)

    @property
    def summary(self) -> CartSummary:
        return self._summary

    def refresh(self) -> CartSummary:
        return self._on_change(self._store.entries())

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_change(self, entries: Tuple[CartEntry, ...]) -> CartSummary:
        self._summary = summarize(entries, self._catalog, self._promotions)
        if self._renderer is not None:
            self._renderer(self._summary)
        return self._summary
