"""In-memory cart: product ids and their quantities, in insertion order."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartEntry:
    product_id: int
    quantity: int


CartListener = Callable[[Tuple[CartEntry, ...]], None]


class CartStore:
    """Holds the cart for a single session.

    Mutations return the new entries and notify subscribers with them. The
    store does not know what its subscribers do (re-pricing, rendering).
    """

    def __init__(self) -> None:
        self._quantities: Dict[int, int] = {}
        self._listeners: List[CartListener] = []

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def entries(self) -> Tuple[CartEntry, ...]:
        return tuple(
            CartEntry(product_id=pid, quantity=qty) for pid, qty in self._quantities.items()
        )

    def quantity_of(self, product_id: int) -> int:
        return self._quantities.get(product_id, 0)

    def add_one(self, product_id: Any) -> Tuple[CartEntry, ...]:
        try:
            pid = int(product_id)
        except (TypeError, ValueError, OverflowError):
            logger.debug("Ignoring add of non-numeric product id %r", product_id)
            return self.entries()

        self._quantities[pid] = self._quantities.get(pid, 0) + 1
        logger.debug("Added product %d (qty=%d)", pid, self._quantities[pid])
        return self._changed()

    def remove_one(self, product_id: Any) -> Tuple[CartEntry, ...]:
        try:
            pid = int(product_id)
        except (TypeError, ValueError, OverflowError):
            return self.entries()
        if pid not in self._quantities:
            return self.entries()

        remaining = self._quantities[pid] - 1
        if remaining <= 0:
            del self._quantities[pid]
        else:
            self._quantities[pid] = remaining
        logger.debug("Removed one of product %d (qty=%d)", pid, max(remaining, 0))
        return self._changed()

    def clear(self) -> Tuple[CartEntry, ...]:
        self._quantities.clear()
        logger.debug("Cart cleared")
        return self._changed()

    def _changed(self) -> Tuple[CartEntry, ...]:
        entries = self.entries()
        for listener in list(self._listeners):
            listener(entries)
        return entries

    def __len__(self) -> int:
        return len(self._quantities)
