"""Per-category "buy two" promotions: a fixed price charged for each pair."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from catalog import Category
from money import format_clp

logger = logging.getLogger(__name__)

PromotionTable = Mapping[Category, int]

DEFAULT_PAIR_PRICES = {
    Category.FIGURAS: 50000,
    Category.POLERAS: 35000,
    Category.POSTERS: 14000,
}


@dataclass(frozen=True)
class DiscountLine:
    label: str
    amount: int


def promotion_table(pair_prices: Mapping[Union[Category, str], int]) -> PromotionTable:
    """Return a read-only promotion table, keeping the declaration order.

    Keys may be ``Category`` members or their string values. Pair prices must
    be non-negative integers.
    """
    table = {}
    for key, pair_price in pair_prices.items():
        try:
            category = Category(key.lower() if isinstance(key, str) else key)
        except ValueError:
            raise ValueError(f"Unknown promotion category: {key!r}") from None
        if isinstance(pair_price, bool) or not isinstance(pair_price, int):
            raise ValueError(f"Pair price for {category.value} must be an integer")
        if pair_price < 0:
            raise ValueError(f"Pair price for {category.value} must be non-negative")
        table[category] = pair_price
    return MappingProxyType(table)


DEFAULT_PROMOTIONS = promotion_table(DEFAULT_PAIR_PRICES)


@dataclass(frozen=True)
class PairPromotion:
    """Charges ``pair_price`` for every two units of ``category``.

    The most expensive units are paired first, which gives the customer the
    largest discount. With an odd number of units the cheapest one is charged
    at its normal price.
    """

    category: Category
    pair_price: int

    def label(self, pairs: int) -> str:
        return f"{self.category.label} (Promo 2x {format_clp(self.pair_price)}) × {pairs}"

    def apply(self, unit_prices: Iterable[int]) -> Optional[DiscountLine]:
        prices = sorted(unit_prices, reverse=True)
        pairs = len(prices) // 2
        if pairs == 0:
            return None

        promo_items_sum = sum(prices[: pairs * 2])
        discount = promo_items_sum - pairs * self.pair_price
        if discount <= 0:
            # A pair price above the paired units' own price is not a discount.
            return None

        logger.debug(
            "%s: %d pair(s) of %d units, discount %d",
            self.category.value,
            pairs,
            len(prices),
            discount,
        )
        return DiscountLine(label=self.label(pairs), amount=discount)
