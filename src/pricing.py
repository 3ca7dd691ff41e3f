"""Cart pricing: subtotal, per-category pair promotions, and the amount payable."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from catalog import Category
from promotions import DEFAULT_PROMOTIONS, DiscountLine, PairPromotion, PromotionTable


@dataclass(frozen=True)
class LineItem:
    category: Category
    unit_price: int
    quantity: int

    @property
    def total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PricingResult:
    subtotal: int = 0
    total_discount: int = 0
    total_payable: int = 0
    discount_lines: Tuple[DiscountLine, ...] = field(default_factory=tuple)

    @property
    def has_discounts(self) -> bool:
        return bool(self.discount_lines)


def _unit_prices_by_category(line_items: Iterable[LineItem]) -> Dict[Category, List[int]]:
    tokens: Dict[Category, List[int]] = defaultdict(list)
    for item in line_items:
        tokens[item.category].extend([item.unit_price] * item.quantity)
    return tokens


def price(line_items: Iterable[LineItem], promotions: PromotionTable = DEFAULT_PROMOTIONS) -> PricingResult:
    """Price a cart.

    Every unit is first charged at its unit price. Then, for each category in
    the promotion table (in table order), units are paired most expensive
    first and each pair is charged at the category's pair price. Categories
    missing from the table are never discounted.
    """
    items = list(line_items)
    subtotal = sum(item.total for item in items)
    tokens = _unit_prices_by_category(items)

    discount_lines: List[DiscountLine] = []
    for category, pair_price in promotions.items():
        line = PairPromotion(category, pair_price).apply(tokens.get(category, ()))
        if line is not None:
            discount_lines.append(line)

    total_discount = sum(line.amount for line in discount_lines)
    return PricingResult(
        subtotal=subtotal,
        total_discount=total_discount,
        total_payable=max(0, subtotal - total_discount),
        discount_lines=tuple(discount_lines),
    )
