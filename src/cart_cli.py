#!/usr/bin/env python3
"""
Price a cart from the command line.

Loads the catalog (CART_CATALOG_PATH or --catalog, otherwise the built-in
demo assortment), applies every --add and then every --remove to an empty
cart, and prints the priced cart.

Env:
  CART_CATALOG_PATH, CART_PROMO_FIGURAS, CART_PROMO_POLERAS,
  CART_PROMO_POSTERS, CART_LOG_LEVEL
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from cart import CartStore
from catalog import Catalog, CatalogError, load_catalog
from checkout import CartSummary, CartView
from money import format_clp
from settings import LOG_LEVELS, load_settings


def render_summary(summary: CartSummary) -> str:
    if summary.is_empty:
        return "Empty cart\nTotal: " + format_clp(0)

    rows: List[str] = []
    for line in summary.lines:
        rows.append(
            f"{line.product.title}  {format_clp(line.product.price)} x {line.quantity}"
            f"  = {format_clp(line.line_total)}"
        )
    pricing = summary.pricing
    rows.append(f"Items: {summary.item_count}")
    rows.append(f"Subtotal: {format_clp(pricing.subtotal)}")
    if pricing.has_discounts:
        rows.append("Discounts:")
        for discount in pricing.discount_lines:
            rows.append(f"  {discount.label}  - {format_clp(discount.amount)}")
    else:
        rows.append("No discounts applied")
    rows.append(f"Total: {format_clp(pricing.total_payable)}")
    return "\n".join(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--catalog", type=Path, default=None, help="Catalog JSON file")
    parser.add_argument("--add", type=int, action="append", default=[], metavar="ID")
    parser.add_argument("--remove", type=int, action="append", default=[], metavar="ID")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as exc:
        raise SystemExit(str(exc))

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    catalog_path = args.catalog or settings.catalog_path
    try:
        catalog = load_catalog(catalog_path) if catalog_path else Catalog()
    except CatalogError as exc:
        raise SystemExit(f"Could not load products: {exc}")

    store = CartStore()
    view = CartView(store, catalog, settings.promotions())
    try:
        for product_id in args.add:
            store.add_one(product_id)
        for product_id in args.remove:
            store.remove_one(product_id)
        print(render_summary(view.refresh()))
    finally:
        view.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
