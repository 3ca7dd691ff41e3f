"""Startup configuration read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from catalog import Category
from promotions import DEFAULT_PAIR_PRICES, PromotionTable, promotion_table

ENV_PREFIX = "CART_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    catalog_path: Optional[Path]
    pair_prices: Mapping[Category, int]
    log_level: str = "WARNING"

    def promotions(self) -> PromotionTable:
        return promotion_table(self.pair_prices)


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(environ: Mapping[str, str] = os.environ) -> Settings:
    catalog_path = environ.get(f"{ENV_PREFIX}CATALOG_PATH")
    pair_prices = {
        category: _int_env(environ, f"{ENV_PREFIX}PROMO_{category.value.upper()}", default)
        for category, default in DEFAULT_PAIR_PRICES.items()
    }
    log_level = environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )
    settings = Settings(
        catalog_path=Path(catalog_path) if catalog_path else None,
        pair_prices=pair_prices,
        log_level=log_level,
    )
    settings.promotions()  # raises on negative pair prices
    return settings
