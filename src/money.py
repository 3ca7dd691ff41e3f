"""Chilean peso formatting shared by discount labels and the CLI."""
from __future__ import annotations


def format_clp(amount: int) -> str:
    # es-CL style: no decimals, "." as thousands separator, "$" prefix.
    whole = round(amount)
    sign = "-" if whole < 0 else ""
    return f"{sign}${abs(whole):,}".replace(",", ".")
