"""
Game Price Resolver — Price Transformer

The shop always charges 40% of the original storefront price (a fixed
60% markdown), uniformly across Steam and PlayStation, games and DLC.
Currency passes through untouched; there is no FX conversion here.

All money values use Decimal, never float.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import structlog

from gameprice.config import settings

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")


def to_decimal_price(value: Any) -> Decimal:
    """
    Coerce a storefront price into a non-negative two-place Decimal.

    Accepts Decimal, int, float or a numeric string. Empty values become
    0.00.

    Raises:
        ValueError: If the value is not numeric or is negative.
    """
    if value is None or value == "":
        return Decimal("0.00")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"price must be numeric, got {value!r}") from e
    if not price.is_finite():
        raise ValueError(f"price must be finite, got {value!r}")
    if price < Decimal("0"):
        raise ValueError(f"price must be non-negative, got {value}")
    return price.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def calculate_discounted_price(
    price: Decimal,
    rate: Decimal | None = None,
) -> Decimal:
    """
    Apply the markdown policy to an original price.

    Formula: discounted = price × 0.4, cut to two decimal places.
    Truncation keeps the published example (59.99 → 23.99) exact.

    Args:
        price: Original storefront price (non-negative).
        rate: Share of the original price the shop charges. Defaults to
            settings.MARKDOWN_RATE.

    Returns:
        Discounted price as a two-place Decimal.

    Raises:
        ValueError: If price is negative.

    Examples:
        >>> calculate_discounted_price(Decimal("59.99"))
        Decimal('23.99')
    """
    if price < Decimal("0"):
        raise ValueError(f"price must be non-negative, got {price}")

    effective_rate = settings.MARKDOWN_RATE if rate is None else rate
    discounted = (price * effective_rate).quantize(_TWO_DP, rounding=ROUND_DOWN)

    logger.debug(
        "markdown_applied",
        price=str(price),
        rate=str(effective_rate),
        discounted=str(discounted),
        source="pricing",
    )
    return discounted
