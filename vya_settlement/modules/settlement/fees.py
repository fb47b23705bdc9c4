"""Platform fee split."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

logger = logging.getLogger(__name__)

PLATFORM_FEE_KEY = "platformFeePercent"
DEFAULT_PLATFORM_FEE_PERCENT = Decimal("20")
CENT = Decimal("0.01")


def parse_fee_percent(raw: Optional[str]) -> Decimal:
    if raw is None or str(raw).strip() == "":
        return DEFAULT_PLATFORM_FEE_PERCENT
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        logger.warning("Invalid %s value %r, using default", PLATFORM_FEE_KEY, raw)
        return DEFAULT_PLATFORM_FEE_PERCENT
    if not value.is_finite():
        logger.warning("Invalid %s value %r, using default", PLATFORM_FEE_KEY, raw)
        return DEFAULT_PLATFORM_FEE_PERCENT
    return value


def traveler_amount(price: Decimal, fee_percent: Decimal) -> Decimal:
    """Share of ``price`` credited to the traveler, rounded half-up to cents."""
    amount = Decimal(price) * (Decimal(1) - Decimal(fee_percent) / Decimal(100))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
