"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CREDIT = "CREDIT"
WITHDRAWAL = "WITHDRAWAL"

PENDING = "PENDING"
COMPLETED = "COMPLETED"
FAILED = "FAILED"

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> int:
    """Convert a currency amount to integer cents, rounding half-up."""
    return int((Decimal(amount) / CENT).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_cents(cents: int | None) -> Decimal:
    return (Decimal(cents or 0) * CENT).quantize(CENT)


@dataclass(slots=True)
class WalletSnapshot:
    id: Optional[str]
    user_id: str
    available_balance: Decimal
    pending_balance: Decimal
    total_earned: Decimal
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class WalletTransactionRecord:
    id: str
    wallet_id: str
    package_id: Optional[str]
    type: str
    amount: Decimal
    status: str
    description: Optional[str]
    created_at: Optional[datetime]
