"""Result types returned by the settlement operations."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from .pix import is_mock_payment

PROCESSABLE_EVENTS = frozenset({"PAYMENT_RECEIVED", "PAYMENT_CONFIRMED"})


@dataclass(slots=True)
class ChargeResult:
    package_id: str
    payment_id: str
    qr_image: str
    copy_paste_code: str
    expires_at: datetime
    amount: Decimal

    @property
    def is_mock(self) -> bool:
        return is_mock_payment(self.payment_id)


@dataclass(slots=True)
class WebhookAck:
    received: bool = True
    skipped: Optional[bool] = None
    found: Optional[bool] = None
    already_processed: Optional[bool] = None
    package_id: Optional[str] = None
    credited_amount: Optional[Decimal] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if key == "package_id":
                payload["packageId"] = value
            elif key == "credited_amount":
                payload["creditedAmount"] = float(value)
            else:
                payload[key] = value
        return payload


@dataclass(slots=True)
class WithdrawalResult:
    amount_withdrawn: Decimal
    transaction_id: str
    pix_key: str
    pix_key_type: str


@dataclass(slots=True)
class PaymentStatus:
    package_id: str
    status: str
    amount: Decimal
    pix_qr_code: Optional[str]
    pix_copy_paste: Optional[str]
    expires_at: Optional[datetime]
    expired: bool
