"""Domain model for packages and their payment lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

SEARCHING = "searching"
WAITING_PAYMENT = "waiting_payment"
WAITING_PICKUP = "waiting_pickup"
TRANSIT = "transit"
WAITING_DELIVERY = "waiting_delivery"
DELIVERED = "delivered"
CANCELED = "canceled"

LIFECYCLE = (SEARCHING, WAITING_PAYMENT, WAITING_PICKUP, TRANSIT, WAITING_DELIVERY, DELIVERED)


@dataclass(slots=True)
class PackageRecord:
    id: str
    sender_id: str
    trip_id: Optional[str]
    description: Optional[str]
    size: Optional[str]
    price: Decimal
    status: str
    asaas_payment_id: Optional[str]
    pix_qr_code: Optional[str]
    pix_copy_paste: Optional[str]
    expires_at: Optional[datetime]
