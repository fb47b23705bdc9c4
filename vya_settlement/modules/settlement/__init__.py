"""Settlement domain exports"""

from .models import ChargeResult, PaymentStatus, WebhookAck, WithdrawalResult
from .service import CHARGE_TTL, SettlementService

__all__ = [
    "CHARGE_TTL",
    "ChargeResult",
    "PaymentStatus",
    "SettlementService",
    "WebhookAck",
    "WithdrawalResult",
]
