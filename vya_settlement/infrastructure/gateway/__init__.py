"""PIX payment gateway (base interface + implementations)."""

from .asaas import AsaasGateway
from .base import PIX_KEY_TYPES, PaymentGateway, PixQrCode, TransferReceipt
from .factory import get_gateway

__all__ = [
    "AsaasGateway",
    "PIX_KEY_TYPES",
    "PaymentGateway",
    "PixQrCode",
    "TransferReceipt",
    "get_gateway",
]
