"""Payment gateway adapter interface (decoupled from any provider)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol

PIX_KEY_TYPES = frozenset({"CPF", "CNPJ", "EMAIL", "PHONE", "EVP"})


@dataclass(slots=True)
class PixQrCode:
    encoded_image: str
    payload: str
    expiration_date: Optional[str] = None


@dataclass(slots=True)
class TransferReceipt:
    id: str
    status: str
    value: Decimal


class PaymentGateway(Protocol):
    async def find_or_create_customer(
        self,
        *,
        name: str,
        cpf_cnpj: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> str:
        """Return the gateway customer id for a government id, creating it if needed."""
        ...

    async def create_pix_charge(
        self,
        *,
        customer_id: Optional[str],
        amount: Decimal,
        description: str,
        external_reference: str,
        due_date: date,
    ) -> str:
        """Create a PIX charge and return its id."""
        ...

    async def get_pix_qr_code(self, charge_id: str) -> PixQrCode:
        ...

    async def create_transfer(
        self,
        *,
        amount: Decimal,
        pix_key: str,
        pix_key_type: str,
        description: str,
    ) -> TransferReceipt:
        """Push a PIX payout to the given key."""
        ...
