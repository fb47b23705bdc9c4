"""PIX key resolution and the sandbox placeholder payload."""

from __future__ import annotations

from typing import Optional, Protocol

from vya_settlement.core.exceptions import ValidationError
from vya_settlement.infrastructure.gateway import PIX_KEY_TYPES
from vya_settlement.infrastructure.gateway.asaas import only_digits

MOCK_PAYMENT_PREFIX = "MOCK_"


class ProfileLike(Protocol):
    cpf: Optional[str]
    email: Optional[str]
    phone: Optional[str]


def resolve_pix_key(
    pix_key: Optional[str],
    pix_key_type: Optional[str],
    profile: Optional[ProfileLike],
) -> tuple[str, str]:
    """Return ``(key, key_type)`` from the request, else from the profile (CPF, email, phone)."""
    if pix_key and pix_key_type:
        key_type = pix_key_type.strip().upper()
        if key_type not in PIX_KEY_TYPES:
            raise ValidationError(
                f"Tipo de chave PIX inválido: {pix_key_type}",
                status_code=422,
                allowed=sorted(PIX_KEY_TYPES),
            )
        key = pix_key.strip()
        if key_type in {"CPF", "CNPJ"}:
            key = only_digits(key)
        return key, key_type

    if profile is not None:
        if profile.cpf and only_digits(profile.cpf):
            return only_digits(profile.cpf), "CPF"
        if profile.email:
            return profile.email.strip(), "EMAIL"
        if profile.phone:
            return profile.phone.strip(), "PHONE"

    raise ValidationError(
        "Chave PIX não configurada no perfil. Informe pixKey e pixKeyType.",
        status_code=422,
        required=["pixKey", "pixKeyType"],
    )


def is_mock_payment(payment_id: Optional[str]) -> bool:
    return bool(payment_id) and payment_id.startswith(MOCK_PAYMENT_PREFIX)


def fallback_copy_paste(package_id: str) -> str:
    # not a valid BR Code (no CRC); placeholder for sandbox flows only
    return (
        "00020126580014br.gov.bcb.pix0136"
        f"{package_id}"
        "5204000053039865802BR5925VYA LOGISTICA6009SAO PAULO62290525"
        f"VYA{package_id[:8]}6304ABCD"
    )
