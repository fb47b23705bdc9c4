"""Payment gateway factory (returns the implementation for the configured settings)."""

from __future__ import annotations

from typing import Optional

from vya_settlement.core.cache import TTLCache
from vya_settlement.core.config import Settings

from .asaas import AsaasGateway
from .base import PaymentGateway


def get_gateway(settings: Settings, cache: Optional[TTLCache] = None) -> PaymentGateway:
    return AsaasGateway(
        settings.asaas,
        cache=cache,
        customer_ttl=settings.cache.customer_ttl_seconds,
    )
