"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from vya_settlement.core.cache import TTLCache
from vya_settlement.core.config import Settings, get_settings
from vya_settlement.infrastructure.database.session import get_engine
from vya_settlement.infrastructure.gateway import PaymentGateway, get_gateway


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    cache: TTLCache = field(default_factory=TTLCache)
    gateway: PaymentGateway | None = None

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, gateway) are initialised."""
        get_engine()
        if self.gateway is None:
            self.gateway = get_gateway(self.settings, self.cache)


@lru_cache()
def get_container() -> ApplicationContainer:
    settings = get_settings()
    container = ApplicationContainer(
        settings=settings,
        cache=TTLCache(default_ttl=settings.cache.customer_ttl_seconds),
    )
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
