"""Settlement related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.core.container import ApplicationContainer, get_container
from vya_settlement.modules.settlement import SettlementService
from vya_settlement.modules.wallets import WalletService

from .database import get_db_session


def get_settlement_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> SettlementService:
    return SettlementService.with_session(
        db,
        container.gateway,
        webhook_token=container.settings.webhook_token,
    )


def get_wallet_service(db: AsyncSession = Depends(get_db_session)) -> WalletService:
    return WalletService.with_session(db)


__all__ = [
    "get_settlement_service",
    "get_wallet_service",
]
