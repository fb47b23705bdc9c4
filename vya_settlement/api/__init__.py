from fastapi import APIRouter

from vya_settlement.interfaces.http.routers import payments, wallet, webhooks


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(payments.router, prefix="/payments", tags=["Pagamentos"])
    router.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])
    router.include_router(wallet.router, prefix="/wallet", tags=["Carteira"])
    return router


__all__ = [
    "create_api_router",
]
