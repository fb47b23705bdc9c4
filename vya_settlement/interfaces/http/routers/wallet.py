"""Traveler wallet endpoints."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from vya_settlement.core.security import get_current_actor
from vya_settlement.interfaces.http.deps import get_settlement_service, get_wallet_service
from vya_settlement.modules.settlement import SettlementService
from vya_settlement.modules.wallets import WalletService
from vya_settlement.schemas import (
    TokenData,
    WalletSnapshotResponse,
    WalletTransactionListResponse,
    WalletTransactionResponse,
    WithdrawRequest,
    WithdrawResponse,
)

router = APIRouter()


@router.get("", response_model=WalletSnapshotResponse, summary="Saldo da carteira")
async def get_wallet_snapshot(
    actor: TokenData = Depends(get_current_actor),
    wallet_service: WalletService = Depends(get_wallet_service),
) -> WalletSnapshotResponse:
    snapshot = await wallet_service.snapshot_or_empty(actor.actor_id)
    return WalletSnapshotResponse(
        available_balance=float(snapshot.available_balance),
        pending_balance=float(snapshot.pending_balance),
        total_earned=float(snapshot.total_earned),
        updated_at=snapshot.updated_at,
    )


@router.get(
    "/transactions",
    response_model=WalletTransactionListResponse,
    summary="Extrato da carteira",
)
async def list_wallet_transactions(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    actor: TokenData = Depends(get_current_actor),
    wallet_service: WalletService = Depends(get_wallet_service),
) -> WalletTransactionListResponse:
    records = await wallet_service.list_transactions(actor.actor_id, limit, offset)
    transactions = [
        WalletTransactionResponse(
            id=record.id,
            type=record.type,
            amount=float(record.amount),
            status=record.status,
            description=record.description,
            package_id=record.package_id,
            created_at=record.created_at,
        )
        for record in records
    ]
    return WalletTransactionListResponse(transactions=transactions)


@router.post("/withdraw", response_model=WithdrawResponse, summary="Sacar saldo via PIX")
async def withdraw(
    payload: Optional[WithdrawRequest] = Body(default=None),
    actor: TokenData = Depends(get_current_actor),
    service: SettlementService = Depends(get_settlement_service),
) -> WithdrawResponse:
    payload = payload or WithdrawRequest()
    result = await service.withdraw(actor.actor_id, payload.pix_key, payload.pix_key_type)
    return WithdrawResponse(
        amount=float(result.amount_withdrawn),
        transaction_id=result.transaction_id,
        message=f"Saque de R$ {result.amount_withdrawn:.2f} iniciado com sucesso.",
    )
