"""Wallet domain service"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel
from vya_settlement.infrastructure.database.repositories.wallet_repository import SqlWalletRepository

from .models import (
    COMPLETED,
    FAILED,
    PENDING,
    WITHDRAWAL,
    WalletSnapshot,
    WalletTransactionRecord,
    from_cents,
    to_cents,
)
from .repository import WalletRepository

ZERO = Decimal("0.00")


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WalletService":
        return cls(SqlWalletRepository(session))

    async def get_snapshot(self, user_id: str) -> Optional[WalletSnapshot]:
        wallet = await self.repository.get_wallet(user_id)
        return self._to_snapshot(wallet) if wallet else None

    async def snapshot_or_empty(self, user_id: str) -> WalletSnapshot:
        snapshot = await self.get_snapshot(user_id)
        if snapshot is None:
            return WalletSnapshot(
                id=None,
                user_id=user_id,
                available_balance=ZERO,
                pending_balance=ZERO,
                total_earned=ZERO,
            )
        return snapshot

    async def credit(
        self,
        *,
        user_id: str,
        amount: Decimal,
        package_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> WalletTransactionRecord:
        """Upsert the wallet, add ``amount`` to available and earned totals and log a CREDIT row."""
        tx = await self.repository.credit(
            user_id=user_id,
            amount_cents=to_cents(amount),
            package_id=package_id,
            description=description,
        )
        return self._to_transaction(tx)

    async def debit_all(self, wallet_id: str, observed: Decimal) -> bool:
        """Zero the available balance only if it still equals ``observed``."""
        return await self.repository.compare_and_set_available(
            wallet_id, expected_cents=to_cents(observed), new_cents=0
        )

    async def restore(self, wallet_id: str, amount: Decimal) -> None:
        await self.repository.increment_available(wallet_id, to_cents(amount))

    async def open_withdrawal(self, wallet_id: str, amount: Decimal, description: str) -> WalletTransactionRecord:
        tx = await self.repository.add_transaction(
            wallet_id=wallet_id,
            type=WITHDRAWAL,
            amount_cents=to_cents(amount),
            status=PENDING,
            description=description,
        )
        return self._to_transaction(tx)

    async def complete_transaction(self, transaction_id: str) -> None:
        await self.repository.set_transaction_status(transaction_id, COMPLETED)

    async def fail_transaction(self, transaction_id: str) -> None:
        await self.repository.set_transaction_status(transaction_id, FAILED)

    async def list_transactions(self, user_id: str, limit: int = 20, offset: int = 0) -> list[WalletTransactionRecord]:
        wallet = await self.repository.get_wallet(user_id)
        if wallet is None:
            return []
        rows = await self.repository.list_transactions(wallet.id, limit, offset)
        return [self._to_transaction(row) for row in rows]

    @staticmethod
    def _to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            id=model.id,
            user_id=model.user_id,
            available_balance=from_cents(model.available_balance_cents),
            pending_balance=from_cents(model.pending_balance_cents),
            total_earned=from_cents(model.total_earned_cents),
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_transaction(model: WalletTransactionModel) -> WalletTransactionRecord:
        return WalletTransactionRecord(
            id=model.id,
            wallet_id=model.wallet_id,
            package_id=model.package_id,
            type=model.type,
            amount=from_cents(model.amount_cents),
            status=model.status,
            description=model.description,
            created_at=model.created_at,
        )
