"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Wallet, WalletTransaction


class SqlWalletRepository:
    """Wallet rows keep money as integer cents; every balance change is a single UPDATE."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, user_id: str) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.user_id == user_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def compare_and_set_available(self, wallet_id: str, *, expected_cents: int, new_cents: int) -> bool:
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id, Wallet.available_balance_cents == expected_cents)
            .values(available_balance_cents=new_cents)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def increment_available(self, wallet_id: str, delta_cents: int) -> None:
        stmt = (
            update(Wallet)
            .where(Wallet.id == wallet_id)
            .values(available_balance_cents=Wallet.available_balance_cents + delta_cents)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def _increment_earnings(self, user_id: str, delta_cents: int) -> str | None:
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(
                available_balance_cents=Wallet.available_balance_cents + delta_cents,
                total_earned_cents=Wallet.total_earned_cents + delta_cents,
            )
            .execution_options(synchronize_session=False)
            .returning(Wallet.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(
        self,
        *,
        user_id: str,
        amount_cents: int,
        package_id: str | None,
        description: str | None,
    ) -> WalletTransaction:
        """Upsert + increment + CREDIT row in the caller's transaction.

        A concurrent first credit that wins the insert rolls this transaction
        back and the increment is retried against the row it created.
        """
        wallet_id = await self._increment_earnings(user_id, amount_cents)
        if wallet_id is None:
            wallet = Wallet(
                user_id=user_id,
                available_balance_cents=amount_cents,
                pending_balance_cents=0,
                total_earned_cents=amount_cents,
            )
            self.session.add(wallet)
            try:
                await self.session.flush()
                wallet_id = wallet.id
            except IntegrityError:
                await self.session.rollback()
                wallet_id = await self._increment_earnings(user_id, amount_cents)
                if wallet_id is None:
                    raise

        return await self.add_transaction(
            wallet_id=wallet_id,
            type="CREDIT",
            amount_cents=amount_cents,
            status="COMPLETED",
            description=description,
            package_id=package_id,
        )

    async def add_transaction(
        self,
        *,
        wallet_id: str,
        type: str,
        amount_cents: int,
        status: str,
        description: str | None,
        package_id: str | None = None,
    ) -> WalletTransaction:
        tx = WalletTransaction(
            wallet_id=wallet_id,
            package_id=package_id,
            type=type,
            amount_cents=amount_cents,
            status=status,
            description=description,
        )
        self.session.add(tx)
        await self.session.flush()
        return tx

    async def set_transaction_status(self, transaction_id: str, status: str) -> None:
        stmt = (
            update(WalletTransaction)
            .where(WalletTransaction.id == transaction_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def list_transactions(self, wallet_id: str, limit: int, offset: int) -> Sequence[WalletTransaction]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.wallet_id == wallet_id)
            .order_by(desc(WalletTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
