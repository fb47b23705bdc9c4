"""Repository protocol for wallet operations (amounts in integer cents)."""

from __future__ import annotations

from typing import Protocol, Sequence

from vya_settlement.db.models import Wallet as WalletModel, WalletTransaction as WalletTransactionModel


class WalletRepository(Protocol):
    async def get_wallet(self, user_id: str) -> WalletModel | None:
        ...

    async def compare_and_set_available(self, wallet_id: str, *, expected_cents: int, new_cents: int) -> bool:
        ...

    async def increment_available(self, wallet_id: str, delta_cents: int) -> None:
        ...

    async def credit(
        self,
        *,
        user_id: str,
        amount_cents: int,
        package_id: str | None,
        description: str | None,
    ) -> WalletTransactionModel:
        ...

    async def add_transaction(
        self,
        *,
        wallet_id: str,
        type: str,
        amount_cents: int,
        status: str,
        description: str | None,
        package_id: str | None = None,
    ) -> WalletTransactionModel:
        ...

    async def set_transaction_status(self, transaction_id: str, status: str) -> None:
        ...

    async def list_transactions(self, wallet_id: str, limit: int, offset: int) -> Sequence[WalletTransactionModel]:
        ...
