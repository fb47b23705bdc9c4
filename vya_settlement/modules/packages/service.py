"""Package domain service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Package as PackageModel
from vya_settlement.infrastructure.database.repositories.package_repository import SqlPackageRepository

from .models import SEARCHING, WAITING_PAYMENT, WAITING_PICKUP, PackageRecord
from .repository import PackageRepository


@dataclass(slots=True)
class PackageService:
    repository: PackageRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PackageService":
        return cls(SqlPackageRepository(session))

    async def get(self, package_id: str) -> PackageRecord | None:
        package = await self.repository.get(package_id)
        return self._to_domain(package) if package else None

    async def get_by_payment_id(self, payment_id: str) -> PackageRecord | None:
        package = await self.repository.get_by_payment_id(payment_id)
        return self._to_domain(package) if package else None

    async def current_status(self, package_id: str) -> str | None:
        return await self.repository.get_status(package_id)

    async def mark_waiting_payment(
        self,
        package_id: str,
        *,
        payment_id: str,
        qr_code: str,
        copy_paste: str,
        expires_at: datetime,
        trip_id: Optional[str] = None,
    ) -> bool:
        values = {
            "status": WAITING_PAYMENT,
            "asaas_payment_id": payment_id,
            "pix_qr_code": qr_code,
            "pix_copy_paste": copy_paste,
            "expires_at": expires_at,
        }
        if trip_id:
            values["trip_id"] = trip_id
        return await self.repository.transition(package_id, expected_status=SEARCHING, values=values)

    async def mark_waiting_pickup(self, package_id: str) -> bool:
        return await self.repository.transition(
            package_id,
            expected_status=WAITING_PAYMENT,
            values={"status": WAITING_PICKUP},
        )

    @staticmethod
    def _to_domain(model: PackageModel) -> PackageRecord:
        return PackageRecord(
            id=model.id,
            sender_id=model.sender_id,
            trip_id=model.trip_id,
            description=model.description,
            size=model.size,
            price=Decimal(model.price),
            status=model.status,
            asaas_payment_id=model.asaas_payment_id,
            pix_qr_code=model.pix_qr_code,
            pix_copy_paste=model.pix_copy_paste,
            expires_at=model.expires_at,
        )
