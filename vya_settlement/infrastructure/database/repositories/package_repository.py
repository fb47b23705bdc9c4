"""SQLAlchemy implementation for package repository"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Package


class SqlPackageRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, package_id: str) -> Package | None:
        stmt = select(Package).where(Package.id == package_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_payment_id(self, payment_id: str) -> Package | None:
        stmt = (
            select(Package)
            .where(Package.asaas_payment_id == payment_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_status(self, package_id: str) -> str | None:
        stmt = select(Package.status).where(Package.id == package_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def transition(self, package_id: str, *, expected_status: str, values: dict[str, Any]) -> bool:
        stmt = (
            update(Package)
            .where(Package.id == package_id, Package.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
