"""Read-only lookups over profiles, trips and platform configuration."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import PlatformConfig, Profile, Trip

ACTIVE_TRIP_STATUSES = ("scheduled", "active")


class SqlLookupRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_profile(self, user_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def next_trip_id(self, traveler_id: str) -> str | None:
        stmt = (
            select(Trip.id)
            .where(Trip.traveler_id == traveler_id, Trip.status.in_(ACTIVE_TRIP_STATUSES))
            .order_by(Trip.departure_date.asc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_trip_traveler_id(self, trip_id: str) -> str | None:
        stmt = select(Trip.traveler_id).where(Trip.id == trip_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_config_value(self, key: str) -> str | None:
        stmt = select(PlatformConfig.value).where(PlatformConfig.key == key)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
