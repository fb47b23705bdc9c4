"""Read-only lookups the settlement operations depend on."""

from __future__ import annotations

from typing import Protocol

from vya_settlement.db.models import Profile as ProfileModel


class LookupRepository(Protocol):
    async def get_profile(self, user_id: str) -> ProfileModel | None:
        ...

    async def next_trip_id(self, traveler_id: str) -> str | None:
        ...

    async def get_trip_traveler_id(self, trip_id: str) -> str | None:
        ...

    async def get_config_value(self, key: str) -> str | None:
        ...
