"""Repository interface for packages."""

from __future__ import annotations

from typing import Any, Protocol

from vya_settlement.db.models import Package as PackageModel


class PackageRepository(Protocol):
    async def get(self, package_id: str) -> PackageModel | None:
        ...

    async def get_by_payment_id(self, payment_id: str) -> PackageModel | None:
        ...

    async def get_status(self, package_id: str) -> str | None:
        ...

    async def transition(self, package_id: str, *, expected_status: str, values: dict[str, Any]) -> bool:
        ...
