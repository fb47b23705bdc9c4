"""Notification emitter for settlement events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Notification as NotificationModel
from vya_settlement.infrastructure.database.repositories.notification_repository import SqlNotificationRepository

SHIPMENT = "shipment"


class NotificationRepository(Protocol):
    async def create(self, *, user_id: str, title: str, message: str | None, type: str | None) -> NotificationModel:
        ...


@dataclass(slots=True)
class NotificationService:
    repository: NotificationRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "NotificationService":
        return cls(SqlNotificationRepository(session))

    async def notify(self, user_id: str, title: str, message: Optional[str] = None, type: str = SHIPMENT) -> str:
        notification = await self.repository.create(user_id=user_id, title=title, message=message, type=type)
        return notification.id

    async def payment_confirmed(self, sender_id: str) -> str:
        return await self.notify(
            sender_id,
            "Pagamento Confirmado! 🎉",
            "Seu PIX foi recebido. O viajante está indo buscar seu pacote.",
        )
