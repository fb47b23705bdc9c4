"""SQLAlchemy implementation for notification repository"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from vya_settlement.db.models import Notification


class SqlNotificationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, *, user_id: str, title: str, message: str | None, type: str | None) -> Notification:
        notification = Notification(user_id=user_id, title=title, message=message, type=type)
        self.session.add(notification)
        await self.session.flush()
        return notification
