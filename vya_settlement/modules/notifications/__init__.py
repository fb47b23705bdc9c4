"""Notification domain exports"""

from .service import NotificationService

__all__ = ["NotificationService"]
