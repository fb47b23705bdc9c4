"""SQLAlchemy-backed repository implementations."""

from .lookup_repository import SqlLookupRepository
from .notification_repository import SqlNotificationRepository
from .package_repository import SqlPackageRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlLookupRepository",
    "SqlNotificationRepository",
    "SqlPackageRepository",
    "SqlWalletRepository",
]
