"""Package domain exports"""

from .models import PackageRecord
from .service import PackageService

__all__ = [
    "PackageRecord",
    "PackageService",
]
