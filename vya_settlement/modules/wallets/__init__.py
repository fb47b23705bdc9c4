"""Wallet domain exports"""

from .models import WalletSnapshot, WalletTransactionRecord
from .service import WalletService

__all__ = [
    "WalletSnapshot",
    "WalletTransactionRecord",
    "WalletService",
]
