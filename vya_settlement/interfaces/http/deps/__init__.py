"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .settlement import get_settlement_service, get_wallet_service

__all__ = [
    "get_db_session",
    "get_settlement_service",
    "get_wallet_service",
]
