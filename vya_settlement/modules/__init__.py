"""Domain modules: packages, wallets, notifications and the settlement orchestrator."""

from . import notifications, packages, settlement, wallets

__all__ = [
    "notifications",
    "packages",
    "settlement",
    "wallets",
]
