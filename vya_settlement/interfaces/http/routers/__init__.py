"""HTTP routers."""

from . import payments, wallet, webhooks

__all__ = ["payments", "wallet", "webhooks"]
