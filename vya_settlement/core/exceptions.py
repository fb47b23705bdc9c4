"""Settlement error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import Any


class SettlementError(Exception):
    """Base class for errors surfaced to callers of the settlement operations."""

    status_code: int = 500

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, **self.detail}


class AuthenticationError(SettlementError):
    """Raised when no valid actor session accompanies the request."""

    status_code = 401


class ValidationError(SettlementError):
    """Raised when required input is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, *, status_code: int | None = None, **detail: Any) -> None:
        super().__init__(message, **detail)
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(SettlementError):
    status_code = 404


class ConflictError(SettlementError):
    """Raised when a state precondition no longer holds (carries the observed state)."""

    status_code = 409


class InsufficientBalanceError(SettlementError):
    status_code = 422


class UpstreamGatewayError(SettlementError):
    """Raised by the payment gateway adapter for any failed outbound call."""

    status_code = 502

    def __init__(self, message: str, *, http_status: int | None = None, body: str | None = None, **detail: Any) -> None:
        super().__init__(message, **detail)
        self.http_status = http_status
        self.body = body


class InternalError(SettlementError):
    status_code = 500


__all__ = [
    "AuthenticationError",
    "ConflictError",
    "InsufficientBalanceError",
    "InternalError",
    "NotFoundError",
    "SettlementError",
    "UpstreamGatewayError",
    "ValidationError",
]
