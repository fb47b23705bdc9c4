"""Root logger configuration."""

from __future__ import annotations

import logging

from vya_settlement.core.config import LoggingSettings

_configured = False


def configure_logging(settings: LoggingSettings) -> None:
    global _configured
    if _configured:
        return
    logging.basicConfig(level=settings.level.upper(), format=settings.format)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


__all__ = ["configure_logging"]
