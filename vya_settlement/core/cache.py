"""In-memory TTL cache owned by the application container."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(slots=True)
class _Entry:
    value: Any
    stored_at: float


class TTLCache:
    """Key/value memo with per-read TTL and explicit invalidation.

    Instances are passed explicitly to the collaborators that need them;
    there is no module-level store.
    """

    def __init__(self, default_ttl: float = 60.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._store: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, ttl: Optional[float] = None) -> Any | None:
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at > ttl:
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = _Entry(value=value, stored_at=self._clock())

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["TTLCache"]
