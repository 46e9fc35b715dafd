from __future__ import annotations

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Optional, Tuple

from .results import ExtractionResult


def content_key(data: bytes, *parts: object) -> str:
    """SHA-1 of the payload plus whatever call parameters shape the result."""
    digest = hashlib.sha1(bytes(data))
    for part in parts:
        digest.update(b"\x00")
        digest.update(str(part).encode("utf-8", "ignore"))
    return digest.hexdigest()


class TTLCache:
    """In-memory store of extraction results keyed by ``content_key``.

    Entries expire ``default_ttl`` seconds after they are stored. With
    ``max_size`` set, expired entries are purged first and then the oldest
    insertions, so a burst of distinct payloads cannot grow it unbounded.
    """

    def __init__(self, default_ttl: float = 600.0, max_size: int | None = None) -> None:
        self._default_ttl = default_ttl
        self._max_size = max_size
        self._lock = threading.Lock()
        self._store: "OrderedDict[str, Tuple[float, ExtractionResult]]" = OrderedDict()

    def _now(self) -> float:
        return time.time()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: str) -> Optional[ExtractionResult]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None
            expiry, result = item
            if expiry < self._now():
                del self._store[key]
                return None
            return result

    def set(self, key: str, result: ExtractionResult) -> None:
        with self._lock:
            now = self._now()
            self._store.pop(key, None)
            self._store[key] = (now + self._default_ttl, result)
            if self._max_size is None:
                return
            for stale in [k for k, (expiry, _) in self._store.items() if expiry < now]:
                del self._store[stale]
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
