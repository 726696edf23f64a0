from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .models import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600.0


def fingerprint(text: str) -> str:
    """Rolling ``h * 31 + code`` hash over the stripped text, as a signed 32-bit value."""
    value = 0
    for char in text.strip():
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return str(value)


@dataclass
class CacheEntry:
    result: AnalysisResult
    stored_at: float


class ResultCache:
    """In-memory fingerprint -> result store.

    Entries older than the TTL are dropped when they are read; there is no
    background sweep. Concurrent writers for one fingerprint: last one wins.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[AnalysisResult]:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        if self._clock() - entry.stored_at > self.ttl:
            logger.debug("Cache entry %s expired", key)
            self._entries.pop(key, None)
            self.misses += 1
            return None
        self.hits += 1
        return entry.result

    def put(self, key: str, result: AnalysisResult) -> None:
        self._entries[key] = CacheEntry(result=result, stored_at=self._clock())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, float]:
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "ttl_seconds": self.ttl,
        }
