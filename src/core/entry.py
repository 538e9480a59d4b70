"""Immutable cache entry pairing an address with its creation time."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Hashable


@dataclass(frozen=True, slots=True)
class CacheEntry:
    # Store creation time, not expiry, so the TTL can change at runtime
    address: Hashable
    created_at: float = field(default_factory=time.monotonic)

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) > ttl_seconds
