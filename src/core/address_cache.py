"""Concurrency-safe address cache with LIFO retrieval and FIFO expiry.

Addresses are kept in two structures that always change together:
- an ordered deque of CacheEntry, newest at the left (front), oldest at
  the right (back);
- a count map address -> number of live entries, so contains() is O(1)
  even when the same address was offered more than once.

Every mutation, including each background eviction sweep, runs under one
condition variable. take() waits on that same condition, so checking for
an empty store and starting to wait cannot race with a concurrent offer().
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from typing import Deque, Dict, Hashable, Optional

from core.entry import CacheEntry
from core.errors import (
    CacheClosedError,
    CacheInconsistencyError,
    CacheTimeoutError,
    TakeCancelledError,
)
from core.eviction import EvictionLoop

logger = logging.getLogger(__name__)

DEFAULT_CACHING_TIME_MS = 5000
CLEANUP_TASK_INTERVAL_MS = 5000

# Distinguishes remove() from remove(address)
_NO_ADDRESS = object()


class AddressCache:
    def __init__(
        self,
        caching_time_ms: int = DEFAULT_CACHING_TIME_MS,
        *,
        cleanup_interval_ms: int = CLEANUP_TASK_INTERVAL_MS,
    ) -> None:
        self._caching_time_ms = self._check_positive("caching_time_ms", caching_time_ms)
        self._cleanup_interval_ms = self._check_positive("cleanup_interval_ms", cleanup_interval_ms)

        self._entries: Deque[CacheEntry] = deque()
        self._counts: Dict[Hashable, int] = {}
        self._not_empty = threading.Condition(threading.Lock())
        self._closed = False

        self._eviction = EvictionLoop(
            self.evict_expired,
            interval_seconds=self._cleanup_interval_ms / 1000.0,
        )
        self._eviction.start()

        logger.debug(
            "Address cache started (ttl=%sms, cleanup every %sms)",
            self._caching_time_ms,
            self._cleanup_interval_ms,
        )

    # -- configuration -------------------------------------------------

    @property
    def caching_time_ms(self) -> int:
        return self._caching_time_ms

    @caching_time_ms.setter
    def caching_time_ms(self, value: int) -> None:
        # Entries keep their creation time, so the next sweep applies the new TTL
        checked = self._check_positive("caching_time_ms", value)
        with self._not_empty:
            self._caching_time_ms = checked

    @property
    def cleanup_interval_ms(self) -> int:
        return self._cleanup_interval_ms

    @property
    def closed(self) -> bool:
        return self._closed

    # -- public contract -----------------------------------------------

    def offer(self, address: Hashable) -> bool:
        """Add ``address`` as the most recent entry. O(1).

        Always returns True; the cache has no capacity bound. Raises
        CacheClosedError once the cache is closed, and ValueError for None,
        which peek() and remove() use to report an empty cache.
        """
        if address is None:
            raise ValueError("address must not be None")
        with self._not_empty:
            if self._closed:
                raise CacheClosedError("Address cache is closed")
            self._entries.appendleft(CacheEntry(address, time.monotonic()))
            self._counts[address] = self._counts.get(address, 0) + 1
            self._not_empty.notify()
        return True

    def contains(self, address: Hashable) -> bool:
        """Return True if at least one live entry holds ``address``. O(1)."""
        return address in self._counts

    def remove(self, address: Hashable = _NO_ADDRESS):
        """Remove one entry.

        ``remove(address)`` drops the most recent entry equal to ``address``
        and returns True, or returns False if it is not cached (O(n)).

        ``remove()`` pops the most recent entry and returns its address, or
        None if the cache is empty (O(1)).
        """
        with self._not_empty:
            if address is _NO_ADDRESS:
                return self._pop_front()
            return self._remove_first(address)

    def peek(self) -> Optional[Hashable]:
        """Return the most recently added address without removing it, or None."""
        with self._not_empty:
            if not self._entries:
                return None
            return self._entries[0].address

    def take(
        self,
        timeout: Optional[float] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Hashable:
        """Remove and return the most recent address, waiting for one if needed.

        Without ``timeout`` this waits until an address is offered. Raises
        CacheClosedError if the cache is (or gets) closed while waiting,
        CacheTimeoutError if ``timeout`` seconds pass with nothing to take,
        and TakeCancelledError once ``cancel_event`` is set and
        wake_waiters() has been called. A cancelled take never removes an
        address.
        """
        deadline = None
        if timeout is not None:
            seconds = float(timeout)
            if math.isnan(seconds):
                raise ValueError("timeout must be a number")
            deadline = time.monotonic() + max(0.0, seconds)

        with self._not_empty:
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    if self._entries:
                        # Hand the wakeup from offer() on to a live waiter
                        self._not_empty.notify()
                    raise TakeCancelledError("take() was cancelled")
                if self._entries:
                    return self._pop_front()
                if self._closed:
                    raise CacheClosedError("Address cache was closed while waiting")
                if deadline is None:
                    self._not_empty.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise CacheTimeoutError(f"No address available within {timeout} seconds")
                self._not_empty.wait(min(remaining, threading.TIMEOUT_MAX))

    def wake_waiters(self) -> None:
        """Wake every blocked take() so it re-checks its cancel event."""
        with self._not_empty:
            self._not_empty.notify_all()

    def close(self) -> None:
        """Stop eviction, drop every entry and release all waiting take() calls."""
        self._eviction.stop()

        with self._not_empty:
            if self._closed:
                return
            self._closed = True
            cleared = len(self._entries)
            self._entries.clear()
            self._counts.clear()
            self._not_empty.notify_all()

        logger.info("Address cache closed (%d entries cleared)", cleared)

    def size(self) -> int:
        """Return the number of cached entries, duplicates included. O(1)."""
        return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    def evict_expired(self) -> int:
        """Drop entries older than the TTL, oldest first.

        Entries are ordered by creation time, so the sweep stops at the first
        entry from the back that is still fresh. Returns the number evicted.
        """
        evicted = 0
        with self._not_empty:
            now = time.monotonic()
            ttl_seconds = self._caching_time_ms / 1000.0
            while self._entries and self._entries[-1].is_expired(now, ttl_seconds):
                self._discount(self._entries.pop().address)
                evicted += 1

        if evicted:
            logger.debug("Evicted %d expired address(es)", evicted)
        return evicted

    # -- python protocol -------------------------------------------------

    def __contains__(self, address: object) -> bool:
        return self.contains(address)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.size()

    def __enter__(self) -> "AddressCache":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<AddressCache {state} size={self.size()} ttl={self._caching_time_ms}ms>"

    # -- helpers (caller holds the lock) ---------------------------------

    def _pop_front(self) -> Optional[Hashable]:
        if not self._entries:
            return None
        address = self._entries.popleft().address
        self._discount(address)
        return address

    def _remove_first(self, address: Hashable) -> bool:
        if address not in self._counts:
            return False

        for index, entry in enumerate(self._entries):
            if entry.address == address:
                del self._entries[index]
                self._discount(address)
                return True

        raise CacheInconsistencyError(f"{address!r} is counted but has no entry")

    def _discount(self, address: Hashable) -> None:
        count = self._counts.get(address, 0)
        if count <= 0:
            raise CacheInconsistencyError(f"{address!r} has an entry but no count")
        if count == 1:
            del self._counts[address]
        else:
            self._counts[address] = count - 1

    @staticmethod
    def _check_positive(name: str, value: int) -> int:
        n = int(value)
        if n <= 0:
            raise ValueError(f"{name} must be positive")
        return n
