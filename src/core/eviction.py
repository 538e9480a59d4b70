"""Background eviction loop owned by a single cache instance.

Runs a callback at a fixed rate on a daemon thread:
- The first tick happens one interval after start().
- Ticks are scheduled against the start time, so a slow sweep does not
  push every later tick back.
- stop() interrupts the sleep immediately; no tick starts after it returns.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class EvictionLoop:
    def __init__(
        self,
        callback: Callable[[], object],
        *,
        interval_seconds: float,
        name: str = "address-cache-eviction",
    ) -> None:
        interval = float(interval_seconds)
        if interval <= 0:
            raise ValueError("interval_seconds must be positive")

        self._callback = callback
        self._interval = interval
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("eviction loop already started")
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self, *, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread = self._thread
        # A sweep may call close() on its own cache; never join ourselves
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        next_tick = time.monotonic() + self._interval

        while not self._stop.wait(max(0.0, next_tick - time.monotonic())):
            try:
                self._callback()
            except Exception:
                logger.exception("Eviction sweep failed")

            next_tick += self._interval
            now = time.monotonic()
            if next_tick < now:
                # Fell behind by more than one interval: skip the missed ticks
                missed = int((now - next_tick) // self._interval) + 1
                next_tick += missed * self._interval

        logger.debug("Eviction loop %s stopped", self._name)
