"""Core protocol and interface definitions.

Defines the AddressCacheProtocol used by the MCP tools so they can be
exercised against any cache implementation with the same contract.
"""

from __future__ import annotations

import threading
from typing import Hashable, Optional, Protocol


class AddressCacheProtocol(Protocol):
    """Contract for a TTL-bounded, LIFO address cache."""
    def offer(self, address: Hashable) -> bool:
        ...

    def contains(self, address: Hashable) -> bool:
        ...

    def remove(self, address: Hashable = ...):
        ...

    def peek(self) -> Optional[Hashable]:
        ...

    def take(
        self,
        timeout: Optional[float] = None,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Hashable:
        ...

    def wake_waiters(self) -> None:
        ...

    def close(self) -> None:
        ...

    def size(self) -> int:
        ...

    def is_empty(self) -> bool:
        ...
