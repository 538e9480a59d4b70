"""MCP tools that retrieve and remove the most recent address.

Registers 'remove_latest' (never waits) and 'take_address' (waits for an
address up to a bounded timeout). The blocking wait runs in a worker
thread so the server's event loop keeps serving other tools, including
the offer that will wake it. Cancelling the tool call cancels the wait;
an address the worker took in the meantime goes back into the cache.
"""

from __future__ import annotations

import asyncio
import logging
import math
import threading
from typing import Optional

from mcp.server.fastmcp import FastMCP

from config import TAKE_TIMEOUT
from core.addresses import format_address
from core.errors import CacheClosedError, ValidationError
from core.interfaces import AddressCacheProtocol

logger = logging.getLogger(__name__)


def register(mcp: FastMCP, *, cache: AddressCacheProtocol) -> None:
    def _give_back(worker: "asyncio.Future") -> None:
        # Runs once the abandoned worker finishes
        if worker.cancelled() or worker.exception() is not None:
            return
        try:
            cache.offer(worker.result())
        except CacheClosedError:
            logger.warning("Dropped address taken by a cancelled call: cache is closed")

    @mcp.tool(name="remove_latest")
    async def remove_latest() -> Optional[str]:
        """Remove and return the most recently added address, or None if empty."""
        return format_address(cache.remove())

    @mcp.tool(name="take_address")
    async def take_address(timeout_seconds: float = TAKE_TIMEOUT) -> str:
        """Remove and return the most recent address, waiting if the cache is empty.

        Params:
          - timeout_seconds: how long to wait for an address (default from config).

        Returns:
          The address text.

        Raises:
          ValidationError for a negative or NaN timeout; CacheTimeoutError
          when no address arrives in time; CacheClosedError if the cache is
          closed.
        """
        timeout = float(timeout_seconds)
        if math.isnan(timeout) or timeout < 0:
            raise ValidationError("timeout_seconds must be a non-negative number")

        cancel = threading.Event()
        worker = asyncio.ensure_future(asyncio.to_thread(cache.take, timeout, cancel_event=cancel))
        try:
            address = await asyncio.shield(worker)
        except asyncio.CancelledError:
            cancel.set()
            cache.wake_waiters()
            worker.add_done_callback(_give_back)
            raise

        return format_address(address)
