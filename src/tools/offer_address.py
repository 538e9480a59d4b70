"""MCP tools that add and remove addresses.

Registers 'offer_address' and 'remove_address', which parse the textual
address and delegate to the injected cache.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from core.addresses import parse_address
from core.interfaces import AddressCacheProtocol


def register(mcp: FastMCP, *, cache: AddressCacheProtocol) -> None:
    @mcp.tool(name="offer_address")
    async def offer_address(address: str) -> bool:
        """Add an IP address to the cache as its most recent entry.

        Params:
          - address: IPv4 or IPv6 address text (e.g. "127.0.0.1", "::1").

        Returns:
          True once the address is cached. The entry expires after the
          configured caching time unless it is taken or removed first.

        Raises:
          ValidationError for a missing/invalid address; CacheClosedError
          if the cache has been closed.
        """
        return cache.offer(parse_address(address))

    @mcp.tool(name="remove_address")
    async def remove_address(address: str) -> bool:
        """Remove the most recent entry for an IP address.

        Returns False when the address is not cached. Duplicates are
        removed one at a time.
        """
        return cache.remove(parse_address(address))
