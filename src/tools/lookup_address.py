"""MCP tools that inspect the cache without changing it.

Registers 'contains_address', 'peek_address' and 'cache_size'.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from mcp.server.fastmcp import FastMCP

from core.addresses import format_address, parse_address
from core.interfaces import AddressCacheProtocol


def register(mcp: FastMCP, *, cache: AddressCacheProtocol) -> None:
    @mcp.tool(name="contains_address")
    async def contains_address(address: str) -> bool:
        """Return True if the IP address has at least one live entry."""
        return cache.contains(parse_address(address))

    @mcp.tool(name="peek_address")
    async def peek_address() -> Optional[str]:
        """Return the most recently added address without removing it.

        Returns None when the cache is empty.
        """
        return format_address(cache.peek())

    @mcp.tool(name="cache_size")
    async def cache_size() -> Dict[str, Union[int, bool]]:
        """Return the number of cached entries (duplicates included)."""
        size = cache.size()
        return {"size": size, "empty": size == 0}
