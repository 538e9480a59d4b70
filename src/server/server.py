"""Server bootstrap for the address cache MCP service.

Creates the FastMCP instance and the shared AddressCache, registers the
cache tools, and starts the MCP server (stdio transport). The cache is
closed when the server stops.
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from config import CACHING_TIME_MS, CLEANUP_INTERVAL_MS, LOG_LEVEL
from core.address_cache import AddressCache

from tools.lookup_address import register as register_lookup_address
from tools.offer_address import register as register_offer_address
from tools.take_address import register as register_take_address

logger = logging.getLogger(__name__)

mcp = FastMCP("address-cache-mcp")

cache = AddressCache(CACHING_TIME_MS, cleanup_interval_ms=CLEANUP_INTERVAL_MS)


def register_tools() -> None:
    register_offer_address(mcp, cache=cache)
    register_lookup_address(mcp, cache=cache)
    register_take_address(mcp, cache=cache)


register_tools()


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()
    logger.info("Starting address-cache-mcp (ttl=%sms)", cache.caching_time_ms)
    try:
        mcp.run(transport="stdio")
    finally:
        cache.close()


if __name__ == "__main__":
    main()
