import asyncio
import ipaddress

import pytest

from core.errors import CacheTimeoutError, ValidationError
from tools import take_address as take_tool


@pytest.mark.asyncio
async def test_remove_latest_tool(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["remove_latest"]

    assert await fn() is None

    address_cache.offer(ipaddress.ip_address("127.0.0.1"))
    address_cache.offer(ipaddress.ip_address("192.168.0.1"))

    assert await fn() == "192.168.0.1"
    assert await fn() == "127.0.0.1"
    assert await fn() is None


@pytest.mark.asyncio
async def test_take_address_tool_returns_cached_address(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    address_cache.offer(ipaddress.ip_address("::1"))

    assert await fn(timeout_seconds=1.0) == "::1"
    assert address_cache.is_empty()


@pytest.mark.asyncio
async def test_take_address_tool_does_not_block_event_loop(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    async def offer_later():
        await asyncio.sleep(0.1)
        address_cache.offer(ipaddress.ip_address("192.168.0.2"))

    taken, _ = await asyncio.gather(fn(timeout_seconds=5.0), offer_later())

    assert taken == "192.168.0.2"


@pytest.mark.asyncio
async def test_take_address_tool_times_out(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    with pytest.raises(CacheTimeoutError):
        await fn(timeout_seconds=0.05)


@pytest.mark.asyncio
async def test_take_address_tool_validates_timeout(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    with pytest.raises(ValidationError):
        await fn(timeout_seconds=-1)


@pytest.mark.asyncio
async def test_take_address_tool_defaults_to_configured_timeout(monkeypatch, dummy_mcp):
    calls = []

    class FakeCache:
        def take(self, timeout=None, *, cancel_event=None):
            calls.append(timeout)
            return ipaddress.ip_address("10.0.0.9")

    take_tool.register(dummy_mcp, cache=FakeCache())

    assert await dummy_mcp.tools["take_address"]() == "10.0.0.9"
    assert calls == [take_tool.TAKE_TIMEOUT]


@pytest.mark.asyncio
async def test_take_address_tool_rejects_nan_timeout(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    with pytest.raises(ValidationError):
        await fn(timeout_seconds=float("nan"))


@pytest.mark.asyncio
async def test_take_address_tool_accepts_infinite_timeout(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    address_cache.offer(ipaddress.ip_address("10.0.0.7"))

    assert await fn(timeout_seconds=float("inf")) == "10.0.0.7"


@pytest.mark.asyncio
async def test_cancelled_take_address_tool_does_not_consume_later_offer(dummy_mcp, address_cache):
    take_tool.register(dummy_mcp, cache=address_cache)
    fn = dummy_mcp.tools["take_address"]

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(fn(timeout_seconds=2.0), 0.1)

    address_cache.offer(ipaddress.ip_address("10.0.0.1"))
    await asyncio.sleep(0.2)

    assert address_cache.size() == 1
    assert address_cache.peek() == ipaddress.ip_address("10.0.0.1")
