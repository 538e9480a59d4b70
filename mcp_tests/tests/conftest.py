import pytest

from core.address_cache import AddressCache


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def address_cache():
    # Sweep interval far beyond any test so only explicit sweeps evict
    cache = AddressCache(5000, cleanup_interval_ms=3_600_000)
    yield cache
    cache.close()
