"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (cache
TTL, eviction interval, tool wait limits and log level).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Cache lifetime
CACHING_TIME_MS = _env_int("CACHING_TIME_MS", 5000)
CLEANUP_INTERVAL_MS = _env_int("CLEANUP_INTERVAL_MS", 5000)

# Tools
TAKE_TIMEOUT = _env_float("TAKE_TIMEOUT", 30.0)

# Logging (stderr; stdout is the MCP stdio transport)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
