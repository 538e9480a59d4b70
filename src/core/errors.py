from __future__ import annotations


class AddressCacheError(Exception):
    """Base error for the address cache."""


class ValidationError(AddressCacheError):
    """Raised when user input is invalid."""


class CacheClosedError(AddressCacheError):
    """Raised when the cache was closed before or while an operation waited on it."""


class CacheTimeoutError(AddressCacheError):
    """Raised when a timed take() finds no address before its deadline."""


class CacheInconsistencyError(AddressCacheError):
    """Raised when the ordered store and the membership counts disagree."""


class TakeCancelledError(AddressCacheError):
    """Raised when a waiting take() is cancelled by its caller."""
