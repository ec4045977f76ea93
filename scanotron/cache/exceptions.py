class CacheError(Exception):
    """Base exception for pattern cache errors."""


class CacheWriteError(CacheError):
    """Raised when a pattern cannot be written to its sidecar file."""
