"""Exceptions raised by fasttld."""


class FastTLDError(Exception):
    """Base class for fasttld errors."""
    pass


class SourceUnavailableError(FastTLDError):
    """Public Suffix List file missing or unreadable."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Cannot read suffix list at {path}: {reason}")


class RefreshFailedError(FastTLDError):
    """Every mirror failed while downloading the Public Suffix List."""
    pass


class RefreshNotSupportedError(FastTLDError):
    """Refresh requested for a caller-supplied suffix list."""
    pass
