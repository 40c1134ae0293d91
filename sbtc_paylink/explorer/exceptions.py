"""
Exceptions for the block-explorer client.
"""
from typing import Optional


class ExplorerError(Exception):
    """Base exception for block-explorer errors."""
    pass


class ExplorerConnectionError(ExplorerError):
    """Raised when an explorer endpoint cannot be reached."""
    pass


class ExplorerResponseError(ExplorerError):
    """Raised when an explorer endpoint answers with a non-success status or bad body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ExplorerTimeoutError(ExplorerError):
    """Raised when an explorer request times out."""
    pass
