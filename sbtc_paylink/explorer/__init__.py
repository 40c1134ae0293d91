"""
Block-explorer collaborators for the sBTC payment-link SDK.

These modules perform network I/O and are kept apart from the pure codec
and validators.
"""
from .client import ExplorerClient
from .monitor import PaymentMonitor
from .exceptions import (
    ExplorerError, ExplorerConnectionError, ExplorerResponseError, ExplorerTimeoutError
)

__all__ = [
    'ExplorerClient',
    'PaymentMonitor',
    'ExplorerError',
    'ExplorerConnectionError',
    'ExplorerResponseError',
    'ExplorerTimeoutError',
]
