"""
Exceptions for wallet providers.
"""


class WalletError(Exception):
    """Base exception for wallet-related errors."""
    pass


class UserCancelledError(WalletError):
    """Raised when the user dismisses the wallet connection prompt."""
    pass


class NoProviderError(WalletError):
    """Raised when no wallet provider is available."""
    pass


class ConnectionFailedError(WalletError):
    """Raised when a provider is available but did not yield an address."""
    pass
