"""
Wallet module for the sBTC payment-link SDK.

Wallet discovery and connection are host-specific; this module only defines
the provider contract, the connection strategy, and a stub for development.
"""
from .exceptions import WalletError, UserCancelledError, NoProviderError, ConnectionFailedError
from .provider import (
    WalletConnection, WalletProvider, ShowConnectProvider, ConnectProvider,
    RequestProvider, DirectAddressProvider, DEFAULT_STRATEGY,
    connect_wallet, providers_for, extract_address
)
from .stub import StubWalletProvider, TransferReceipt, MOCK_ADDRESS

__all__ = [
    'WalletConnection',
    'WalletProvider',
    'ShowConnectProvider',
    'ConnectProvider',
    'RequestProvider',
    'DirectAddressProvider',
    'StubWalletProvider',
    'TransferReceipt',
    'DEFAULT_STRATEGY',
    'MOCK_ADDRESS',
    'connect_wallet',
    'providers_for',
    'extract_address',
    'WalletError',
    'UserCancelledError',
    'NoProviderError',
    'ConnectionFailedError',
]
