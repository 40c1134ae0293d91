"""
sbtc_paylink - shareable payment links for sBTC on Stacks.

The core (:mod:`~sbtc_paylink.codec` and :mod:`~sbtc_paylink.validation`) is
pure and environment-agnostic. Network access lives in
:mod:`~sbtc_paylink.explorer`; wallet connection in :mod:`~sbtc_paylink.wallet`.
"""
from .codec import encode, decode, generate_share_text, DEFAULT_BASE_URL
from .config import NetworkConfig
from .exceptions import (
    PaylinkError, InvalidAmountError, InvalidAddressError, MalformedPaymentUrlError
)
from .models import (
    PaymentIntent, NetworkClass, AddressBalance, Transaction, TransactionList,
    NetworkInfo, BalanceCheck
)
from .validation import (
    is_valid_address, is_valid_amount, validate_address, validate_amount,
    validate_payment_intent, format_amount, shorten_address, network_class_for,
    format_stx_amount, stx_to_micro_stx
)
from .version import __version__

__all__ = [
    "encode",
    "decode",
    "generate_share_text",
    "DEFAULT_BASE_URL",
    "NetworkConfig",
    "PaylinkError",
    "InvalidAmountError",
    "InvalidAddressError",
    "MalformedPaymentUrlError",
    "PaymentIntent",
    "NetworkClass",
    "AddressBalance",
    "Transaction",
    "TransactionList",
    "NetworkInfo",
    "BalanceCheck",
    "is_valid_address",
    "is_valid_amount",
    "validate_address",
    "validate_amount",
    "validate_payment_intent",
    "format_amount",
    "shorten_address",
    "network_class_for",
    "format_stx_amount",
    "stx_to_micro_stx",
    "__version__",
]
