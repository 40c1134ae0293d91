"""
Address and amount validation plus display formatting.

Everything in this module is pure: no I/O, no logging, no shared state.
Online corroboration of an address belongs to
:class:`sbtc_paylink.explorer.ExplorerClient`, never to these checks.
"""
import math
import re
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Optional, Union

from .exceptions import InvalidAmountError, InvalidAddressError
from .models import NetworkClass

ADDRESS_LENGTH = 40
ADDRESS_PATTERN = re.compile(r"(SP|ST|SM)[0-9A-Z]{38}")

# Smallest representable unit of the payment asset (satoshi-like)
MIN_AMOUNT = 1e-8
AMOUNT_DECIMALS = 8

MICRO_STX_PER_STX = 1_000_000

# Plain decimal or exponent notation; no digit-group underscores, no inf/nan
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# Largest decimal exponent a finite float can carry
MAX_AMOUNT_EXPONENT = 308

Number = Union[str, int, float]


def is_valid_address(candidate: Any) -> bool:
    """
    Check whether a string is a syntactically valid Stacks address.

    Args:
        candidate: Value to check

    Returns:
        True for a 40 character string starting with SP, ST or SM followed
        by 38 alphanumerics (case-insensitive), False otherwise
    """
    if not isinstance(candidate, str) or len(candidate) != ADDRESS_LENGTH:
        return False
    return ADDRESS_PATTERN.fullmatch(candidate.upper()) is not None


def network_class_for(address: Any) -> Optional[NetworkClass]:
    """Network class for a valid address, None for anything else"""
    if not is_valid_address(address):
        return None
    return NetworkClass(address[:2].upper())


def _parse_amount(amount: Any) -> Optional[float]:
    if isinstance(amount, bool):
        return None
    if not isinstance(amount, (int, float, str)):
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if not _DECIMAL_RE.fullmatch(amount):
            return None
    try:
        value = float(amount)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_amount(amount: Any) -> float:
    """
    Validate a raw payment amount.

    Args:
        amount: Decimal string or number

    Returns:
        The parsed amount

    Raises:
        InvalidAmountError: If the amount is missing, not a finite number,
            not greater than zero, or below the 1e-8 floor
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise InvalidAmountError("Amount is required")

    value = _parse_amount(amount)
    if value is None or value <= 0:
        raise InvalidAmountError("Amount must be a valid number greater than 0")
    if value < MIN_AMOUNT:
        raise InvalidAmountError("Amount must be at least 0.00000001 sBTC")
    return value


def is_valid_amount(amount: Any) -> bool:
    try:
        validate_amount(amount)
    except InvalidAmountError:
        return False
    return True


def validate_address(recipient: Any) -> str:
    """
    Validate a recipient address, ignoring surrounding whitespace.

    Args:
        recipient: Candidate address

    Returns:
        The trimmed address

    Raises:
        InvalidAddressError: If the recipient is missing or malformed
    """
    if not isinstance(recipient, str) or not recipient.strip():
        raise InvalidAddressError("Recipient address is required")
    trimmed = recipient.strip()
    if not is_valid_address(trimmed):
        raise InvalidAddressError("Invalid Stacks address")
    return trimmed


def validate_payment_intent(intent: Any) -> Optional[str]:
    """
    Check a draft payment intent the way a payment form does.

    Args:
        intent: Object with ``amount`` and ``recipient`` attributes

    Returns:
        A user-facing error message, or None if the intent is encodable
    """
    amount = getattr(intent, "amount", None)
    recipient = getattr(intent, "recipient", None)

    value = _parse_amount(amount) if amount else None
    if value is None or value <= 0:
        return "Amount must be greater than 0"
    if value < MIN_AMOUNT:
        return "Amount must be at least 0.00000001 sBTC"
    if not recipient:
        return "Recipient address is required"
    if not is_valid_address(recipient.strip()):
        return "Invalid Stacks address format"
    return None


def format_amount(amount: Number) -> str:
    """
    Render an amount for display.

    Formats with 8 fractional digits and strips trailing zeros and a
    dangling decimal point. Non-numeric input and values below 1e-8 render
    as ``"0"``. Display only: never use the result to decide validity.
    """
    value = _parse_amount(amount)
    if value is None or value < MIN_AMOUNT:
        return "0"
    return f"{value:.{AMOUNT_DECIMALS}f}".rstrip("0").rstrip(".")


def shorten_address(address: str, visible_chars: int = 4) -> str:
    """
    Truncate an address for display, keeping the network prefix visible.

    Example:
        >>> shorten_address("SP2X0TZ59D5SZ8ACQ6YMCHHNR2ZN51Z32E2CJ173")
        'SP2X0T...J173'
    """
    if len(address) <= visible_chars * 2 + 2:
        return address
    return f"{address[:visible_chars + 2]}...{address[-visible_chars:]}"


def format_stx_amount(micro_stx: Union[str, int]) -> str:
    """Convert a micro-STX quantity to an STX string with 6 decimals"""
    amount = int(micro_stx)
    return f"{Decimal(amount) / MICRO_STX_PER_STX:.6f}"


def stx_to_micro_stx(stx: Number) -> int:
    """
    Convert an STX quantity to whole micro-STX, rounding down.

    Raises:
        InvalidAmountError: If the quantity is not a finite decimal number
            or exceeds the float range amounts are validated against
    """
    text = str(stx).strip()
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidAmountError(f"Not a decimal amount: {stx!r}")
    value = Decimal(text)
    if value.adjusted() > MAX_AMOUNT_EXPONENT:
        raise InvalidAmountError(f"Amount out of range: {stx!r}")
    micro = value * MICRO_STX_PER_STX
    return int(micro.to_integral_value(rounding=ROUND_FLOOR))
