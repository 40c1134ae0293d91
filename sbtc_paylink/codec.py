"""
Payment-link codec.

Turns a :class:`~sbtc_paylink.models.PaymentIntent` into a shareable URL and
back. Two URL shapes are understood on decode:

    https://host/pay?amount=0.001&recipient=SP...&label=Coffee
    sbtc:SP...?amount=0.001&label=Coffee

In the second (custom scheme) shape the recipient lives in the authority
component rather than in the query string.
"""
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, unquote, urlencode, urlsplit

from .exceptions import MalformedPaymentUrlError
from .models import PaymentIntent
from .validation import format_amount, validate_address, validate_amount

DEFAULT_BASE_URL = "http://localhost:3000/pay"
CUSTOM_SCHEME = "sbtc"

# Query parameter names, in emission order
PARAM_AMOUNT = "amount"
PARAM_RECIPIENT = "recipient"
PARAM_LABEL = "label"
PARAM_MESSAGE = "message"

_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_STANDARD_SCHEMES = ("http", "https")


def encode(intent: PaymentIntent, base_url: str) -> str:
    """
    Build the canonical payment URL for an intent.

    Args:
        intent: The payment intent; amount and recipient are required
        base_url: Page the link points at, e.g. ``https://example.com/pay``

    Returns:
        ``<base_url>?amount=..&recipient=..[&label=..][&message=..]``

    Raises:
        InvalidAmountError: If the amount is missing, not a number, not
            positive, or below 1e-8
        InvalidAddressError: If the recipient is missing or malformed
    """
    validate_amount(intent.amount)
    recipient = validate_address(intent.recipient)

    params: List[Tuple[str, str]] = [
        (PARAM_AMOUNT, intent.amount),
        (PARAM_RECIPIENT, recipient),
    ]
    if intent.label and intent.label.strip():
        params.append((PARAM_LABEL, intent.label.strip()))
    if intent.message and intent.message.strip():
        params.append((PARAM_MESSAGE, intent.message.strip()))

    return f"{base_url}?{urlencode(params)}"


def decode(url: str) -> PaymentIntent:
    """
    Parse a payment URL into a (possibly partial) payment intent.

    No validation is applied to the extracted values; run the validators
    before acting on the result.

    Args:
        url: A standard ``http(s)`` payment URL or a custom scheme URL

    Returns:
        PaymentIntent with absent parameters left as None

    Raises:
        MalformedPaymentUrlError: If the input cannot be parsed as a URL
    """
    if not isinstance(url, str):
        raise MalformedPaymentUrlError(f"Payment URL must be a string, got {type(url).__name__}")

    candidate = url.strip()
    match = _SCHEME_RE.match(candidate)
    if not match:
        raise MalformedPaymentUrlError(f"Invalid payment URL format: {url!r}")

    custom = match.group(1).lower() not in _STANDARD_SCHEMES
    if custom:
        rest = candidate[match.end():]
        candidate = "https:" + rest if rest.startswith("//") else "https://" + rest

    try:
        parts = urlsplit(candidate)
        # Accessing .port validates it
        parts.port
        params = parse_qs(parts.query, keep_blank_values=True)
    except ValueError as e:
        raise MalformedPaymentUrlError(f"Invalid payment URL format: {url!r}") from e

    host = _authority_host(parts.netloc)
    if any(ch.isspace() for ch in parts.netloc):
        raise MalformedPaymentUrlError(f"Invalid payment URL format: {url!r}")
    if not host and not (custom and parts.path.strip("/")):
        raise MalformedPaymentUrlError(f"Payment URL has no host: {url!r}")

    if custom:
        recipient = host or _first_path_segment(parts.path) or _first(params, PARAM_RECIPIENT)
    else:
        recipient = _first(params, PARAM_RECIPIENT)

    return PaymentIntent(
        amount=_first(params, PARAM_AMOUNT),
        recipient=recipient,
        label=_first(params, PARAM_LABEL),
        message=_first(params, PARAM_MESSAGE),
    )


def generate_share_text(intent: PaymentIntent, url: str) -> str:
    """Render a short human-readable announcement of a payment link"""
    text = f"sBTC Payment Request: {format_amount(intent.amount or '0')} sBTC"
    if intent.label:
        text += f" - {intent.label}"
    if intent.message:
        text += f"\n{intent.message}"
    return text + f"\n\nPay here: {url}"


def _first(params: Dict[str, List[str]], name: str) -> Optional[str]:
    values = params.get(name)
    if not values or not values[0]:
        return None
    return values[0]


def _authority_host(netloc: str) -> str:
    # urlsplit().hostname lowercases; addresses are case-significant here
    host = netloc.rpartition("@")[2]
    return host.partition(":")[0]


def _first_path_segment(path: str) -> Optional[str]:
    segment = path.lstrip("/").split("/", 1)[0]
    return unquote(segment) or None
