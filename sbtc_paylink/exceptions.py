"""
Exceptions for the sBTC payment-link core.
"""


class PaylinkError(Exception):
    """Base exception for all payment-link errors"""
    pass


class InvalidAmountError(PaylinkError, ValueError):
    """Raised when an amount is missing, non-numeric, not positive or below 1e-8"""
    pass


class InvalidAddressError(PaylinkError, ValueError):
    """Raised when a recipient is missing or fails the Stacks address format"""
    pass


class MalformedPaymentUrlError(PaylinkError, ValueError):
    """Raised when a payment URL cannot be parsed under any accepted shape"""
    pass
