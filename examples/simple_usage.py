#!/usr/bin/env python3
"""
Simple example of using the sBTC payment-link SDK.
"""
import os

from sbtc_paylink import (
    PaymentIntent, NetworkConfig, PaylinkError,
    encode, decode, generate_share_text, validate_payment_intent, shorten_address
)


def main():
    """
    Demonstrate building and reading a payment link.

    This example shows how to:
    1. Check a draft intent the way a payment form would
    2. Encode it into a shareable URL
    3. Decode the URL back into an intent
    """
    base_url = NetworkConfig.get_base_url(os.environ.get("PAYLINK_BASE_URL"))

    draft = PaymentIntent(
        amount=os.environ.get("AMOUNT", "0.001"),
        recipient=os.environ.get("RECIPIENT", "SP2X0TZ59D5SZ8ACQ6YMCHHNR2ZN51Z32E2CJ173"),
        label="Coffee",
        message="Thanks for the coffee!"
    )

    problem = validate_payment_intent(draft)
    if problem:
        print(f"ERROR: {problem}")
        return

    try:
        url = encode(draft, base_url)
    except PaylinkError as e:
        print(f"Error creating payment link: {str(e)}")
        return

    print(f"Payment link: {url}")
    print()
    print(generate_share_text(draft, url))
    print()

    decoded = decode(url)
    print(f"Decoded amount: {decoded.amount} sBTC")
    print(f"Decoded recipient: {shorten_address(decoded.recipient)} ({decoded.network_class().name.lower()})")

    # Custom scheme links carry the recipient in the authority
    wallet_link = f"sbtc:{draft.recipient}?amount={draft.amount}&label=Coffee"
    print(f"Wallet link recipient: {decode(wallet_link).recipient}")


if __name__ == "__main__":
    main()
