"""
Tests for the payment-link codec.
"""
import pytest
from urllib.parse import parse_qsl, urlsplit

from sbtc_paylink.codec import decode, encode, generate_share_text, DEFAULT_BASE_URL
from sbtc_paylink.exceptions import (
    InvalidAddressError, InvalidAmountError, MalformedPaymentUrlError, PaylinkError
)
from sbtc_paylink.models import PaymentIntent
from conftest import MAINNET_ADDRESS, TESTNET_ADDRESS, TEST_BASE_URL


class TestEncode:
    """Tests for building payment URLs."""

    def test_full_intent(self, intent):
        """All four parameters are emitted in fixed order"""
        url = encode(intent, TEST_BASE_URL)
        assert url.startswith(TEST_BASE_URL + "?")
        assert parse_qsl(urlsplit(url).query) == [
            ("amount", "0.001"),
            ("recipient", MAINNET_ADDRESS),
            ("label", "Invoice #1"),
            ("message", "Thanks for the coffee & cake!"),
        ]

    def test_exact_bytes(self):
        """Form-style percent-encoding, spaces as '+'"""
        url = encode(
            PaymentIntent(amount="0.5", recipient=MAINNET_ADDRESS, label="Invoice #1"),
            "https://host/pay"
        )
        assert url == f"https://host/pay?amount=0.5&recipient={MAINNET_ADDRESS}&label=Invoice+%231"

    def test_blank_optional_fields_omitted(self):
        url = encode(
            PaymentIntent(amount="1", recipient=MAINNET_ADDRESS, label="   ", message=""),
            TEST_BASE_URL
        )
        assert url == f"{TEST_BASE_URL}?amount=1&recipient={MAINNET_ADDRESS}"

    def test_trims_recipient_label_and_message(self):
        url = encode(
            PaymentIntent(amount="1", recipient=f"  {MAINNET_ADDRESS} ", label=" Coffee ", message="\tThanks\n"),
            TEST_BASE_URL
        )
        assert dict(parse_qsl(urlsplit(url).query)) == {
            "amount": "1",
            "recipient": MAINNET_ADDRESS,
            "label": "Coffee",
            "message": "Thanks",
        }

    def test_amount_emitted_verbatim(self):
        url = encode(PaymentIntent(amount="1.50000000", recipient=MAINNET_ADDRESS), TEST_BASE_URL)
        assert "amount=1.50000000&" in url

    def test_uses_caller_base_url(self):
        url = encode(PaymentIntent(amount="1", recipient=MAINNET_ADDRESS), DEFAULT_BASE_URL)
        assert url.startswith("http://localhost:3000/pay?")

    @pytest.mark.parametrize("amount", ["0", "-1", "abc", "0.000000001", None, "", "1_000", "inf"])
    def test_invalid_amount(self, amount):
        with pytest.raises(InvalidAmountError):
            encode(PaymentIntent(amount=amount, recipient=MAINNET_ADDRESS), TEST_BASE_URL)

    @pytest.mark.parametrize("recipient", [
        MAINNET_ADDRESS[:39],
        MAINNET_ADDRESS + "X",
        "SX" + MAINNET_ADDRESS[2:],
        None,
    ])
    def test_invalid_address(self, recipient):
        with pytest.raises(InvalidAddressError):
            encode(PaymentIntent(amount="1", recipient=recipient), TEST_BASE_URL)

    def test_amount_checked_before_address(self):
        """When both are invalid the amount error wins"""
        with pytest.raises(InvalidAmountError):
            encode(PaymentIntent(amount="0", recipient="bogus"), TEST_BASE_URL)

    def test_errors_share_base_class(self):
        with pytest.raises(PaylinkError):
            encode(PaymentIntent(amount="1", recipient="bogus"), TEST_BASE_URL)


class TestDecode:
    """Tests for parsing payment URLs."""

    def test_documented_example(self):
        result = decode(
            "https://host/pay?amount=0.001&recipient=SP2X0TZ59D5SZ8ACQ6YMCHHNR2ZN51Z32E2CJ173"
            "&label=Invoice%20%231"
        )
        assert result == PaymentIntent(
            amount="0.001",
            recipient="SP2X0TZ59D5SZ8ACQ6YMCHHNR2ZN51Z32E2CJ173",
            label="Invoice #1",
            message=None
        )

    def test_parameter_order_irrelevant(self):
        result = decode(f"https://host/pay?message=hi&recipient={MAINNET_ADDRESS}&amount=2")
        assert result.amount == "2"
        assert result.recipient == MAINNET_ADDRESS
        assert result.message == "hi"

    def test_plus_decodes_to_space(self):
        assert decode("https://host/pay?label=Coffee+and+cake").label == "Coffee and cake"

    def test_missing_fields_are_none(self):
        result = decode("https://host/pay")
        assert result == PaymentIntent()

    def test_empty_values_are_none(self):
        result = decode("https://host/pay?amount=&recipient=&label=")
        assert result.amount is None
        assert result.recipient is None
        assert result.label is None

    def test_first_value_wins(self):
        assert decode("https://host/pay?amount=1&amount=2").amount == "1"

    def test_no_validation_at_decode(self):
        """Decode is lenient; invalid values come through verbatim"""
        result = decode("https://host/pay?amount=-5&recipient=nope")
        assert result.amount == "-5"
        assert result.recipient == "nope"
        assert result.is_encodable() is False

    def test_http_and_port(self):
        result = decode(f"http://localhost:3000/pay?amount=1&recipient={TESTNET_ADDRESS}")
        assert result.recipient == TESTNET_ADDRESS

    def test_custom_scheme_compact(self):
        """sbtc:RECIPIENT?amount=... keeps the recipient in the authority"""
        result = decode(f"sbtc:{MAINNET_ADDRESS}?amount=0.25&label=Tip")
        assert result == PaymentIntent(amount="0.25", recipient=MAINNET_ADDRESS, label="Tip")

    def test_custom_scheme_preserves_case(self):
        result = decode(f"sbtc:{MAINNET_ADDRESS.lower()}?amount=1")
        assert result.recipient == MAINNET_ADDRESS.lower()

    def test_custom_scheme_with_slashes(self):
        result = decode(f"sbtc://{MAINNET_ADDRESS}?amount=1")
        assert result.recipient == MAINNET_ADDRESS

    def test_custom_scheme_path_segment(self):
        """An empty authority falls back to the first path segment"""
        result = decode(f"sbtc:///{MAINNET_ADDRESS}/extra?amount=1")
        assert result.recipient == MAINNET_ADDRESS

    def test_other_custom_scheme(self):
        result = decode(f"stacks:{TESTNET_ADDRESS}?amount=3")
        assert result.recipient == TESTNET_ADDRESS
        assert result.amount == "3"

    @pytest.mark.parametrize("url", [
        "not a url",
        "",
        "   ",
        "https://",
        "https://host:notaport/pay",
        "https://[::1/pay",
        "https://bad host/pay",
        "sbtc:",
        "sbtc:?amount=1",
    ])
    def test_malformed(self, url):
        with pytest.raises(MalformedPaymentUrlError):
            decode(url)

    @pytest.mark.parametrize("value", [None, 123, b"https://host/pay"])
    def test_non_string(self, value):
        with pytest.raises(MalformedPaymentUrlError):
            decode(value)


class TestRoundTrip:
    """Tests for decode(encode(x)) on hand-picked intents."""

    @pytest.mark.parametrize("intent", [
        PaymentIntent(amount="0.00000001", recipient=MAINNET_ADDRESS),
        PaymentIntent(amount="21000000", recipient=TESTNET_ADDRESS, label="Big one"),
        PaymentIntent(amount="1.5", recipient=MAINNET_ADDRESS, message="a=b&c=d?e#f/g%20h+i"),
        PaymentIntent(amount="0.1", recipient=MAINNET_ADDRESS, label="☕ café", message="日本語"),
    ])
    def test_round_trip(self, intent):
        assert decode(encode(intent, TEST_BASE_URL)) == intent

    def test_blank_fields_normalize_to_none(self):
        original = PaymentIntent(amount="1", recipient=MAINNET_ADDRESS, label="", message="  ")
        assert decode(encode(original, TEST_BASE_URL)) == PaymentIntent(amount="1", recipient=MAINNET_ADDRESS)


class TestShareText:
    """Tests for share text rendering."""

    def test_full(self, intent):
        text = generate_share_text(intent, "https://pay.example.com/pay?x=1")
        assert text == (
            "sBTC Payment Request: 0.001 sBTC - Invoice #1\n"
            "Thanks for the coffee & cake!\n\n"
            "Pay here: https://pay.example.com/pay?x=1"
        )

    def test_minimal(self):
        text = generate_share_text(PaymentIntent(amount="1.00000000"), "u")
        assert text == "sBTC Payment Request: 1 sBTC\n\nPay here: u"
