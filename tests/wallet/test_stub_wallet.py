"""
Tests for the stub wallet provider.
"""
import time

import pytest

from sbtc_paylink.exceptions import InvalidAddressError, InvalidAmountError
from sbtc_paylink.models import PaymentIntent
from sbtc_paylink.validation import is_valid_address
from sbtc_paylink.wallet import ConnectionFailedError, MOCK_ADDRESS, StubWalletProvider
from conftest import MAINNET_ADDRESS


def test_mock_address_is_valid_testnet():
    assert is_valid_address(MOCK_ADDRESS)
    assert MOCK_ADDRESS.startswith("ST")


def test_always_available():
    assert StubWalletProvider().is_available() is True


def test_connect():
    stub = StubWalletProvider()
    conn = stub.connect()

    assert conn.address == MOCK_ADDRESS
    assert conn.method == "mock"
    assert conn.mock is True
    assert stub.connected is True


def test_custom_address():
    assert StubWalletProvider(address=MAINNET_ADDRESS).connect().address == MAINNET_ADDRESS


def test_transfer_requires_connection(intent):
    with pytest.raises(ConnectionFailedError, match="not connected"):
        StubWalletProvider().transfer(intent)


def test_transfer(intent):
    stub = StubWalletProvider()
    stub.connect()

    receipt = stub.transfer(intent)

    assert receipt.sender == MOCK_ADDRESS
    assert receipt.recipient == MAINNET_ADDRESS
    assert receipt.amount == 1000
    assert receipt.memo == "Invoice #1"
    assert receipt.simulated is True
    assert receipt.tx_id.startswith("0x")
    assert len(receipt.tx_id) == 66


def test_transfer_ids_unique(intent):
    stub = StubWalletProvider()
    stub.connect()
    assert stub.transfer(intent).tx_id != stub.transfer(intent).tx_id


def test_transfer_invalid_amount():
    stub = StubWalletProvider()
    stub.connect()
    with pytest.raises(InvalidAmountError):
        stub.transfer(PaymentIntent(amount="0", recipient=MAINNET_ADDRESS))


def test_transfer_invalid_recipient():
    stub = StubWalletProvider()
    stub.connect()
    with pytest.raises(InvalidAddressError):
        stub.transfer(PaymentIntent(amount="1", recipient="SP123"))


def test_latency_sleeps(monkeypatch, intent):
    calls = []
    monkeypatch.setattr(time, "sleep", calls.append)
    stub = StubWalletProvider(latency=0.5)

    stub.connect()
    stub.transfer(intent)

    assert calls == [0.5, 0.5]
