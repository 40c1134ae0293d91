"""
Stub wallet provider for development and testing.

Simulates a connected testnet wallet and a successful transfer. Nothing is
signed or broadcast.
"""
import logging
import secrets
import time
from dataclasses import dataclass

from ..models import PaymentIntent
from ..validation import stx_to_micro_stx, validate_address, validate_amount
from .exceptions import ConnectionFailedError
from .provider import WalletConnection, WalletProvider

logger = logging.getLogger(__name__)

MOCK_ADDRESS = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZG"


@dataclass
class TransferReceipt:
    """
    Outcome of a simulated transfer.

    ``amount`` is in micro-STX, as a wallet would submit it.
    """
    tx_id: str
    sender: str
    recipient: str
    amount: int
    memo: str = ""
    simulated: bool = True


class StubWalletProvider(WalletProvider):
    """
    A wallet that always connects with a fixed test address.

    Its method name is not part of the default strategy, so
    :func:`~sbtc_paylink.wallet.connect_wallet` only falls back to it after
    every real provider has failed.
    """

    method = "mock"

    def __init__(self, address: str = MOCK_ADDRESS, latency: float = 0.0):
        """
        Args:
            address: Address reported on connect
            latency: Seconds to sleep in each call, to mimic a real wallet
        """
        self.address = address
        self.latency = latency
        self.connected = False

    def is_available(self) -> bool:
        """
        Check if stub provider is available.

        Returns:
            Always True since the stub has no dependencies
        """
        return True

    def connect(self) -> WalletConnection:
        if self.latency:
            time.sleep(self.latency)
        self.connected = True
        logger.info(f"Using mock wallet connection for {self.address}")
        return WalletConnection(address=self.address, method=self.method, mock=True)

    def transfer(self, intent: PaymentIntent) -> TransferReceipt:
        """
        Simulate paying a payment intent.

        Args:
            intent: A decoded payment intent

        Returns:
            Receipt with a random transaction id

        Raises:
            ConnectionFailedError: If connect() has not been called
            InvalidAmountError: If the intent amount is not payable
            InvalidAddressError: If the intent recipient is malformed
        """
        if not self.connected:
            raise ConnectionFailedError("Stub wallet not connected")

        validate_amount(intent.amount)
        recipient = validate_address(intent.recipient)
        amount = stx_to_micro_stx(intent.amount)

        if self.latency:
            time.sleep(self.latency)

        tx_id = "0x" + secrets.token_hex(32)
        logger.info(f"Simulated transfer of {amount} micro-STX to {recipient}: {tx_id}")
        return TransferReceipt(
            tx_id=tx_id,
            sender=self.address,
            recipient=recipient,
            amount=amount,
            memo=intent.label or "",
        )
