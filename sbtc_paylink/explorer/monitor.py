"""
Settlement detection by polling the block explorer.
"""
import logging
import threading
import time
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional

from ..models import Transaction
from ..validation import stx_to_micro_stx
from .client import ExplorerClient

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_LOOKBACK_SECONDS = 3600
RECENT_TX_LIMIT = 10


class PaymentMonitor:
    """
    Watches an address for an incoming transfer covering an expected amount.

    Explorer outages never stop monitoring: a failed poll is logged and the
    next poll simply tries again.

    Example:
        >>> monitor = PaymentMonitor(ExplorerClient(), intent.recipient, intent.amount)
        >>> monitor.start()
        >>> tx = monitor.wait(timeout=300)
        >>> monitor.stop()
    """

    def __init__(
        self,
        client: ExplorerClient,
        address: str,
        expected_amount: str,
        on_payment: Optional[Callable[[Transaction], None]] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        lookback_seconds: float = DEFAULT_LOOKBACK_SECONDS,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            client: Explorer client used for polling
            address: Recipient address to watch
            expected_amount: Amount in STX the payment must cover
            on_payment: Called once with the matching transaction
            poll_interval: Seconds between polls when running in the background
            lookback_seconds: Only transactions anchored this recently count
            clock: Returns the current UNIX time (injectable for tests)
            logger: Optional logger instance
        """
        self.client = client
        self.address = address
        self.expected_amount = expected_amount
        self.on_payment = on_payment
        self.poll_interval = poll_interval
        self.lookback_seconds = lookback_seconds
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

        self.transactions: List[Transaction] = []
        self.last_checked: Optional[float] = None
        self.match: Optional[Transaction] = None

        self._lock = threading.RLock()
        self._received = threading.Event()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        try:
            self._expected_micro = stx_to_micro_stx(expected_amount)
        except (ArithmeticError, ValueError):
            self.logger.warning(f"Unparsable expected amount {expected_amount!r}; any transfer will match")
            self._expected_micro = 0

    @property
    def payment_received(self) -> bool:
        return self._received.is_set()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _matches(self, tx: Transaction) -> bool:
        if tx.tx_type != "token_transfer" or tx.tx_status != "success":
            return False
        # Without a transfer payload the type and status are all we can check
        transfer = tx.token_transfer
        if transfer is None:
            return True
        if transfer.recipient_address.upper() != self.address.strip().upper():
            return False
        try:
            return Decimal(transfer.amount) >= self._expected_micro
        except InvalidOperation:
            return False

    def check_once(self) -> Optional[Transaction]:
        """
        Poll the explorer once.

        Returns:
            The matching transaction if a payment has been detected, else None
        """
        with self._lock:
            if self.match is not None:
                return self.match

            page = self.client.fetch_transactions(self.address, limit=RECENT_TX_LIMIT)
            now = self.clock()
            self.last_checked = now

            if page is None:
                self.logger.warning("No transaction data received, explorer may be unavailable")
                return None

            cutoff = now - self.lookback_seconds
            self.transactions = [
                tx for tx in page.results
                if tx.tx_status == "success" and tx.burn_block_time > cutoff
            ]

            found = next((tx for tx in self.transactions if self._matches(tx)), None)
            if found is None:
                return None
            self.match = found
            self._received.set()
            self.logger.info(f"Payment detected for {self.address}: {found.tx_id}")

        # Outside the lock so the callback may call back into the monitor
        if self.on_payment is not None:
            self.on_payment(found)
        return found

    def _run(self) -> None:
        while not self._stop.is_set():
            if self.check_once() is not None:
                break
            self._stop.wait(self.poll_interval)
        self.logger.debug(f"Stopped monitoring {self.address}")

    def start(self) -> None:
        """Start polling in a background daemon thread."""
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"payment-monitor-{self.address[:8]}",
            daemon=True
        )
        self._thread.start()
        self.logger.info(f"Monitoring {self.address} for {self.expected_amount} sBTC")

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop background polling and wait for the thread to exit.

        Safe to call from ``on_payment``, which runs on the polling thread;
        the loop then exits on its own once the callback returns.
        """
        self._stop.set()
        thread = self._thread
        if thread is not None:
            if thread is not threading.current_thread():
                thread.join(timeout)
            self._thread = None

    def wait(self, timeout: Optional[float] = None) -> Optional[Transaction]:
        """
        Block until a payment is detected or the timeout elapses.

        Returns:
            The matching transaction, or None on timeout
        """
        self._received.wait(timeout)
        return self.match
