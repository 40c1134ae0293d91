#!/usr/bin/env python3
"""
Example of paying a link with the stub wallet and watching for settlement.
"""
import logging
import os

from sbtc_paylink import PaylinkError, decode
from sbtc_paylink.explorer import ExplorerClient, PaymentMonitor
from sbtc_paylink.wallet import StubWalletProvider, WalletError, connect_wallet

# Configure logging
logging.basicConfig(level=logging.INFO)


def main():
    """
    Demonstrate the payer and merchant sides of a payment.

    The payer connects a wallet (the stub here, since no host wallet is
    available from a script) and submits a simulated transfer. The merchant
    polls the explorer until a matching transfer lands or the timeout passes.
    """
    link = os.environ.get(
        "PAYMENT_LINK",
        "sbtc:ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZG?amount=0.25&label=Order%2042"
    )
    timeout = float(os.environ.get("MONITOR_TIMEOUT", "30"))

    try:
        intent = decode(link)
    except PaylinkError as e:
        print(f"Invalid payment link: {str(e)}")
        return
    print(f"Paying {intent.amount} to {intent.recipient} ({intent.label or 'no label'})")

    wallet = StubWalletProvider()
    try:
        connection = connect_wallet([wallet])
        receipt = wallet.transfer(intent)
    except WalletError as e:
        print(f"Wallet error: {str(e)}")
        return
    except PaylinkError as e:
        print(f"Invalid payment link: {str(e)}")
        return
    print(f"Connected {connection.address} via {connection.method}")
    print(f"Submitted {receipt.tx_id} (simulated: {receipt.simulated})")

    with ExplorerClient(network="testnet") as client:
        monitor = PaymentMonitor(
            client,
            intent.recipient,
            intent.amount,
            on_payment=lambda tx: print(f"Payment received: {client.explorer_tx_url(tx.tx_id)}"),
            poll_interval=5
        )
        monitor.start()
        try:
            if monitor.wait(timeout=timeout) is None:
                print(f"No matching payment within {timeout:.0f}s")
        finally:
            monitor.stop()


if __name__ == "__main__":
    main()
