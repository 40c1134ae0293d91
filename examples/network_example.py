#!/usr/bin/env python3
"""
Example of querying the block explorer for a payment recipient.
"""
import logging
import os

from sbtc_paylink import NetworkConfig, decode
from sbtc_paylink.explorer import ExplorerClient

# Configure logging
logging.basicConfig(level=logging.INFO)


def main():
    """
    Demonstrate the explorer client against a configured network.

    This example shows how to:
    1. List the packaged networks
    2. Corroborate a link's recipient online
    3. Check a payer's balance and read recent transactions
    """
    network = os.environ.get("STACKS_NETWORK", "testnet")
    link = os.environ.get(
        "PAYMENT_LINK",
        "http://localhost:3000/pay?amount=0.5&recipient=ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZG"
    )
    payer = os.environ.get("PAYER_ADDRESS")

    print("Available networks:")
    for name in NetworkConfig.load_networks():
        print(f"  - {name}")
    print()

    intent = decode(link)

    with ExplorerClient(network=network) as client:
        print(f"Endpoints: {', '.join(client.endpoints)}")

        if client.validate_address_online(intent.recipient):
            print(f"Recipient {intent.recipient} accepted")
        else:
            print(f"Recipient {intent.recipient} not found on {network}")
            return

        height = client.fetch_block_height()
        print(f"Current block height: {height if height is not None else 'unavailable'}")

        if payer:
            check = client.check_sufficient_balance(payer, intent.amount)
            if check.error:
                print(f"Balance check failed: {check.error}")
            else:
                print(f"Payer balance: {check.current_balance} STX (sufficient: {check.sufficient})")

        page = client.fetch_transactions(intent.recipient, limit=5)
        if page is None:
            print("Explorer unavailable, no transaction history")
            return
        for tx in page.results:
            print(f"  {tx.tx_id} {tx.tx_type} {tx.tx_status}")
            print(f"    {client.explorer_tx_url(tx.tx_id)}")


if __name__ == "__main__":
    main()
