"""
Pytest fixtures for the sBTC payment-link tests.
"""
import time

import pytest

from sbtc_paylink.config import NetworkConfig
from sbtc_paylink.explorer._rate_limited_log import reset_rate_limits
from sbtc_paylink.models import PaymentIntent

# Test constants used throughout tests
MAINNET_ADDRESS = "SP2X0TZ59D5SZ8ACQ6YMCHHNR2ZN51Z32E2CJ173"
TESTNET_ADDRESS = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZG"
CONTRACT_ADDRESS = "SM3VDXK3WZZSA84XXFKAFAF15NNZX32CTSG82JFQ"
TEST_API_URL = "https://api.example.com"
TEST_MIRROR_URL = "https://mirror.example.com"
TEST_BASE_URL = "https://pay.example.com/pay"

MOCK_NETWORKS = {
    "test-network": {
        "addressPrefix": "ST",
        "apiUrl": TEST_API_URL,
        "fallbackUrls": [TEST_MIRROR_URL],
        "explorerUrl": "https://explorer.example.com",
        "explorerChain": "testnet"
    }
}


# Make time.sleep instantaneous so retries and simulated latency don't slow the suite down
@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    """Isolate tests from the caller's environment and shared caches."""
    for var in ("STACKS_NETWORK", "STACKS_API_URL", "PAYLINK_BASE_URL",
                "MAINNET_API_URL", "TESTNET_API_URL", "TEST_NETWORK_API_URL"):
        monkeypatch.delenv(var, raising=False)
    reset_rate_limits()
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def mock_networks():
    """Serve MOCK_NETWORKS from the network config cache."""
    NetworkConfig._networks_cache = MOCK_NETWORKS
    yield MOCK_NETWORKS
    NetworkConfig._networks_cache = None


@pytest.fixture
def intent():
    """A fully populated, encodable payment intent."""
    return PaymentIntent(
        amount="0.001",
        recipient=MAINNET_ADDRESS,
        label="Invoice #1",
        message="Thanks for the coffee & cake!"
    )
