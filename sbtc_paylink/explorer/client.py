"""
Read-only client for the Stacks block-explorer API.

Every read is tried against an ordered list of endpoints: the configured API
URL first, then the network's mirrors. The first endpoint that answers with a
usable payload wins; when all of them fail the read returns None instead of
raising, so callers can keep working without the explorer.
"""
import logging
import urllib.parse
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import NetworkConfig
from ..models import AddressBalance, BalanceCheck, NetworkInfo, Transaction, TransactionList
from ..validation import format_stx_amount, is_valid_address
from ._rate_limited_log import rate_limited_log
from .exceptions import (
    ExplorerError, ExplorerConnectionError, ExplorerResponseError, ExplorerTimeoutError
)

T = TypeVar('T')


class ExplorerClient:
    """
    Client for the Stacks extended API with mirror fallback.

    Example:
        >>> client = ExplorerClient(network="testnet")
        >>> page = client.fetch_transactions("ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZG", limit=5)
        >>> if page is None:
        ...     print("explorer unavailable")
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        network: Optional[str] = None,
        fallback_urls: Optional[List[str]] = None,
        timeout: float = 10,
        retry_count: int = 2,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ExplorerClient

        Args:
            api_url: Primary API URL (defaults to the network's configured URL)
            network: Network name from ``networks.json`` (defaults to STACKS_NETWORK)
            fallback_urls: Mirror URLs tried after the primary (defaults to the network's mirrors)
            timeout: Per-request timeout in seconds
            retry_count: urllib3 retries for 5xx responses on a single endpoint
            session: Optional pre-configured requests session
            logger: Optional logger instance

        Raises:
            ValueError: If the network is unknown or an endpoint is not https
                (unless it is localhost/127.0.0.1)
        """
        self.network = network or NetworkConfig.default_network()
        self.logger = logger or logging.getLogger(__name__)

        primary = NetworkConfig.get_api_url(self.network, override=api_url)
        mirrors = fallback_urls if fallback_urls is not None else NetworkConfig.get_fallback_urls(self.network)

        self.endpoints: List[str] = []
        for url in [primary] + [m.rstrip('/') for m in mirrors]:
            if url not in self.endpoints:
                self._check_url(url)
                self.endpoints.append(url)

        self.timeout = timeout
        if session is None:
            session = requests.Session()
            retries = Retry(
                total=retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["GET"],
                raise_on_status=False,
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session
        # requests defaults Accept to */*; keep anything more specific a caller set
        if self.session.headers.get("Accept", "*/*") == "*/*":
            self.session.headers["Accept"] = "application/json"

    @staticmethod
    def _check_url(url: str) -> None:
        parsed = urllib.parse.urlparse(url)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"Explorer URL must use https:// (got: {url})")

    def __enter__(self) -> "ExplorerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a single URL and decode its JSON body.

        Raises:
            ExplorerTimeoutError: If the request times out
            ExplorerConnectionError: If the endpoint cannot be reached
            ExplorerResponseError: On a non-2xx status or a non-JSON body
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            raise ExplorerTimeoutError(f"Request to {url} timed out: {e}") from e
        except requests.RequestException as e:
            raise ExplorerConnectionError(f"Request to {url} failed: {e}") from e

        self.logger.debug(f"Response status {response.status_code} from {url}")
        if not response.ok:
            raise ExplorerResponseError(
                f"{url} answered with status {response.status_code}",
                status_code=response.status_code
            )
        try:
            return response.json()
        except ValueError as e:
            raise ExplorerResponseError(f"Invalid JSON from {url}: {e}", status_code=response.status_code) from e

    def _get_from_any(
        self,
        path: str,
        parse: Callable[[Any], T],
        what: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Optional[T]:
        """
        Try every endpoint in order until one yields a parsable payload.

        Args:
            path: Path appended to each endpoint base URL
            parse: Converts the decoded JSON into the result type
            what: Short description used in log messages
            params: Optional query parameters

        Returns:
            Parsed result from the first successful endpoint, or None
        """
        for base in self.endpoints:
            url = f"{base}{path}"
            self.logger.debug(f"Trying {what} from {url}")
            try:
                return parse(self._get_json(url, params=params))
            except ExplorerError as e:
                self.logger.warning(f"Error fetching {what} from {url}: {e}")
            except (ValidationError, KeyError, IndexError, TypeError, AttributeError) as e:
                self.logger.warning(f"Unexpected {what} payload from {url}: {e}")

        rate_limited_log(f"All {what} endpoints failed", logger_instance=self.logger)
        return None

    def fetch_balance(self, address: str) -> Optional[AddressBalance]:
        """
        Fetch the balances held by an address.

        Returns:
            AddressBalance, or None if no endpoint answered
        """
        return self._get_from_any(
            f"/extended/v1/address/{address}/balances",
            AddressBalance.model_validate,
            "balance"
        )

    def fetch_transactions(
        self,
        address: str,
        limit: int = 20,
        offset: int = 0
    ) -> Optional[TransactionList]:
        """
        Fetch a page of transactions involving an address, newest first.

        Returns:
            TransactionList, or None if no endpoint answered
        """
        return self._get_from_any(
            f"/extended/v1/address/{address}/transactions",
            TransactionList.model_validate,
            "transactions",
            params={"limit": limit, "offset": offset}
        )

    def fetch_network_info(self) -> Optional[NetworkInfo]:
        """Fetch node information, or None if no endpoint answered"""
        return self._get_from_any("/v2/info", NetworkInfo.model_validate, "network info")

    def fetch_block_height(self) -> Optional[int]:
        """Fetch the current Stacks block height, or None if unavailable"""
        def _height(data: Any) -> Optional[int]:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            results = data.get("results") or []
            if not results:
                return None
            if not isinstance(results[0], dict):
                raise TypeError(f"expected a block object, got {type(results[0]).__name__}")
            return results[0].get("height")

        return self._get_from_any("/extended/v1/block", _height, "block height")

    def fetch_transaction(self, tx_id: str) -> Optional[Transaction]:
        """
        Fetch a single transaction from the primary endpoint.

        Returns:
            Transaction, or None on any failure
        """
        url = f"{self.endpoints[0]}/extended/v1/tx/{tx_id}"
        try:
            return Transaction.model_validate(self._get_json(url))
        except (ExplorerError, ValidationError) as e:
            self.logger.error(f"Error fetching transaction {tx_id}: {e}")
            return None

    def validate_address_online(self, address: str) -> bool:
        """
        Corroborate an address against the explorer.

        A malformed address is rejected without a request. A 200 response
        confirms the address, a 404 rejects it, and anything else moves on to
        the next endpoint. When no endpoint can be reached the address is
        treated as valid: format validity stays authoritative.

        Returns:
            Whether the address should be accepted
        """
        if not is_valid_address(address):
            return False

        for base in self.endpoints:
            url = f"{base}/extended/v1/address/{address}/balances"
            self.logger.debug(f"Trying address validation from {url}")
            try:
                response = self.session.get(url, timeout=self.timeout)
            except requests.RequestException as e:
                self.logger.warning(f"Address validation failed from {url}: {e}")
                continue

            if response.ok:
                return True
            if response.status_code == 404:
                return False
            self.logger.debug(f"Address validation got status {response.status_code} from {url}")

        rate_limited_log(
            "All address validation endpoints failed, falling back to format validation",
            logger_instance=self.logger
        )
        return True

    def check_sufficient_balance(self, address: str, required_amount: str) -> BalanceCheck:
        """
        Check whether an address holds at least ``required_amount`` STX.

        Returns:
            BalanceCheck with the current balance formatted in STX
        """
        balance = self.fetch_balance(address)
        if balance is None:
            return BalanceCheck(sufficient=False, current_balance="0", error="Could not fetch balance")

        try:
            current = format_stx_amount(balance.stx.balance)
            sufficient = Decimal(current) >= Decimal(str(required_amount).strip())
        except (ValueError, ArithmeticError) as e:
            self.logger.warning(f"Error checking balance for {address}: {e}")
            return BalanceCheck(sufficient=False, current_balance="0", error="Error checking balance")

        return BalanceCheck(sufficient=sufficient, current_balance=current)

    def explorer_tx_url(self, tx_id: str) -> str:
        """Block explorer page for a transaction on this client's network"""
        return NetworkConfig.get_explorer_url(self.network, tx_id=tx_id)
