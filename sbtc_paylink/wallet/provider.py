"""
Wallet provider abstraction.

A host environment (a browser bridge, a desktop wallet binding, a test
double) exposes one or more connection methods on a duck-typed object. Each
method is wrapped in a :class:`WalletProvider` variant; :func:`connect_wallet`
tries the available variants in priority order and returns the first
normalized :class:`WalletConnection`.
"""
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .exceptions import ConnectionFailedError, NoProviderError, UserCancelledError

logger = logging.getLogger(__name__)

APP_DETAILS = {"name": "sBTC Payment Links", "icon": ""}

METHOD_SHOW_CONNECT = "showConnect"
METHOD_CONNECT = "connect"
METHOD_REQUEST = "request"
METHOD_DIRECT_ADDRESS = "direct-address"

DEFAULT_STRATEGY = (
    METHOD_SHOW_CONNECT,
    METHOD_CONNECT,
    METHOD_REQUEST,
    METHOD_DIRECT_ADDRESS,
)


@dataclass
class WalletConnection:
    """A connected wallet account."""
    address: str
    method: str
    mock: bool = False


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def extract_address(response: Any) -> Optional[str]:
    """
    Pull the account address out of a wallet connection response.

    Understands the shapes wallets answer with: a user session whose profile
    carries ``stxAddress``, an ``addresses`` list (of strings or of objects
    with an ``address``), a plain ``address`` field, a JSON-RPC style
    ``result`` wrapper, or a bare list of addresses.

    Returns:
        The first address found, or None
    """
    if not response:
        return None

    if isinstance(response, str):
        return response

    if isinstance(response, (list, tuple)):
        return extract_address(response[0])

    session = _get(response, "userSession")
    if session is not None:
        load = getattr(session, "load_user_data", None)
        user_data = load() if callable(load) else _get(session, "userData")
        stx_address = _get(_get(user_data, "profile") or {}, "stxAddress") or {}
        return _get(stx_address, "mainnet") or _get(stx_address, "testnet")

    addresses = _get(response, "addresses")
    if isinstance(addresses, (list, tuple)) and addresses:
        first = addresses[0]
        return first if isinstance(first, str) else _get(first, "address")

    address = _get(response, "address")
    if address:
        return address

    result = _get(response, "result")
    if result is not None:
        return extract_address(result)

    return None


class WalletProvider(ABC):
    """
    Abstract base class for wallet connection methods.

    Subclasses wrap one connection method of a host object and normalize
    its response into a :class:`WalletConnection`.
    """

    method: str = "unknown"

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this connection method can be attempted.

        Returns:
            True if the provider can be used, False otherwise
        """
        pass

    @abstractmethod
    def connect(self) -> WalletConnection:
        """
        Connect to the wallet and return the selected account.

        Raises:
            UserCancelledError: If the user dismissed the prompt
            ConnectionFailedError: If no address could be obtained
        """
        pass

    def _connection(self, response: Any) -> WalletConnection:
        try:
            address = extract_address(response)
        except UserCancelledError:
            raise
        except Exception as e:
            raise ConnectionFailedError(
                f"Unreadable {self.method} response: {e}"
            ) from e
        if not isinstance(address, str) or not address:
            raise ConnectionFailedError(
                f"Could not retrieve wallet address from {self.method} response"
            )
        return WalletConnection(address=address, method=self.method)


class _HostProvider(WalletProvider):
    """Provider backed by a callable attribute of a host object."""

    host_attr = ""

    def __init__(self, host: Any, app_details: Optional[Dict[str, str]] = None):
        self.host = host
        self.app_details = dict(app_details or APP_DETAILS)

    def is_available(self) -> bool:
        return callable(getattr(self.host, self.host_attr, None))

    def _call(self, *args: Any) -> Any:
        return getattr(self.host, self.host_attr)(*args)


class ShowConnectProvider(_HostProvider):
    """
    Callback-style connect prompt (``show_connect(options)``).

    The host invokes ``options["onFinish"](payload)`` or
    ``options["onCancel"]()``, possibly from another thread.
    """

    method = METHOD_SHOW_CONNECT
    host_attr = "show_connect"

    def __init__(self, host: Any, app_details: Optional[Dict[str, str]] = None, timeout: float = 120):
        super().__init__(host, app_details)
        self.timeout = timeout

    def connect(self) -> WalletConnection:
        outcome: Dict[str, Any] = {}
        done = threading.Event()

        def on_finish(payload: Any = None) -> None:
            outcome["payload"] = payload
            done.set()

        def on_cancel(*_args: Any) -> None:
            outcome["cancelled"] = True
            done.set()

        options = {
            "appDetails": self.app_details,
            "redirectTo": "/",
            "onFinish": on_finish,
            "onCancel": on_cancel,
        }
        try:
            self._call(options)
        except UserCancelledError:
            raise
        except Exception as e:
            raise ConnectionFailedError(f"showConnect failed: {e}") from e

        if not done.wait(self.timeout):
            raise ConnectionFailedError(f"showConnect did not finish within {self.timeout}s")
        if outcome.get("cancelled"):
            raise UserCancelledError("User cancelled wallet connection")
        return self._connection(outcome.get("payload"))


class ConnectProvider(_HostProvider):
    """Direct ``connect(options)`` call, retried once with empty options."""

    method = METHOD_CONNECT
    host_attr = "connect"

    def connect(self) -> WalletConnection:
        try:
            response = self._call({"appDetails": self.app_details})
        except UserCancelledError:
            raise
        except Exception as e:
            logger.warning(f"Connect with options failed, trying minimal options: {e}")
            try:
                response = self._call({})
            except UserCancelledError:
                raise
            except Exception as e2:
                raise ConnectionFailedError(f"connect failed: {e2}") from e2
        return self._connection(response)


class RequestProvider(_HostProvider):
    """JSON-RPC style ``request(payload)`` used by newer wallets."""

    method = METHOD_REQUEST
    host_attr = "request"

    def connect(self) -> WalletConnection:
        try:
            response = self._call({"method": "stx_requestAccounts"})
        except UserCancelledError:
            raise
        except Exception as e:
            if "not implemented" in str(e):
                raise ConnectionFailedError(f"request method not implemented by wallet: {e}") from e
            logger.warning(f"stx_requestAccounts failed, trying wallet_requestPermissions: {e}")
            try:
                response = self._call({
                    "method": "wallet_requestPermissions",
                    "params": [{"stx_accounts": {}}],
                })
            except UserCancelledError:
                raise
            except Exception as e2:
                raise ConnectionFailedError(f"request failed: {e2}") from e2
        return self._connection(response)


class DirectAddressProvider(_HostProvider):
    """Reads the account list directly (``get_addresses()``)."""

    method = METHOD_DIRECT_ADDRESS
    host_attr = "get_addresses"

    def connect(self) -> WalletConnection:
        try:
            addresses = list(self._call() or [])
        except Exception as e:
            raise ConnectionFailedError(f"get_addresses failed: {e}") from e
        if not addresses:
            raise ConnectionFailedError("Wallet returned no addresses")
        return self._connection({"addresses": addresses})


PROVIDER_TYPES = (ShowConnectProvider, ConnectProvider, RequestProvider, DirectAddressProvider)


def providers_for(host: Any, app_details: Optional[Dict[str, str]] = None) -> List[WalletProvider]:
    """
    Build the provider variants a host object supports.

    Args:
        host: Object exposing any of ``show_connect``, ``connect``,
            ``request`` or ``get_addresses``
        app_details: Name/icon shown by the wallet prompt

    Returns:
        Available providers, in no particular order
    """
    if host is None:
        return []
    providers = [cls(host, app_details) for cls in PROVIDER_TYPES]
    return [p for p in providers if p.is_available()]


def _priority(provider: WalletProvider, strategy: Sequence[str]) -> int:
    try:
        return list(strategy).index(provider.method)
    except ValueError:
        return len(strategy)


def connect_wallet(
    providers: Iterable[WalletProvider],
    strategy: Sequence[str] = DEFAULT_STRATEGY
) -> WalletConnection:
    """
    Connect using the first provider that yields an address.

    Providers are tried in ``strategy`` order; methods not named in the
    strategy are tried last, in their given order.

    Returns:
        The established connection

    Raises:
        NoProviderError: If no provider is available
        UserCancelledError: If the user cancels any prompt
        ConnectionFailedError: If every available provider failed
    """
    available = [p for p in providers if p.is_available()]
    if not available:
        raise NoProviderError(
            "No Stacks wallet found. Install a Stacks wallet extension like Leather or Xverse."
        )

    ordered = sorted(available, key=lambda p: _priority(p, strategy))
    failures = []
    for provider in ordered:
        logger.debug(f"Trying wallet connection method {provider.method}")
        try:
            connection = provider.connect()
        except ConnectionFailedError as e:
            logger.warning(f"Wallet connection method {provider.method} failed: {e}")
            failures.append(f"{provider.method}: {e}")
            continue
        logger.info(f"Connected wallet {connection.address} via {connection.method}")
        return connection

    raise ConnectionFailedError(
        "No supported connection method worked. Tried: " + "; ".join(failures)
    )
