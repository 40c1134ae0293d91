"""
Network configuration for the block-explorer collaborators.

Networks are described in the packaged ``networks.json``; environment
variables can override the API endpoint and the default network. None of
this is consulted by the codec or the validators.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, List, Optional

from .codec import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "mainnet"


class NetworkConfig:
    """Access to the packaged Stacks network definitions"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, caching them after the first read.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("sbtc_paylink").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, name: str) -> Dict[str, Any]:
        """
        Get a single network definition.

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if name not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{name}'. Available networks: {available}")
        return networks[name]

    @classmethod
    def default_network(cls) -> str:
        """Network selected by ``STACKS_NETWORK``, defaulting to mainnet"""
        return os.environ.get("STACKS_NETWORK") or DEFAULT_NETWORK

    @classmethod
    def get_api_url(cls, name: str, override: Optional[str] = None) -> str:
        """
        Resolve the primary API URL for a network.

        Precedence: ``override``, ``<NAME>_API_URL``, ``STACKS_API_URL``,
        then the packaged definition.
        """
        if override:
            return override.rstrip("/")

        env_key = f"{name.upper().replace('-', '_')}_API_URL"
        env_url = os.environ.get(env_key) or os.environ.get("STACKS_API_URL")
        if env_url:
            return env_url.rstrip("/")

        return cls.get_network(name)["apiUrl"].rstrip("/")

    @classmethod
    def get_fallback_urls(cls, name: str) -> List[str]:
        """Mirror API URLs for a network, in the order they should be tried"""
        return [url.rstrip("/") for url in cls.get_network(name).get("fallbackUrls", [])]

    @classmethod
    def get_explorer_url(cls, name: str, tx_id: Optional[str] = None) -> str:
        """
        Block explorer URL for a network, optionally pointing at a transaction.
        """
        network = cls.get_network(name)
        url = network["explorerUrl"].rstrip("/")
        if tx_id:
            url = f"{url}/txid/{tx_id}"
        chain = network.get("explorerChain")
        if chain:
            url = f"{url}?chain={chain}"
        return url

    @classmethod
    def get_base_url(cls, override: Optional[str] = None) -> str:
        """Payment page URL used when building links (``PAYLINK_BASE_URL``)"""
        return override or os.environ.get("PAYLINK_BASE_URL") or DEFAULT_BASE_URL
