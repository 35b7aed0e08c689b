"""
Network Config
Named network profiles for contract deployment (localhost, sepolia, ...)
"""

import os
import json
from typing import Dict, List, Optional
from loguru import logger


DEFAULT_CONFIG_PATH = 'config/networks.json'

DEPLOYMENT_DEFAULTS = {
    'timeout_seconds': 300,
    'poll_interval_seconds': 1,
    'gas_buffer': 1.2,
    'default_gas_limit': 3000000
}


class NetworkConfig:
    """
    Loads network profiles from JSON

    Each profile carries an RPC endpoint (literal `http_url` or an
    `http_url_env` variable name), a chain id and the confirmation
    depth the deployer waits for.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize Network Config

        Args:
            config_path: Path to networks JSON (None = DEPLOY_NETWORKS_CONFIG or default)
        """
        self.config_path = (
            config_path
            or os.getenv('DEPLOY_NETWORKS_CONFIG')
            or DEFAULT_CONFIG_PATH
        )

        with open(self.config_path, 'r') as f:
            self.config = json.load(f)

        self.networks = self.config.get('networks', {})
        self.default_network = self.config.get('default_network')

        logger.debug(f"Loaded {len(self.networks)} networks from {self.config_path}")

    def list_networks(self) -> List[str]:
        """Get names of all configured networks"""
        return list(self.networks.keys())

    def resolve_name(self, name: Optional[str] = None) -> str:
        """
        Pick the active network name

        Args:
            name: Explicit network name (None = DEPLOY_NETWORK or config default)

        Returns:
            Network name
        """
        network_name = name or os.getenv('DEPLOY_NETWORK') or self.default_network

        if not network_name:
            raise ValueError("No network selected and no default_network configured")

        return network_name

    def get_network(self, name: Optional[str] = None) -> Dict:
        """
        Get a fully resolved network profile

        Args:
            name: Network name (None = active network)

        Returns:
            Network dict with deployment defaults merged in
        """
        network_name = self.resolve_name(name)

        if network_name not in self.networks:
            raise ValueError(
                f"Unknown network '{network_name}' "
                f"(available: {', '.join(self.list_networks())})"
            )

        network = dict(DEPLOYMENT_DEFAULTS)
        network.update(self.config.get('deployment', {}))
        network.update(self.networks[network_name])
        network['network'] = network_name
        network.setdefault('name', network_name)
        network.setdefault('confirmations', 1)

        if not network.get('http_url'):
            url_env = network.get('http_url_env')
            http_url = os.getenv(url_env) if url_env else None

            if not http_url:
                raise ValueError(
                    f"No RPC URL for network '{network_name}' "
                    f"(set {url_env or 'http_url'})"
                )

            network['http_url'] = http_url

        if int(network['confirmations']) < 1:
            raise ValueError(f"confirmations must be >= 1 for network '{network_name}'")

        return network
