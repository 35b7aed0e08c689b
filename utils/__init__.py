"""
Utilities Package
Network configuration for deployments
"""

from .network_config import NetworkConfig

__all__ = ['NetworkConfig']
