"""
Blockchain Interaction Package
Handles contract artifacts, deployment transactions and confirmation
"""

from .artifacts import ArtifactStore
from .deployment_facility import DeploymentError, DeploymentHandle, Web3DeploymentFacility

__all__ = ['ArtifactStore', 'DeploymentError', 'DeploymentHandle', 'Web3DeploymentFacility']
