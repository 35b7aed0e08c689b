"""
Deployer Package
Runs the InscriptionMarket_v1 deployment
"""

from .runner import DeploymentRunner

__all__ = ['DeploymentRunner']
