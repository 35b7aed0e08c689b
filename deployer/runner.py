"""
Deployment Runner
Deploys InscriptionMarket_v1 with the owner taken from the environment
"""

import os
from typing import Dict, Mapping, Optional
from loguru import logger


CONTRACT_NAME = 'InscriptionMarket_v1'
OWNER_ENV_VAR = 'owner_test'
DEPLOY_VALUE = 0


class DeploymentRunner:
    """
    Single deployment per run: deploy -> wait for confirmation -> print address
    """

    def __init__(self, facility, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize Deployment Runner

        Args:
            facility: Deployment facility (deploy_contract -> handle)
            environ: Environment mapping (None = os.environ)
        """
        self.facility = facility
        self.environ = os.environ if environ is None else environ

    def build_request(self) -> Dict:
        """Build the deployment request from the environment"""
        # Unset owner is passed through; the facility rejects it
        return {
            'contract_name': CONTRACT_NAME,
            'owner_address': self.environ.get(OWNER_ENV_VAR),
            'value': DEPLOY_VALUE
        }

    def deploy(self) -> Dict:
        """
        Deploy and wait for confirmation

        Returns:
            Deployment result from the facility
        """
        request = self.build_request()

        if request['owner_address'] is None:
            logger.warning(f"{OWNER_ENV_VAR} is not set")

        logger.info(f"Deploying {request['contract_name']} (owner: {request['owner_address']})")

        handle = self.facility.deploy_contract(
            request['contract_name'],
            [request['owner_address']],
            {'value': request['value']}
        )

        return handle.wait_for_confirmation()

    def run(self) -> int:
        """
        Run the deployment

        Returns:
            Process exit code (0 = deployed, 1 = failed)
        """
        try:
            result = self.deploy()
        except Exception as e:
            logger.opt(exception=e).error(f"Deployment failed: {e}")
            return 1

        print(f"market_v1 deployed to {result['contract_address']}")
        return 0
