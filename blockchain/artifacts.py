"""
Artifact Store
Loads compiled Hardhat contract artifacts (ABI + bytecode)
"""

import os
import json
from typing import Dict
from loguru import logger


class ArtifactStore:
    """
    Resolves contract names to Hardhat artifact files

    Standard layout: artifacts/contracts/<Name>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: str = 'artifacts'):
        """
        Initialize Artifact Store

        Args:
            artifacts_dir: Hardhat artifacts directory
        """
        self.artifacts_dir = artifacts_dir

    def artifact_path(self, contract_name: str) -> str:
        """
        Find the artifact file for a contract

        Args:
            contract_name: Contract name (e.g. InscriptionMarket_v1)

        Returns:
            Path to artifact JSON
        """
        standard_path = os.path.join(
            self.artifacts_dir,
            'contracts',
            f"{contract_name}.sol",
            f"{contract_name}.json"
        )

        if os.path.exists(standard_path):
            return standard_path

        # Contract declared in a file with a different name
        target = f"{contract_name}.json"
        for root, dirs, files in os.walk(self.artifacts_dir):
            dirs[:] = sorted(d for d in dirs if d != 'build-info')
            if target in files:
                return os.path.join(root, target)

        raise FileNotFoundError(
            f"Contract artifact not found for {contract_name} in {self.artifacts_dir} "
            f"(run 'npx hardhat compile' first)"
        )

    def load(self, contract_name: str) -> Dict:
        """
        Load ABI and bytecode for a contract

        Args:
            contract_name: Contract name

        Returns:
            Dict with contract_name, abi, bytecode, path
        """
        path = self.artifact_path(contract_name)

        with open(path, 'r') as f:
            contract_json = json.load(f)

        abi = contract_json['abi']
        bytecode = contract_json.get('bytecode', '0x')

        if not bytecode or bytecode == '0x':
            raise ValueError(
                f"{contract_name} has no bytecode (abstract contract or interface?)"
            )

        logger.debug(f"Loaded artifact for {contract_name} from {path}")

        return {
            'contract_name': contract_name,
            'abi': abi,
            'bytecode': bytecode,
            'path': path
        }
