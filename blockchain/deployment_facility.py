"""
Deployment Facility
Deploys compiled contracts with constructor arguments and waits for confirmation
"""

import os
import time
from typing import Dict, List, Optional
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted
from eth_account import Account
from loguru import logger

from blockchain.artifacts import ArtifactStore
from utils.network_config import NetworkConfig


class DeploymentError(Exception):
    """Contract creation failed on-chain"""


class DeploymentHandle:
    """
    Pending contract creation transaction
    """

    def __init__(
        self,
        w3: Web3,
        contract_name: str,
        tx_hash,
        confirmations: int = 1,
        timeout: float = 300,
        poll_interval: float = 1
    ):
        """
        Initialize Deployment Handle

        Args:
            w3: Web3 instance
            contract_name: Name of the contract being deployed
            tx_hash: Creation transaction hash
            confirmations: Blocks required before the deployment counts as final
            timeout: Max seconds to wait for receipt and for confirmations
            poll_interval: Seconds between polls
        """
        self.w3 = w3
        self.contract_name = contract_name
        self.tx_hash = tx_hash
        self.confirmations = confirmations
        self.timeout = timeout
        self.poll_interval = poll_interval

    @property
    def transaction_hash(self) -> str:
        """Transaction hash as 0x-prefixed hex"""
        return Web3.to_hex(self.tx_hash)

    def wait_for_confirmation(self) -> Dict:
        """
        Block until the creation transaction is mined and confirmed

        Returns:
            Deployment result dict (contract_address, transaction_hash, ...)
        """
        logger.info(f"Waiting for {self.contract_name} deployment: {self.transaction_hash}")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            self.tx_hash,
            timeout=self.timeout,
            poll_latency=self.poll_interval
        )

        if receipt['status'] != 1:
            raise DeploymentError(
                f"{self.contract_name} deployment reverted (tx {self.transaction_hash})"
            )

        contract_address = receipt.get('contractAddress')

        if not contract_address:
            raise DeploymentError(
                f"Receipt for {self.transaction_hash} has no contract address"
            )

        block_number = receipt['blockNumber']
        self._wait_for_confirmations(block_number)

        code = self.w3.eth.get_code(contract_address)
        if not code:
            raise DeploymentError(f"No contract code at {contract_address}")

        logger.success(f"{self.contract_name} confirmed in block {block_number}")

        return {
            'contract_address': contract_address,
            'transaction_hash': self.transaction_hash,
            'block_number': block_number,
            'gas_used': receipt.get('gasUsed'),
            'confirmations': self.confirmations
        }

    def _wait_for_confirmations(self, block_number: int):
        """Poll until the receipt block is `confirmations` deep"""
        target_block = block_number + self.confirmations - 1
        deadline = time.monotonic() + self.timeout

        while self.w3.eth.block_number < target_block:
            if time.monotonic() >= deadline:
                raise TimeExhausted(
                    f"Block {target_block} not reached after {self.timeout} seconds"
                )
            time.sleep(self.poll_interval)


class Web3DeploymentFacility:
    """
    Contract deployment over a web3 HTTP provider

    Signs locally when an account is given, otherwise sends from the
    node's first unlocked account (local Hardhat node).
    """

    def __init__(
        self,
        w3: Web3,
        network: Dict,
        artifacts: ArtifactStore,
        account=None
    ):
        """
        Initialize Deployment Facility

        Args:
            w3: Web3 instance
            network: Resolved network profile (see NetworkConfig.get_network)
            artifacts: Artifact store for ABI/bytecode
            account: Local signing account (None = node-managed account)
        """
        self.w3 = w3
        self.network = network
        self.artifacts = artifacts
        self.account = account

    @classmethod
    def from_network(
        cls,
        network_name: Optional[str] = None,
        config_path: Optional[str] = None,
        artifacts_dir: str = 'artifacts'
    ) -> 'Web3DeploymentFacility':
        """
        Build a facility for a configured network

        Args:
            network_name: Network name (None = DEPLOY_NETWORK or config default)
            config_path: Networks JSON path
            artifacts_dir: Hardhat artifacts directory

        Returns:
            Web3DeploymentFacility
        """
        network = NetworkConfig(config_path).get_network(network_name)

        w3 = Web3(Web3.HTTPProvider(
            network['http_url'],
            request_kwargs={'timeout': network['timeout_seconds']}
        ))

        private_key = os.getenv('DEPLOYER_PRIVATE_KEY')
        account = Account.from_key(private_key) if private_key else None

        logger.info(f"Network: {network['name']} (chain {network['chain_id']})")

        return cls(w3, network, ArtifactStore(artifacts_dir), account)

    def deploy_contract(
        self,
        name: str,
        constructor_args: List,
        options: Optional[Dict] = None
    ) -> DeploymentHandle:
        """
        Send a contract creation transaction

        Args:
            name: Contract name
            constructor_args: Ordered constructor arguments
            options: Transaction options ({'value': wei})

        Returns:
            DeploymentHandle to wait on
        """
        options = options or {}

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {self.network['name']}")

        artifact = self.artifacts.load(name)
        Contract = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])

        constructor = Contract.constructor(*constructor_args)

        sender = self._get_sender()
        logger.info(f"Deploying {name} from: {sender}")

        tx_params = {
            'from': sender,
            'value': options.get('value', 0)
        }
        tx_params['gas'] = self._estimate_gas(constructor, tx_params)

        logger.info(f"Gas limit: {tx_params['gas']}")

        if self.account is not None:
            tx_params['nonce'] = self.w3.eth.get_transaction_count(sender)
            tx_params['gasPrice'] = self.w3.eth.gas_price
            tx_params['chainId'] = self.network['chain_id']

            transaction = constructor.build_transaction(tx_params)
            signed_tx = self.account.sign_transaction(transaction)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            tx_hash = constructor.transact(tx_params)

        handle = DeploymentHandle(
            self.w3,
            name,
            tx_hash,
            confirmations=int(self.network['confirmations']),
            timeout=self.network['timeout_seconds'],
            poll_interval=self.network['poll_interval_seconds']
        )

        logger.info(f"Transaction sent: {handle.transaction_hash}")
        return handle

    def _get_sender(self) -> str:
        """Address that pays for the deployment"""
        if self.account is not None:
            return self.account.address

        accounts = self.w3.eth.accounts
        if not accounts:
            raise DeploymentError(
                "No DEPLOYER_PRIVATE_KEY set and node has no unlocked accounts"
            )

        return accounts[0]

    def _estimate_gas(self, constructor, tx_params: Dict) -> int:
        """Estimate gas with buffer, falling back to the configured default"""
        try:
            gas_estimate = constructor.estimate_gas(tx_params)
            return int(gas_estimate * self.network['gas_buffer'])
        except ContractLogicError:
            raise
        except Exception as e:
            default_gas = self.network['default_gas_limit']
            logger.warning(f"Gas estimation failed: {e}, using default {default_gas}")
            return default_gas
