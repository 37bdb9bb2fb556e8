"""
Web3 Deployment Provider
Signs and broadcasts contract deployments over JSON-RPC
"""

import asyncio
import os
from decimal import Decimal
from typing import Dict, Optional, Sequence

from web3 import Web3
from web3.exceptions import TimeExhausted
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

from deployment.exceptions import ConfirmationTimeoutError, DeploymentError
from deployment.models import CompiledArtifact, DeploymentResult, PendingDeployment
from deployment.provider import DeploymentProvider
from utils.gas_calculator import GasCalculator
from .artifact_store import ArtifactStore

load_dotenv()


class Web3DeploymentProvider(DeploymentProvider):
    """
    Deployment provider backed by a JSON-RPC node and a local signing key
    """

    def __init__(
        self,
        w3: Web3,
        account,
        artifact_store: ArtifactStore,
        config: Dict,
        gas_calculator: Optional[GasCalculator] = None
    ):
        """
        Initialize Web3 Deployment Provider

        Args:
            w3: Web3 instance
            account: eth_account LocalAccount paying for the deployment
            artifact_store: Where compiled contracts are looked up
            config: Deployment configuration
            gas_calculator: Fee parameter source (built from config if None)
        """
        self.w3 = w3
        self.account = account
        self.artifact_store = artifact_store
        self.gas_calculator = gas_calculator or GasCalculator(w3, config)

        gas_settings = config['gas_settings']
        self.gas_limit_buffer = gas_settings['gas_limit_buffer']
        self.default_gas_limit = gas_settings['default_gas_limit']

        self.chain_id = config.get('chain_id')
        self.min_balance_ether = Decimal(str(config.get('min_balance_ether') or 0))

        self.confirmation_timeout = config['confirmation']['timeout_seconds']
        self.poll_latency = config['confirmation']['poll_latency']

        logger.info(f"Deploying from: {self.account.address}")

    @classmethod
    def from_config(cls, config: Dict) -> 'Web3DeploymentProvider':
        """
        Build a provider from configuration and environment

        Reads RPC_URL and DEPLOYER_PRIVATE_KEY from the environment.
        """
        rpc_url = os.getenv('RPC_URL')
        private_key = os.getenv('DEPLOYER_PRIVATE_KEY')

        if not rpc_url or not private_key:
            raise ValueError("RPC_URL and DEPLOYER_PRIVATE_KEY must be set in .env")

        w3 = Web3(Web3.HTTPProvider(rpc_url))

        if not w3.is_connected():
            raise DeploymentError(f"Failed to connect to network at {rpc_url}")

        account = Account.from_key(private_key)

        return cls(w3, account, ArtifactStore(config['artifacts_dir']), config)

    async def resolve_artifact(self, name: str) -> CompiledArtifact:
        return self.artifact_store.resolve(name)

    async def deploy(
        self,
        artifact: CompiledArtifact,
        constructor_args: Sequence
    ) -> PendingDeployment:
        """
        Build, sign and send the deployment transaction

        Args:
            artifact: Compiled contract
            constructor_args: Positional constructor arguments

        Returns:
            Handle for the broadcast transaction
        """
        sender = self.account.address

        self._check_balance(sender)

        Contract = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        constructor = Contract.constructor(*constructor_args)

        logger.info("Building deployment transaction...")

        gas_limit = self._estimate_gas_limit(constructor, sender)
        fee_params = await self.gas_calculator.get_fee_params()
        chain_id = self.chain_id if self.chain_id is not None else self.w3.eth.chain_id

        transaction = constructor.build_transaction({
            'from': sender,
            'nonce': self.w3.eth.get_transaction_count(sender, 'pending'),
            'gas': gas_limit,
            'chainId': chain_id,
            **fee_params
        })

        max_cost = GasCalculator.estimate_cost_wei(gas_limit, fee_params)
        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Maximum deployment cost: {Web3.from_wei(max_cost, 'ether')} ETH")

        logger.info("Signing transaction...")
        signed_tx = self.account.sign_transaction(transaction)

        logger.info("Sending deployment transaction...")
        tx_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed_tx.raw_transaction))

        logger.info(f"Transaction sent: {tx_hash}")

        return PendingDeployment(
            transaction_hash=tx_hash,
            contract_name=artifact.contract_name,
            sender=sender
        )

    async def await_confirmation(self, handle: PendingDeployment) -> DeploymentResult:
        """
        Wait for the deployment receipt

        Args:
            handle: Broadcast deployment

        Returns:
            Confirmed deployment
        """
        tx_hash = handle.transaction_hash

        try:
            # Blocking poll loop, keep it off the event loop
            receipt = await asyncio.to_thread(
                self.w3.eth.wait_for_transaction_receipt,
                tx_hash,
                timeout=self.confirmation_timeout,
                poll_latency=self.poll_latency
            )
        except TimeExhausted:
            raise ConfirmationTimeoutError(tx_hash, self.confirmation_timeout)

        if receipt['status'] != 1:
            raise DeploymentError(
                f"Deployment of {handle.contract_name} reverted in transaction {tx_hash}"
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeploymentError(f"Receipt for {tx_hash} has no contract address")

        logger.info(f"Gas used: {receipt['gasUsed']}")

        return DeploymentResult(
            address=str(contract_address),
            transaction_hash=tx_hash,
            gas_used=receipt['gasUsed'],
            block_number=receipt.get('blockNumber')
        )

    def _check_balance(self, sender: str):
        """Refuse to deploy from an account below the configured minimum"""
        balance = Web3.from_wei(self.w3.eth.get_balance(sender), 'ether')
        logger.info(f"Account balance: {balance} ETH")

        if balance < self.min_balance_ether:
            raise DeploymentError(
                f"Insufficient balance for deployment: {balance} ETH "
                f"(need at least {self.min_balance_ether} ETH)"
            )

    def _estimate_gas_limit(self, constructor, sender: str) -> int:
        """Estimated gas plus buffer, or the configured default if estimation fails"""
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            return int(gas_estimate * self.gas_limit_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit
