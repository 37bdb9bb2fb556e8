"""
Gas Calculator
Fee parameters for deployment transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class GasCalculator:
    """
    Picks EIP-1559 or legacy fee parameters depending on what the chain supports
    and caps them at the configured maximum
    """

    def __init__(self, w3: Web3, config: Dict):
        """
        Initialize Gas Calculator

        Args:
            w3: Web3 instance
            config: Deployment configuration
        """
        self.w3 = w3

        gas_settings = config['gas_settings']
        self.gas_price_buffer = gas_settings.get('gas_price_buffer', 1.0)
        self.max_gas_price_gwei = gas_settings.get('max_gas_price_gwei')
        self.priority_fee_gwei = gas_settings.get('priority_fee_gwei')

        logger.debug(
            f"Gas Calculator initialized - Max gas price: {self.max_gas_price_gwei} gwei"
        )

    @property
    def max_gas_price_wei(self) -> Optional[int]:
        if self.max_gas_price_gwei is None:
            return None
        return int(Web3.to_wei(self.max_gas_price_gwei, 'gwei'))

    async def get_fee_params(self) -> Dict[str, int]:
        """
        Get fee fields for the next transaction

        Returns:
            {'maxFeePerGas', 'maxPriorityFeePerGas'} or {'gasPrice'} in wei
        """
        latest_block = self.w3.eth.get_block('latest')
        base_fee_wei = latest_block.get('baseFeePerGas')

        if base_fee_wei is None:
            return {'gasPrice': await self.get_legacy_gas_price()}

        return await self.get_eip1559_gas_params(base_fee_wei)

    async def get_legacy_gas_price(self) -> int:
        """
        Get legacy gas price: network price plus buffer, capped

        Returns:
            Gas price in wei
        """
        gas_price_wei = int(self.w3.eth.gas_price * self.gas_price_buffer)

        cap = self.max_gas_price_wei
        if cap is not None and gas_price_wei > cap:
            logger.warning(
                f"Network gas price {Web3.from_wei(gas_price_wei, 'gwei')} gwei "
                f"capped at {self.max_gas_price_gwei} gwei"
            )
            gas_price_wei = cap

        logger.debug(f"Legacy gas price: {Web3.from_wei(gas_price_wei, 'gwei')} gwei")
        return gas_price_wei

    async def get_eip1559_gas_params(self, base_fee_wei: int) -> Dict[str, int]:
        """
        Get EIP-1559 gas parameters (maxFeePerGas, maxPriorityFeePerGas)

        Args:
            base_fee_wei: Base fee of the latest block

        Returns:
            Dict with gas parameters in wei
        """
        if self.priority_fee_gwei is None:
            priority_fee_wei = int(self.w3.eth.max_priority_fee)
        else:
            priority_fee_wei = int(Web3.to_wei(self.priority_fee_gwei, 'gwei'))

        # Room for the base fee to double before the tx becomes unincludable
        max_fee_wei = (base_fee_wei * 2) + priority_fee_wei

        cap = self.max_gas_price_wei
        if cap is not None and max_fee_wei > cap:
            logger.warning(f"maxFeePerGas capped at {self.max_gas_price_gwei} gwei")
            max_fee_wei = cap

        return {
            'maxFeePerGas': int(max_fee_wei),
            'maxPriorityFeePerGas': int(min(priority_fee_wei, max_fee_wei))
        }

    @staticmethod
    def estimate_cost_wei(gas_limit: int, fee_params: Dict[str, int]) -> int:
        """Upper bound on what the transaction can cost"""
        price = fee_params.get('maxFeePerGas', fee_params.get('gasPrice', 0))
        return gas_limit * price
