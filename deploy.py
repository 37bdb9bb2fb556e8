"""
Contract Deployment - Main Entry Point
Deploys the configured contract and prints its address
"""

import asyncio
import os
import sys
from typing import Dict, Optional

from loguru import logger

from blockchain.web3_provider import Web3DeploymentProvider
from deployment import (
    DeploymentFailure,
    DeploymentProvider,
    DeploymentRequest,
    DeploymentRunner,
    load_config,
)
from utils.env_file import update_env_file


def configure_logging():
    """Send logs to stderr and to a rotating file"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv('LOG_LEVEL', 'INFO')
    )
    logger.add(
        "data/logs/deploy.log",
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


async def main(
    provider: Optional[DeploymentProvider] = None,
    config: Optional[Dict] = None
) -> int:
    """
    Run one deployment

    Args:
        provider: Deployment provider (None = Web3 provider from config)
        config: Deployment configuration (None = load from disk)

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    try:
        if config is None:
            config = load_config()

        request = DeploymentRequest(
            artifact_name=config['artifact_name'],
            constructor_args=config['constructor_args']
        )

        if provider is None:
            provider = Web3DeploymentProvider.from_config(config)

        runner = DeploymentRunner(timeout=config['confirmation']['timeout_seconds'])
        outcome = await runner.run(request, provider)

    except Exception as e:
        logger.error(f"{e}")
        return 1

    if isinstance(outcome, DeploymentFailure):
        logger.error(f"{outcome}")
        return 1

    env_key = config['output'].get('env_key')
    if env_key:
        update_env_file(env_key, outcome.address, config['output'].get('env_path', '.env'))

    return 0


def cli():
    """Console script entry point"""
    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
