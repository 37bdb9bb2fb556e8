"""
Deployment Runner
Resolves an artifact, deploys it once and reports the address
"""

import asyncio
from typing import Callable, Optional, Union

from loguru import logger

from .exceptions import ArtifactNotFoundError, ConfirmationTimeoutError
from .models import (
    ArtifactNotFound,
    DeploymentFailure,
    DeploymentRequest,
    DeploymentResult,
    ProviderError,
    Timeout,
)
from .provider import DeploymentProvider


class DeploymentRunner:
    """
    Drives a single deployment from Pending to Succeeded or Failed

    Failures are returned as DeploymentFailure values instead of being raised,
    so the caller decides how to turn them into an exit status.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        output: Callable[[str], None] = print
    ):
        """
        Initialize Deployment Runner

        Args:
            timeout: Seconds to wait for confirmation (None = wait forever)
            output: Sink receiving the success line
        """
        self.timeout = timeout
        self.output = output

    async def run(
        self,
        request: DeploymentRequest,
        provider: DeploymentProvider
    ) -> Union[DeploymentResult, DeploymentFailure]:
        """
        Deploy the requested artifact

        Args:
            request: What to deploy
            provider: Provider that resolves, broadcasts and confirms

        Returns:
            DeploymentResult on success, DeploymentFailure otherwise
        """
        name = request.artifact_name
        logger.info(f"Resolving artifact {name}...")

        try:
            artifact = await provider.resolve_artifact(name)
        except ArtifactNotFoundError as e:
            logger.error(f"{e}")
            return ArtifactNotFound(name)
        except Exception as e:
            logger.error(f"Error resolving artifact {name}: {e}")
            return ProviderError(str(e))

        try:
            logger.info(f"Deploying {name}...")
            handle = await provider.deploy(artifact, request.constructor_args)
        except Exception as e:
            logger.error(f"Error deploying {name}: {e}")
            return ProviderError(str(e))

        try:
            logger.info(f"Waiting for confirmation of {handle.transaction_hash}...")
            if self.timeout is None:
                result = await provider.await_confirmation(handle)
            else:
                result = await asyncio.wait_for(
                    provider.await_confirmation(handle),
                    timeout=self.timeout
                )

        except asyncio.TimeoutError:
            logger.error(f"No confirmation for {name} within {self.timeout} seconds")
            return Timeout(self.timeout)
        except ConfirmationTimeoutError as e:
            logger.error(f"{e}")
            return Timeout(e.seconds)
        except Exception as e:
            logger.error(f"Error confirming {name}: {e}")
            return ProviderError(str(e))

        logger.success(f"{name} deployed at {result.address} (tx {result.transaction_hash})")
        self.output(f"{name} deployed to: {result.address}")

        return result
