"""
Deployment Provider Interface
Capabilities the runner needs from whatever actually talks to the chain
"""

from abc import ABC, abstractmethod
from typing import Sequence

from .models import CompiledArtifact, DeploymentResult, PendingDeployment


class DeploymentProvider(ABC):
    """
    External collaborator that resolves, broadcasts and confirms deployments

    Implementations raise ArtifactNotFoundError when a name cannot be resolved,
    ConfirmationTimeoutError when confirmation takes too long, and any other
    exception for everything else.
    """

    @abstractmethod
    async def resolve_artifact(self, name: str) -> CompiledArtifact:
        """Look up a compiled artifact by contract name"""

    @abstractmethod
    async def deploy(
        self,
        artifact: CompiledArtifact,
        constructor_args: Sequence
    ) -> PendingDeployment:
        """Broadcast one deployment transaction"""

    @abstractmethod
    async def await_confirmation(self, handle: PendingDeployment) -> DeploymentResult:
        """Wait until the deployment transaction is mined"""
