"""
Deployment Models
Requests, results and failure variants exchanged with the runner
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class DeploymentRequest:
    """
    A single deployment to perform

    Args:
        artifact_name: Contract name or fully-qualified name (source:Name)
        constructor_args: Positional constructor arguments
    """
    artifact_name: str
    constructor_args: Tuple[Any, ...] = ()

    def __post_init__(self):
        if not isinstance(self.artifact_name, str) or not self.artifact_name.strip():
            raise ValueError("artifact_name must be a non-empty string")

        if isinstance(self.constructor_args, (str, bytes, bytearray, Mapping)):
            raise ValueError("constructor_args must be a sequence of arguments, not a single value")

        # Freeze mutable sequences so the request cannot change after creation
        object.__setattr__(self, 'constructor_args', tuple(self.constructor_args))


@dataclass(frozen=True)
class DeploymentResult:
    """Confirmed deployment"""
    address: str
    transaction_hash: str
    gas_used: Optional[int] = None
    block_number: Optional[int] = None


@dataclass(frozen=True)
class DeploymentFailure:
    """Base class for every way a deployment can fail"""

    def __str__(self) -> str:
        return "Deployment failed"


@dataclass(frozen=True)
class ArtifactNotFound(DeploymentFailure):
    artifact_name: str

    def __str__(self) -> str:
        return f"Artifact not found: {self.artifact_name}"


@dataclass(frozen=True)
class ProviderError(DeploymentFailure):
    message: str

    def __str__(self) -> str:
        return f"Provider error: {self.message}"


@dataclass(frozen=True)
class Timeout(DeploymentFailure):
    seconds: Optional[float] = None

    def __str__(self) -> str:
        if self.seconds is None:
            return "Deployment confirmation timed out"
        return f"Deployment confirmation timed out after {self.seconds} seconds"


@dataclass(frozen=True)
class CompiledArtifact:
    """Compiled contract as produced by the Hardhat compiler"""
    contract_name: str
    source_name: str
    abi: List[Dict] = field(repr=False)
    bytecode: str = field(repr=False)

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


@dataclass(frozen=True)
class PendingDeployment:
    """Handle for a broadcast but unconfirmed deployment transaction"""
    transaction_hash: str
    contract_name: str
    sender: str
