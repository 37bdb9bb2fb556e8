"""
Deployment Orchestration Package
Runs a single contract deployment through a pluggable provider
"""

from .models import (
    DeploymentRequest,
    DeploymentResult,
    DeploymentFailure,
    ArtifactNotFound,
    ProviderError,
    Timeout,
    CompiledArtifact,
    PendingDeployment,
)
from .exceptions import DeploymentError, ArtifactNotFoundError, ConfirmationTimeoutError
from .provider import DeploymentProvider
from .runner import DeploymentRunner
from .config import load_config

__all__ = [
    'DeploymentRequest',
    'DeploymentResult',
    'DeploymentFailure',
    'ArtifactNotFound',
    'ProviderError',
    'Timeout',
    'CompiledArtifact',
    'PendingDeployment',
    'DeploymentError',
    'ArtifactNotFoundError',
    'ConfirmationTimeoutError',
    'DeploymentProvider',
    'DeploymentRunner',
    'load_config',
]
