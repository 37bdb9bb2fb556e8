"""
Deployment Exceptions
Raised by providers; the runner turns them into failure values
"""

from typing import Optional


class DeploymentError(Exception):
    """Generic provider-side deployment error"""


class ArtifactNotFoundError(DeploymentError):
    """No compiled artifact matches the requested name"""

    def __init__(self, artifact_name: str, searched: Optional[str] = None):
        self.artifact_name = artifact_name
        message = f"Artifact for contract '{artifact_name}' not found"
        if searched:
            message += f" in {searched}"
        super().__init__(message)


class ConfirmationTimeoutError(DeploymentError):
    """Deployment transaction was not confirmed in time"""

    def __init__(self, transaction_hash: str, seconds: float):
        self.transaction_hash = transaction_hash
        self.seconds = seconds
        super().__init__(
            f"Transaction {transaction_hash} not confirmed after {seconds} seconds"
        )
