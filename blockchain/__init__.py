"""
Blockchain Interaction Package
Handles artifact lookup and contract deployment over JSON-RPC
"""

from .artifact_store import ArtifactStore
from .web3_provider import Web3DeploymentProvider

__all__ = ['ArtifactStore', 'Web3DeploymentProvider']
