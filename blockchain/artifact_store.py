"""
Artifact Store
Looks up compiled contracts in a Hardhat artifacts directory
"""

import json
import os
from pathlib import Path
from typing import List

from loguru import logger

from deployment.exceptions import ArtifactNotFoundError, DeploymentError
from deployment.models import CompiledArtifact


class ArtifactStore:
    """
    Resolves contract names to Hardhat artifact files

    Layout: artifacts/<source path>/<ContractName>.json, e.g.
    artifacts/contracts/TokenSmithy.sol/TokenSmithy.json
    """

    def __init__(self, artifacts_dir: str = "artifacts"):
        """
        Initialize Artifact Store

        Args:
            artifacts_dir: Root of the Hardhat artifacts tree
        """
        self.root = Path(artifacts_dir)

    def resolve(self, name: str) -> CompiledArtifact:
        """
        Load the artifact for a contract

        Args:
            name: Contract name or fully-qualified name (source:Name)

        Returns:
            CompiledArtifact ready for deployment
        """
        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
            path = self.root / source_name / f"{contract_name}.json"

            if not path.is_file():
                raise ArtifactNotFoundError(name, str(self.root))
        else:
            path = self._find_by_name(name)

        artifact = self._load(path)
        logger.debug(f"Resolved {name} to {path}")
        return artifact

    def _find_by_name(self, contract_name: str) -> Path:
        """Find the single artifact file for a bare contract name"""
        if not self.root.is_dir():
            raise ArtifactNotFoundError(contract_name, str(self.root))

        matches = self._candidates(contract_name)

        if not matches:
            raise ArtifactNotFoundError(contract_name, str(self.root))

        if len(matches) > 1:
            sources = ', '.join(
                f"{os.path.relpath(path.parent, self.root)}:{contract_name}"
                for path in matches
            )
            raise DeploymentError(
                f"Multiple artifacts named {contract_name}, "
                f"use a fully-qualified name: {sources}"
            )

        return matches[0]

    def _candidates(self, contract_name: str) -> List[Path]:
        """Artifact files matching a name, excluding debug files and build info"""
        matches = []

        for path in self.root.rglob(f"{contract_name}.json"):
            relative = path.relative_to(self.root)
            if relative.parts and relative.parts[0] == 'build-info':
                continue
            matches.append(path)

        return sorted(matches)

    def _load(self, path: Path) -> CompiledArtifact:
        """Parse and validate an artifact file"""
        with open(path, 'r') as f:
            contract_json = json.load(f)

        try:
            abi = contract_json['abi']
            bytecode = contract_json['bytecode']
        except KeyError as e:
            raise DeploymentError(f"Malformed artifact {path}: missing {e}")

        contract_name = contract_json.get('contractName', path.stem)
        source_name = contract_json.get(
            'sourceName',
            os.path.relpath(path.parent, self.root)
        )

        if not bytecode or bytecode == '0x':
            raise DeploymentError(
                f"{source_name}:{contract_name} is abstract or an interface "
                f"and can't be deployed"
            )

        if contract_json.get('linkReferences'):
            libraries = ', '.join(
                f"{source}:{library}"
                for source, refs in contract_json['linkReferences'].items()
                for library in refs
            )
            raise DeploymentError(
                f"{source_name}:{contract_name} needs linked libraries: {libraries}"
            )

        return CompiledArtifact(
            contract_name=contract_name,
            source_name=source_name,
            abi=abi,
            bytecode=bytecode
        )
