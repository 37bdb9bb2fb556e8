"""
Shared test fixtures
"""

import asyncio
import copy
import json

import pytest
from loguru import logger

from deployment import (
    ArtifactNotFoundError,
    CompiledArtifact,
    DeploymentProvider,
    DeploymentResult,
    PendingDeployment,
)
from deployment.config import DEFAULT_CONFIG


TOKEN_ADDRESS = '0xABC0000000000000000000000000000000000123'
TX_HASH = '0x' + 'ab' * 32


class StubProvider(DeploymentProvider):
    """In-memory provider recording every call"""

    def __init__(self, artifacts=('TokenSmithy',), address=TOKEN_ADDRESS,
                 deploy_error=None, confirm_error=None, confirm_delay=0):
        self.artifacts = set(artifacts)
        self.address = address
        self.deploy_error = deploy_error
        self.confirm_error = confirm_error
        self.confirm_delay = confirm_delay
        self.deploy_calls = []
        self.confirm_calls = []

    async def resolve_artifact(self, name):
        if name not in self.artifacts:
            raise ArtifactNotFoundError(name)
        return CompiledArtifact(
            contract_name=name,
            source_name=f"contracts/{name}.sol",
            abi=[],
            bytecode='0x6080'
        )

    async def deploy(self, artifact, constructor_args):
        self.deploy_calls.append((artifact, tuple(constructor_args)))
        if self.deploy_error:
            raise self.deploy_error
        return PendingDeployment(
            transaction_hash=TX_HASH,
            contract_name=artifact.contract_name,
            sender='0x0000000000000000000000000000000000000001'
        )

    async def await_confirmation(self, handle):
        self.confirm_calls.append(handle)
        if self.confirm_delay:
            await asyncio.sleep(self.confirm_delay)
        if self.confirm_error:
            raise self.confirm_error
        return DeploymentResult(address=self.address, transaction_hash=handle.transaction_hash)


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def config(tmp_path):
    """Default config writing its env file into tmp_path"""
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg['output']['env_path'] = str(tmp_path / '.env')
    return cfg


@pytest.fixture
def log_messages():
    """Capture loguru output as plain strings"""
    messages = []
    handler_id = logger.add(lambda m: messages.append(str(m)), format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat-style artifacts tree with a single TokenSmithy contract"""
    root = tmp_path / 'artifacts'
    write_artifact(root, 'contracts/TokenSmithy.sol', 'TokenSmithy')
    return root


def write_artifact(root, source_name, contract_name, bytecode='0x60806040', **extra):
    """Write an artifact file the way the Hardhat compiler lays it out"""
    directory = root / source_name
    directory.mkdir(parents=True, exist_ok=True)

    artifact = {
        '_format': 'hh-sol-artifact-1',
        'contractName': contract_name,
        'sourceName': source_name,
        'abi': [{'inputs': [], 'stateMutability': 'nonpayable', 'type': 'constructor'}],
        'bytecode': bytecode,
        'deployedBytecode': bytecode,
        'linkReferences': {},
        'deployedLinkReferences': {}
    }
    artifact.update(extra)

    path = directory / f'{contract_name}.json'
    path.write_text(json.dumps(artifact))
    (directory / f'{contract_name}.dbg.json').write_text(
        json.dumps({'_format': 'hh-sol-dbg-1', 'buildInfo': '../../build-info/abc.json'})
    )
    return path
