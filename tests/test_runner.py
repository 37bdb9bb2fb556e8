"""
Unit Tests for the Deployment Runner
"""

import pytest

from deployment import (
    ArtifactNotFound,
    ConfirmationTimeoutError,
    DeploymentError,
    DeploymentRequest,
    DeploymentResult,
    DeploymentRunner,
    ProviderError,
    Timeout,
)
from conftest import StubProvider, TOKEN_ADDRESS, TX_HASH


@pytest.fixture
def output():
    lines = []
    return lines


@pytest.fixture
def runner(output):
    return DeploymentRunner(output=output.append)


class TestSuccessfulDeployment:
    """Deployments the provider accepts"""

    @pytest.mark.asyncio
    async def test_returns_stub_address(self, runner, stub_provider):
        result = await runner.run(DeploymentRequest('TokenSmithy'), stub_provider)

        assert isinstance(result, DeploymentResult)
        assert result.address == TOKEN_ADDRESS
        assert result.transaction_hash == TX_HASH

    @pytest.mark.asyncio
    async def test_emits_single_output_line(self, runner, stub_provider, output):
        await runner.run(DeploymentRequest('TokenSmithy'), stub_provider)

        assert output == [f"TokenSmithy deployed to: {TOKEN_ADDRESS}"]

    @pytest.mark.asyncio
    async def test_deploys_exactly_once_with_args(self, runner, stub_provider):
        request = DeploymentRequest('TokenSmithy', ['Smithy', 'SMT', 10**18])

        await runner.run(request, stub_provider)

        assert len(stub_provider.deploy_calls) == 1
        artifact, args = stub_provider.deploy_calls[0]
        assert artifact.contract_name == 'TokenSmithy'
        assert args == ('Smithy', 'SMT', 10**18)
        assert len(stub_provider.confirm_calls) == 1

    @pytest.mark.asyncio
    async def test_confirms_within_timeout(self, output):
        provider = StubProvider(confirm_delay=0.01)
        runner = DeploymentRunner(timeout=5, output=output.append)

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert isinstance(result, DeploymentResult)


class TestFailedDeployment:
    """Every failure path returns a DeploymentFailure and prints nothing"""

    @pytest.mark.asyncio
    async def test_unknown_artifact_never_deploys(self, runner, stub_provider, output):
        result = await runner.run(DeploymentRequest('Missing'), stub_provider)

        assert result == ArtifactNotFound('Missing')
        assert stub_provider.deploy_calls == []
        assert output == []

    @pytest.mark.asyncio
    async def test_deploy_rejection_keeps_message(self, runner, output):
        provider = StubProvider(deploy_error=ConnectionError("network unreachable"))

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert isinstance(result, ProviderError)
        assert result.message == "network unreachable"
        assert provider.confirm_calls == []
        assert output == []

    @pytest.mark.asyncio
    async def test_broadcast_timeout_is_provider_error(self, output):
        provider = StubProvider(deploy_error=TimeoutError("read timed out"))
        runner = DeploymentRunner(output=output.append)

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert result == ProviderError("read timed out")
        assert provider.confirm_calls == []

    @pytest.mark.asyncio
    async def test_broadcast_timeout_with_runner_timeout(self, output):
        provider = StubProvider(deploy_error=TimeoutError("read timed out"))
        runner = DeploymentRunner(timeout=5, output=output.append)

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert result == ProviderError("read timed out")

    @pytest.mark.asyncio
    async def test_reverted_confirmation_is_provider_error(self, runner):
        provider = StubProvider(confirm_error=DeploymentError("execution reverted"))

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert result == ProviderError("execution reverted")

    @pytest.mark.asyncio
    async def test_resolve_error_is_provider_error(self, runner, stub_provider):
        stub_provider.resolve_artifact = _raise(DeploymentError("ambiguous name"))

        result = await runner.run(DeploymentRequest('TokenSmithy'), stub_provider)

        assert result == ProviderError("ambiguous name")
        assert stub_provider.deploy_calls == []

    @pytest.mark.asyncio
    async def test_runner_timeout(self, output):
        provider = StubProvider(confirm_delay=1)
        runner = DeploymentRunner(timeout=0.01, output=output.append)

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert result == Timeout(0.01)
        assert len(provider.deploy_calls) == 1
        assert output == []

    @pytest.mark.asyncio
    async def test_provider_timeout(self, runner):
        provider = StubProvider(confirm_error=ConfirmationTimeoutError(TX_HASH, 300))

        result = await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert result == Timeout(300)

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, runner, log_messages):
        provider = StubProvider(deploy_error=RuntimeError("nonce too low"))

        await runner.run(DeploymentRequest('TokenSmithy'), provider)

        assert any("nonce too low" in m for m in log_messages)


def _raise(error):
    async def fail(*args, **kwargs):
        raise error
    return fail
