"""Unit tests for the deployment status poller."""

import httpx
import pytest

from deploy_waiter.core.budget import TimeBudget
from deploy_waiter.core.exceptions import (
    AccessDeniedError,
    DeploymentErrorStateError,
    DeploymentNotReadyError,
)
from deploy_waiter.core.poller import DeploymentStatusPoller
from deploy_waiter.core.retryable import RetryableRequest
from tests.fakes import FORBIDDEN, FakeClock, FakeVercelApi, status


class TestDeploymentStatusPoller:
    """Tests for DeploymentStatusPoller."""

    @pytest.fixture
    def poller(self, requester: RetryableRequest, clock: FakeClock) -> DeploymentStatusPoller:
        return DeploymentStatusPoller(requester, delay=10, sleep=clock.sleep)

    @pytest.fixture
    def budget(self, clock: FakeClock) -> TimeBudget:
        return TimeBudget.start(30, clock=clock)

    def test_status_url(self, poller: DeploymentStatusPoller):
        assert poller.status_url("dpl_1") == "https://api.vercel.com/v13/deployments/dpl_1"

    @pytest.mark.asyncio
    async def test_ready_immediately(self, poller, budget, api: FakeVercelApi, clock):
        api.status = [status("READY", url="example.com")]

        result = await poller.poll("dpl_1", budget)

        assert result.id == "dpl_1"
        assert result.url == "example.com"
        assert result.final_state == "READY"
        assert result.alias_error == ""
        assert api.requests[0].url.path == "/v13/deployments/dpl_1"
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_polls_until_ready(self, poller, budget, api: FakeVercelApi, clock):
        api.status = [status("QUEUED"), status("BUILDING"), status("READY")]

        result = await poller.poll("dpl_1", budget)

        assert result.final_state == "READY"
        assert len(api.requests) == 3
        assert clock.sleeps == [10, 10]

    @pytest.mark.asyncio
    async def test_canceled_counts_as_ready(self, poller, budget, api: FakeVercelApi):
        api.status = [status("CANCELED", url="canceled.example.com")]

        result = await poller.poll("dpl_1", budget, canceled_as_ready=True)

        assert result.final_state == "CANCELED"
        assert result.url == "canceled.example.com"

    @pytest.mark.asyncio
    async def test_canceled_keeps_polling_when_not_ready(
        self, poller, budget, api: FakeVercelApi
    ):
        api.status = [status("CANCELED")]

        with pytest.raises(DeploymentNotReadyError) as exc_info:
            await poller.poll("dpl_1", budget, canceled_as_ready=False)

        assert len(api.requests) == 3
        assert exc_info.value.message == (
            "Deployment did not reach a ready state within the specified timeout of: 30 seconds"
        )

    @pytest.mark.asyncio
    async def test_error_state_fails_without_retry(self, poller, budget, api: FakeVercelApi, clock):
        api.status = [status("BUILDING"), status("ERROR"), status("READY")]

        with pytest.raises(DeploymentErrorStateError) as exc_info:
            await poller.poll("dpl_1", budget)

        assert exc_info.value.message == "Deployment dpl_1 is in ERROR state."
        assert len(api.requests) == 2
        assert clock.sleeps == [10]

    @pytest.mark.asyncio
    async def test_forbidden_aborts(self, poller, budget, api: FakeVercelApi, clock):
        api.status = [status("BUILDING"), FORBIDDEN]

        with pytest.raises(AccessDeniedError):
            await poller.poll("dpl_1", budget)

        assert len(api.requests) == 2
        assert clock.sleeps == [10]

    @pytest.mark.asyncio
    async def test_transient_failures_are_retried(self, poller, budget, api: FakeVercelApi, clock):
        api.status = [
            httpx.ReadTimeout("timed out"),
            (500, {"message": "oops"}),
            status("READY"),
        ]

        result = await poller.poll("dpl_1", budget)

        assert result.final_state == "READY"
        assert clock.sleeps == [10, 10]

    @pytest.mark.asyncio
    async def test_alias_error_object_is_flattened(self, poller, budget, api: FakeVercelApi):
        api.status = [
            status(
                "READY",
                aliasError={"code": "alias_failed", "message": "Domain not verified"},
            )
        ]

        result = await poller.poll("dpl_1", budget)

        assert result.alias_error == "Domain not verified"

    @pytest.mark.asyncio
    async def test_shares_budget_with_earlier_phase(self, poller, api: FakeVercelApi, clock):
        budget = TimeBudget.start(30, clock=clock)
        clock.now += 25
        api.status = [status("BUILDING")]

        with pytest.raises(DeploymentNotReadyError):
            await poller.poll("dpl_1", budget)

        assert len(api.requests) == 1

    @pytest.mark.asyncio
    async def test_expired_budget_issues_no_request(self, poller, api: FakeVercelApi, clock):
        api.status = [status("READY")]

        with pytest.raises(DeploymentNotReadyError):
            await poller.poll("dpl_1", TimeBudget.start(0, clock=clock))

        assert api.requests == []
