"""Pytest configuration and fixtures."""

import httpx
import pytest

from deploy_waiter.config import Settings
from deploy_waiter.core.retryable import RetryableRequest
from tests.fakes import FakeClock, FakeVercelApi, RecordingReporter


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def api() -> FakeVercelApi:
    return FakeVercelApi()


@pytest.fixture
async def requester(api: FakeVercelApi) -> RetryableRequest:
    """Request wrapper bound to the fake API."""
    async with httpx.AsyncClient(transport=api.transport) as client:
        yield RetryableRequest(client, "test-token")


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def settings() -> Settings:
    """Settings for the documented 30 second scenario."""
    return Settings.from_overrides(
        token="test-token",
        project_id="prj_123",
        team_id="team_456",
        sha="abc123",
        timeout=30,
        delay=10,
        initial_delay=5,
        _env_file=None,
    )
