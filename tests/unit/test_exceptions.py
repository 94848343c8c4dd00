"""Unit tests for failure messages."""

import pytest

from deploy_waiter.core.exceptions import (
    DeploymentNotFoundError,
    DeploymentNotReadyError,
    DeploymentTimeoutError,
    format_seconds,
)


class TestTimeoutMessages:
    """Tests for timeout error messages."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (30, "30"),
            (30.0, "30"),
            (1_000_000, "1000000"),
            (2.5, "2.5"),
            (0, "0"),
        ],
    )
    def test_format_seconds(self, seconds, expected):
        assert format_seconds(seconds) == expected

    def test_large_timeout_not_in_scientific_notation(self):
        error = DeploymentNotFoundError("abc123", 1_000_000)

        assert error.message == (
            "Deployment with commit SHA abc123 was not found within the "
            "timeout period of 1000000 seconds."
        )
        assert isinstance(error, DeploymentTimeoutError)
        assert error.details == {"timeout": 1_000_000, "sha": "abc123"}

    def test_not_ready_message(self):
        error = DeploymentNotReadyError("dpl_1", 1_200_000)

        assert error.message.endswith("timeout of: 1200000 seconds")
        assert error.deployment_id == "dpl_1"
