"""Core functionality for deploy-waiter."""

from deploy_waiter.core.budget import TimeBudget
from deploy_waiter.core.exceptions import (
    AccessDeniedError,
    DeploymentErrorStateError,
    DeploymentNotFoundError,
    DeploymentNotReadyError,
    DeploymentTimeoutError,
    DeploymentWaitError,
)
from deploy_waiter.core.locator import DeploymentLocator, with_cursor
from deploy_waiter.core.poller import DeploymentStatusPoller
from deploy_waiter.core.reporter import GitHubActionsReporter, Reporter
from deploy_waiter.core.retryable import (
    FatalFailure,
    RetryableRequest,
    RetryOutcome,
    Success,
    TransientFailure,
)
from deploy_waiter.core.waiter import DeploymentWaiter

__all__ = [
    "DeploymentWaitError",
    "AccessDeniedError",
    "DeploymentErrorStateError",
    "DeploymentTimeoutError",
    "DeploymentNotFoundError",
    "DeploymentNotReadyError",
    "TimeBudget",
    "RetryableRequest",
    "RetryOutcome",
    "Success",
    "TransientFailure",
    "FatalFailure",
    "DeploymentLocator",
    "with_cursor",
    "DeploymentStatusPoller",
    "Reporter",
    "GitHubActionsReporter",
    "DeploymentWaiter",
]
