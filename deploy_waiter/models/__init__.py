"""Data models for deploy-waiter."""

from deploy_waiter.models.deployment import (
    ApiError,
    CandidateDeployment,
    DeploymentListing,
    DeploymentMeta,
    DeploymentState,
    DeploymentStatus,
    Pagination,
    PollResult,
)

__all__ = [
    # API payloads
    "ApiError",
    "CandidateDeployment",
    "DeploymentListing",
    "DeploymentMeta",
    "DeploymentStatus",
    "Pagination",
    # Lifecycle
    "DeploymentState",
    # Results
    "PollResult",
]
