"""Phase 1: find the deployment built from a commit.

Walks the paginated deployments listing until an entry's
``meta.githubCommitSha`` equals the target SHA or the budget runs out.
When the listing is exhausted the search starts over from the first page,
so a deployment created after the search began is still picked up.
"""

import asyncio
from typing import Awaitable, Callable

import httpx
from pydantic import ValidationError

from deploy_waiter.core.budget import TimeBudget
from deploy_waiter.core.exceptions import (
    AccessDeniedError,
    DeploymentErrorStateError,
    DeploymentNotFoundError,
)
from deploy_waiter.core.retryable import FatalFailure, RetryableRequest, TransientFailure
from deploy_waiter.models.deployment import CandidateDeployment, DeploymentListing
from deploy_waiter.utils.logging import get_logger

Sleep = Callable[[float], Awaitable[None]]

# Page size requested from the listing endpoint
PAGE_SIZE = 100

# Query parameter carrying the pagination cursor
CURSOR_PARAM = "until"


def with_cursor(url: httpx.URL, cursor: str) -> httpx.URL:
    """Return ``url`` with its cursor parameter set to ``cursor``.

    Any existing cursor is replaced, so the result always carries exactly one.
    """
    return url.copy_set_param(CURSOR_PARAM, cursor)


class DeploymentLocator:
    """Searches the deployments listing for a commit SHA."""

    def __init__(
        self,
        requester: RetryableRequest,
        api_base_url: str = "https://api.vercel.com",
        delay: float = 10,
        sleep: Sleep = asyncio.sleep,
    ):
        self.requester = requester
        self.api_base_url = api_base_url.rstrip("/")
        self.delay = delay
        self.sleep = sleep
        self.logger = get_logger("deployment_locator")

    def listing_url(self, project_id: str, team_id: str) -> httpx.URL:
        """First page of the project's deployments."""
        return httpx.URL(
            f"{self.api_base_url}/v6/deployments",
            params={"projectId": project_id, "teamId": team_id, "limit": PAGE_SIZE},
        )

    async def locate(
        self,
        project_id: str,
        team_id: str,
        sha: str,
        budget: TimeBudget,
    ) -> CandidateDeployment:
        """Find the deployment for ``sha``.

        Args:
            project_id: Vercel project the deployment belongs to
            team_id: Team owning the project
            sha: Commit SHA recorded in the deployment metadata
            budget: Time budget shared with the status phase

        Returns:
            The first matching deployment, in listing order

        Raises:
            AccessDeniedError: The API refused the token
            DeploymentErrorStateError: The matching deployment already failed
            DeploymentNotFoundError: No match before the budget expired
        """
        base_url = self.listing_url(project_id, team_id)
        request_url = base_url

        self.logger.info("deployment_locator.started", sha=sha, project_id=project_id)

        while budget.remaining():
            self.logger.debug("deployment_locator.requesting", url=str(request_url))
            outcome = await self.requester.get(request_url)

            if isinstance(outcome, FatalFailure):
                raise AccessDeniedError(outcome.reason, {"phase": "locate"})

            if isinstance(outcome, TransientFailure):
                self.logger.warning(
                    "deployment_locator.request_failed",
                    reason=outcome.reason,
                )
                await self.sleep(self.delay)
                continue

            try:
                listing = DeploymentListing.model_validate(outcome.payload)
            except ValidationError as exc:
                self.logger.warning(
                    "deployment_locator.unexpected_payload",
                    errors=exc.error_count(),
                )
                await self.sleep(self.delay)
                continue

            deployment = listing.find_by_sha(sha)
            if deployment is not None:
                self.logger.info(
                    "deployment_locator.found",
                    deployment_id=deployment.id,
                    state=deployment.lifecycle_state,
                )
                if deployment.is_error:
                    raise DeploymentErrorStateError(
                        deployment.id,
                        f"Deployment {deployment.id} is in ERROR state. Failing immediately.",
                    )
                return deployment

            cursor = listing.next_cursor
            if cursor:
                request_url = with_cursor(request_url, cursor)
            else:
                # Listing exhausted; rescan from the first page next time
                request_url = base_url

            self.logger.debug(
                "deployment_locator.not_found_yet",
                sha=sha,
                elapsed_s=round(budget.elapsed(), 1),
                next_cursor=cursor,
            )
            await self.sleep(self.delay)

        raise DeploymentNotFoundError(sha, budget.total_seconds)
