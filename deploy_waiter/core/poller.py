"""Phase 2: poll one deployment until it settles."""

import asyncio
from typing import Awaitable, Callable

from pydantic import ValidationError

from deploy_waiter.core.budget import TimeBudget
from deploy_waiter.core.exceptions import (
    AccessDeniedError,
    DeploymentErrorStateError,
    DeploymentNotReadyError,
)
from deploy_waiter.core.retryable import FatalFailure, RetryableRequest, TransientFailure
from deploy_waiter.models.deployment import DeploymentState, DeploymentStatus, PollResult
from deploy_waiter.utils.logging import get_logger

Sleep = Callable[[float], Awaitable[None]]


class DeploymentStatusPoller:
    """Polls the single-deployment endpoint until READY, ERROR or budget expiry."""

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
        self.logger = get_logger("deployment_status_poller")

    def status_url(self, deployment_id: str) -> str:
        return f"{self.api_base_url}/v13/deployments/{deployment_id}"

    async def poll(
        self,
        deployment_id: str,
        budget: TimeBudget,
        canceled_as_ready: bool = True,
    ) -> PollResult:
        """Wait for ``deployment_id`` to reach a ready state.

        ``CANCELED`` counts as ready only when ``canceled_as_ready`` is set;
        otherwise it is polled like any other in-progress state.

        Raises:
            AccessDeniedError: The API refused the token
            DeploymentErrorStateError: The deployment failed
            DeploymentNotReadyError: The budget expired first
        """
        url = self.status_url(deployment_id)
        self.logger.info("deployment_status_poller.started", deployment_id=deployment_id)

        while budget.remaining():
            self.logger.debug("deployment_status_poller.requesting", url=url)
            outcome = await self.requester.get(url)

            if isinstance(outcome, FatalFailure):
                raise AccessDeniedError(outcome.reason, {"phase": "poll"})

            if isinstance(outcome, TransientFailure):
                self.logger.warning(
                    "deployment_status_poller.request_failed",
                    reason=outcome.reason,
                )
                await self.sleep(self.delay)
                continue

            try:
                status = DeploymentStatus.model_validate(outcome.payload)
            except ValidationError as exc:
                self.logger.warning(
                    "deployment_status_poller.unexpected_payload",
                    errors=exc.error_count(),
                )
                await self.sleep(self.delay)
                continue

            self.logger.debug(
                "deployment_status_poller.state",
                deployment_id=deployment_id,
                state=status.status,
            )

            if status.status == DeploymentState.ERROR.value:
                raise DeploymentErrorStateError(
                    deployment_id, f"Deployment {deployment_id} is in ERROR state."
                )

            if status.is_ready(canceled_as_ready):
                self.logger.info(
                    "deployment_status_poller.ready",
                    deployment_id=deployment_id,
                    state=status.status,
                )
                return PollResult(
                    id=deployment_id,
                    url=status.url,
                    final_state=status.status,
                    alias_error=status.alias_error,
                )

            await self.sleep(self.delay)

        raise DeploymentNotReadyError(deployment_id, budget.total_seconds)
