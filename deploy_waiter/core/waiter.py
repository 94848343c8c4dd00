"""Deployment waiter.

Runs the two phases in sequence over one time budget:

1. locate - find the deployment built from the commit
2. poll - wait for that deployment to become ready
"""

import asyncio
import time
from typing import Awaitable, Callable

import httpx

from deploy_waiter.config import Settings
from deploy_waiter.core.budget import Clock, TimeBudget
from deploy_waiter.core.exceptions import DeploymentWaitError
from deploy_waiter.core.locator import DeploymentLocator
from deploy_waiter.core.poller import DeploymentStatusPoller
from deploy_waiter.core.reporter import Reporter
from deploy_waiter.core.retryable import RetryableRequest
from deploy_waiter.models.deployment import PollResult
from deploy_waiter.utils.logging import get_logger

Sleep = Callable[[float], Awaitable[None]]


class DeploymentWaiter:
    """Waits for the deployment of one commit and reports the outcome."""

    def __init__(
        self,
        settings: Settings,
        reporter: Reporter,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ):
        self.settings = settings
        self.reporter = reporter
        self.transport = transport
        self.sleep = sleep
        self.clock = clock
        self.logger = get_logger("waiter")

    async def run(self) -> PollResult | None:
        """Wait for the deployment.

        Returns:
            The final result, or None when the run failed. Either way the
            reporter has been told.
        """
        settings = self.settings

        self.logger.debug("waiter.initial_delay", seconds=settings.initial_delay)
        await self.sleep(settings.initial_delay)

        budget = TimeBudget.start(settings.timeout, clock=self.clock)

        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=settings.request_timeout,
        ) as client:
            requester = RetryableRequest(client, settings.token)
            locator = DeploymentLocator(
                requester, settings.api_root, settings.delay, self.sleep
            )
            poller = DeploymentStatusPoller(
                requester, settings.api_root, settings.delay, self.sleep
            )

            try:
                deployment = await locator.locate(
                    settings.project_id, settings.team_id, settings.sha, budget
                )
                self.reporter.deployment_found(deployment.id)

                result = await poller.poll(
                    deployment.id, budget, settings.canceled_as_ready
                )
            except DeploymentWaitError as exc:
                self.logger.error(
                    "waiter.failed",
                    error=type(exc).__name__,
                    elapsed_s=round(budget.elapsed(), 1),
                    **exc.details,
                )
                self.reporter.report_failure(exc.message)
                return None

        self.logger.info(
            "waiter.completed",
            deployment_id=result.id,
            state=result.final_state,
            elapsed_s=round(budget.elapsed(), 1),
        )
        self.reporter.report_success(result)
        return result
