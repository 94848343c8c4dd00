"""Single authenticated GET, classified for the polling loops.

Every request ends in exactly one of three outcomes:

- ``Success``: a 2xx answer with a JSON object body and no error object
- ``TransientFailure``: anything worth another attempt after the poll delay
- ``FatalFailure``: a ``forbidden`` error; the run must stop without retrying

The request itself never sleeps. Callers sleep on ``TransientFailure`` only.
"""

from dataclasses import dataclass
from typing import Any, Union

import httpx
from pydantic import ValidationError

from deploy_waiter.models.deployment import ApiError
from deploy_waiter.utils.logging import get_logger

logger = get_logger("retryable_request")


@dataclass(frozen=True)
class Success:
    """The request returned a usable JSON body."""

    payload: dict[str, Any]


@dataclass(frozen=True)
class TransientFailure:
    """The request failed in a way that may clear up on its own."""

    reason: str


@dataclass(frozen=True)
class FatalFailure:
    """Access was refused; no amount of retrying will help."""

    reason: str


RetryOutcome = Union[Success, TransientFailure, FatalFailure]


def _error_object(body: Any) -> ApiError | None:
    if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
        return None
    try:
        return ApiError.model_validate(body["error"])
    except ValidationError:
        return ApiError(code="unknown", message=str(body["error"]))


def classify_response(response: httpx.Response) -> RetryOutcome:
    """Map an HTTP response to a ``RetryOutcome``."""
    try:
        body = response.json()
    except ValueError:
        body = None

    error = _error_object(body)
    # A forbidden body is fatal even when it arrives with a 403 status
    if error is not None and error.is_forbidden:
        return FatalFailure(error.describe())

    if not response.is_success:
        return TransientFailure(f"HTTP error! Status: {response.status_code}")
    if error is not None:
        return TransientFailure(f"API error {error.code}: {error.message}")
    if not isinstance(body, dict):
        return TransientFailure("Response body is not a JSON object")
    return Success(body)


class RetryableRequest:
    """Issues bearer-authenticated GET requests against the Vercel API."""

    def __init__(self, client: httpx.AsyncClient, token: str):
        self.client = client
        self._headers = {"Authorization": f"Bearer {token}"}

    async def get(self, url: httpx.URL | str) -> RetryOutcome:
        """Perform one GET and classify the result."""
        try:
            response = await self.client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            logger.debug("retryable_request.transport_error", url=str(url), error=str(exc))
            return TransientFailure(str(exc) or type(exc).__name__)

        outcome = classify_response(response)
        logger.debug(
            "retryable_request.completed",
            url=str(url),
            status_code=response.status_code,
            outcome=type(outcome).__name__,
        )
        return outcome
