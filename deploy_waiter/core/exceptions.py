"""Custom exceptions for deploy-waiter."""

from typing import Any


def format_seconds(seconds: float) -> str:
    """Render a duration the way it was configured: `600`, not `600.0` or `6e+02`."""
    if float(seconds).is_integer():
        return str(int(seconds))
    return str(seconds)


class DeploymentWaitError(Exception):
    """Base exception for deploy-waiter.

    The message is the single human-readable failure reported for the run.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AccessDeniedError(DeploymentWaitError):
    """The API answered with a ``forbidden`` error; never retried."""

    pass


class DeploymentErrorStateError(DeploymentWaitError):
    """The target deployment is in the ``ERROR`` state."""

    def __init__(self, deployment_id: str, message: str):
        super().__init__(message, {"deployment_id": deployment_id})
        self.deployment_id = deployment_id


class DeploymentTimeoutError(DeploymentWaitError):
    """The shared time budget ran out."""

    def __init__(self, message: str, timeout: float, details: dict[str, Any] | None = None):
        super().__init__(message, {"timeout": timeout, **(details or {})})
        self.timeout = timeout


class DeploymentNotFoundError(DeploymentTimeoutError):
    """No deployment for the commit appeared before the budget expired."""

    def __init__(self, sha: str, timeout: float):
        super().__init__(
            f"Deployment with commit SHA {sha} was not found within the "
            f"timeout period of {format_seconds(timeout)} seconds.",
            timeout,
            {"sha": sha},
        )
        self.sha = sha


class DeploymentNotReadyError(DeploymentTimeoutError):
    """The deployment did not become ready before the budget expired."""

    def __init__(self, deployment_id: str, timeout: float):
        super().__init__(
            "Deployment did not reach a ready state within the specified "
            f"timeout of: {format_seconds(timeout)} seconds",
            timeout,
            {"deployment_id": deployment_id},
        )
        self.deployment_id = deployment_id
