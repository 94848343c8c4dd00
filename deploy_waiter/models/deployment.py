"""Deployment data models.

Mirrors the parts of the Vercel REST API the waiter reads: the paginated
``/v6/deployments`` listing and the single ``/v13/deployments/{id}`` record.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeploymentState(str, Enum):
    """Known deployment lifecycle states."""

    QUEUED = "QUEUED"
    INITIALIZING = "INITIALIZING"
    BUILDING = "BUILDING"
    READY = "READY"
    ERROR = "ERROR"
    CANCELED = "CANCELED"


class ApiError(BaseModel):
    """Error object returned under the ``error`` key."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    code: str = ""
    message: str = ""
    invalid_token: bool = Field(default=False, alias="invalidToken")

    @property
    def is_forbidden(self) -> bool:
        return self.code == "forbidden"

    def describe(self) -> str:
        """Message reported to the user, flagging rejected credentials."""
        if self.invalid_token:
            return f"{self.message} (Invalid token detected.)"
        return self.message


class DeploymentMeta(BaseModel):
    """Source-control metadata attached to a deployment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    github_commit_sha: str | None = Field(default=None, alias="githubCommitSha")


class CandidateDeployment(BaseModel):
    """One entry of the deployments listing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="uid")
    url: str | None = None
    meta: DeploymentMeta | None = None
    state: str | None = None
    status: str | None = None

    @property
    def commit_sha(self) -> str | None:
        return self.meta.github_commit_sha if self.meta else None

    @property
    def lifecycle_state(self) -> str | None:
        return self.state or self.status

    @property
    def is_error(self) -> bool:
        # The listing may report the lifecycle under either key
        return DeploymentState.ERROR.value in (self.state, self.status)


class Pagination(BaseModel):
    """Cursor block of a listing response."""

    model_config = ConfigDict(extra="ignore")

    next: int | str | None = None


class DeploymentListing(BaseModel):
    """A page of the deployments listing."""

    model_config = ConfigDict(extra="ignore")

    deployments: list[CandidateDeployment]
    pagination: Pagination | None = None

    @property
    def next_cursor(self) -> str | None:
        """Cursor for the following page, or None when the listing is exhausted."""
        if self.pagination is None or self.pagination.next in (None, ""):
            return None
        return str(self.pagination.next)

    def find_by_sha(self, sha: str) -> CandidateDeployment | None:
        """Return the first deployment, in page order, built from ``sha``."""
        for deployment in self.deployments:
            if deployment.commit_sha == sha:
                return deployment
        return None


class DeploymentStatus(BaseModel):
    """Body of the single-deployment endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str | None = None
    url: str = ""
    alias_error: str = Field(default="", alias="aliasError")

    @field_validator("url", mode="before")
    @classmethod
    def _none_url(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("alias_error", mode="before")
    @classmethod
    def _flatten_alias_error(cls, value: Any) -> str:
        """Vercel reports alias errors as ``{code, message}``; keep the message."""
        if not value:
            return ""
        if isinstance(value, dict):
            return str(value.get("message") or value.get("code") or "")
        return str(value)

    def is_ready(self, canceled_as_ready: bool) -> bool:
        if self.status == DeploymentState.READY.value:
            return True
        return canceled_as_ready and self.status == DeploymentState.CANCELED.value


class PollResult(BaseModel):
    """Final outcome of a successful wait."""

    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    final_state: str
    alias_error: str = ""

    def as_outputs(self) -> dict[str, str]:
        """Output names and values published to the workflow."""
        return {
            "id": self.id,
            "url": self.url,
            "state": self.final_state,
            "alias_error": self.alias_error,
        }
