"""Publishing results to the calling workflow."""

import os
import sys
import uuid
from pathlib import Path
from typing import Protocol, TextIO

from deploy_waiter.models.deployment import PollResult
from deploy_waiter.utils.logging import get_logger


class Reporter(Protocol):
    """Receives the outcome of a wait."""

    def deployment_found(self, deployment_id: str) -> None: ...

    def report_success(self, result: PollResult) -> None: ...

    def report_failure(self, message: str) -> None: ...


def escape_command_data(value: str) -> str:
    """Escape a workflow command message the way the Actions runner expects."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_output(name: str, value: str) -> str:
    """Render one ``GITHUB_OUTPUT`` entry, using heredoc form for multi-line values."""
    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    return f"{name}={value}\n"


class GitHubActionsReporter:
    """Writes step outputs and error annotations for GitHub Actions.

    Outputs go to the file named by ``GITHUB_OUTPUT``; outside a runner they
    are printed to ``stream`` instead.
    """

    def __init__(self, output_path: Path | None = None, stream: TextIO | None = None):
        if output_path is None and os.environ.get("GITHUB_OUTPUT"):
            output_path = Path(os.environ["GITHUB_OUTPUT"])
        self.output_path = output_path
        self.stream = stream or sys.stdout
        self.logger = get_logger("reporter")

    def deployment_found(self, deployment_id: str) -> None:
        self.logger.info("reporter.deployment_found", deployment_id=deployment_id)

    def report_success(self, result: PollResult) -> None:
        outputs = result.as_outputs()
        entries = "".join(format_output(name, value) for name, value in outputs.items())

        if self.output_path is not None:
            with open(self.output_path, "a", encoding="utf-8") as f:
                f.write(entries)
        else:
            self.stream.write(entries)

        self.logger.info("reporter.deployment_ready", url=result.url, state=result.final_state)

    def report_failure(self, message: str) -> None:
        self.stream.write(f"::error::{escape_command_data(message)}\n")
        self.stream.flush()
