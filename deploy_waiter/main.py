"""Command-line entry point."""

import argparse
import asyncio
from typing import Any, Sequence

from pydantic import ValidationError

from deploy_waiter import __version__
from deploy_waiter.config import Settings
from deploy_waiter.core.reporter import GitHubActionsReporter, Reporter
from deploy_waiter.core.waiter import DeploymentWaiter
from deploy_waiter.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deploy-waiter",
        description="Wait for the Vercel deployment of a commit to become ready.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--token", help="Vercel access token")
    parser.add_argument("--project-id", dest="project_id")
    parser.add_argument("--team-id", dest="team_id")
    parser.add_argument("--sha", help="Commit SHA of the deployment")
    parser.add_argument("--timeout", type=int, help="Overall timeout in seconds (default 600)")
    parser.add_argument("--delay", type=int, help="Seconds between polls (default 10)")
    parser.add_argument(
        "--initial-delay", dest="initial_delay", type=int,
        help="Seconds to wait before the first poll (default 5)",
    )
    parser.add_argument(
        "--canceled-as-ready", dest="canceled_as_ready", choices=["true", "false"],
        help="Treat a canceled deployment as ready (default true)",
    )
    parser.add_argument("--api-base-url", dest="api_base_url")
    parser.add_argument(
        "--log-level", dest="log_level", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    parser.add_argument("--log-format", dest="log_format", choices=["console", "json"])
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line values layered on top."""
    overrides: dict[str, Any] = {
        key: value for key, value in vars(args).items() if value is not None
    }
    return Settings.from_overrides(**overrides)


def main(argv: Sequence[str] | None = None, reporter: Reporter | None = None) -> int:
    """Run the waiter; returns the process exit code."""
    args = build_parser().parse_args(argv)
    reporter = reporter or GitHubActionsReporter()

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        configure_logging()
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
        logger.error("config.invalid", fields=missing)
        reporter.report_failure(f"Invalid configuration: {missing}")
        return 1

    configure_logging(settings.log_level, settings.log_format)

    try:
        result = asyncio.run(DeploymentWaiter(settings, reporter).run())
    except Exception as exc:
        logger.exception("waiter.unexpected_error")
        reporter.report_failure(f"Action failed with error: {exc}")
        return 1

    return 0 if result is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
