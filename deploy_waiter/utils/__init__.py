"""Utility functions for deploy-waiter."""

from deploy_waiter.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
