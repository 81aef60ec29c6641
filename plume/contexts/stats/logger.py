"""
Stats context logger.

Provides logging interface for the stats context with automatic [stats] prefix.
Stats are collected during a build and log into the build session.
"""

from loguru import logger

CONTEXT_PREFIX = "[stats]"


def _log_info(message: str) -> None:
    """Log info message with [stats] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [stats] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [stats] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_language_totals(user: str, num_repos: int, bytes_per_language: dict) -> None:
    """Log a summary of the collected language byte counts."""
    total = sum(bytes_per_language.values())
    _log_info(
        f"Collected {len(bytes_per_language)} languages from {num_repos} repositories of {user}"
    )
    _log_debug(f"  Total bytes: {total}")
