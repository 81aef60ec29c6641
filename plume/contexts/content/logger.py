"""
Content context logger.

Provides logging interface for the content context with automatic [content] prefix.
The content context logs into the session configured by the build (see
plume.contexts.rendering.logger.setup_build_logger).
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[content]"


def _log_info(message: str) -> None:
    """Log info message with [content] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [content] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [content] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_sources_discovered(input_dir: Path, num_sources: int, num_static: int) -> None:
    """Log the result of scanning the content directory."""
    _log_info(f"Discovered {num_sources} markdown sources in {input_dir}")
    _log_debug(f"  Static files: {num_static}")
