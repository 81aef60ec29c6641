"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from plume.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_build_logger(log_dir: Path, input_dir: Path, output_dir: Path) -> Path:
    """
    Setup logger for a site build session.

    Args:
        log_dir: Directory for this build session
        input_dir: Content directory being built
        output_dir: Output directory being written

    Returns:
        Path to log file

    Example:
        from plume.contexts.rendering.logger import setup_build_logger, _log_info

        log_file = setup_build_logger(log_dir, Path("content"), Path("output"))
        _log_info("Rendering pages...")
    """
    return _setup_logger(
        context_name="build",
        log_dir=log_dir,
        extra_provenance={"Input": input_dir, "Output": output_dir},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_build_start(input_dir: Path, output_dir: Path, siteurl: str) -> None:
    """Log start of a build with context."""
    _log_info(f"Building site from {input_dir}")
    _log_info(f"Writing to {output_dir}")
    _log_debug(f"  Site URL: {siteurl or '(none)'}")


def log_build_result(result, elapsed_time: float, verbose: bool = False) -> None:
    """
    Log build result with diagnostics.

    Args:
        result: BuildResult from build_site()
        elapsed_time: Time taken to build
        verbose: Show every error instead of the first few (default: False)
    """
    if result.success:
        _log_success(
            f"Build succeeded: {result.pages_written} pages, "
            f"{result.drafts_skipped} drafts skipped, "
            f"{result.static_files_copied} static files ({elapsed_time:.2f}s)"
        )
        for feed in result.feeds:
            _log_debug(f"  Feed: {feed}")
    else:
        _log_error(f"Build failed with {len(result.errors)} errors ({elapsed_time:.2f}s)")
        error_limit = len(result.errors) if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")
