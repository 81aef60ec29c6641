"""
Publishing context logger.

Provides logging interface for the publishing context with automatic [publish] prefix.
All publishing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from plume.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[publish]"


def setup_publish_logger(log_dir: Path, output_dir: Path, bucket: str) -> Path:
    """
    Setup logger for an upload session.

    Args:
        log_dir: Directory for this upload session
        output_dir: Site directory being uploaded
        bucket: Destination bucket name

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="publish",
        log_dir=log_dir,
        extra_provenance={"Output": output_dir, "Bucket": f"s3://{bucket}"},
    )


# Wrapper functions with automatic [publish] prefix


def _log_info(message: str) -> None:
    """Log info message with [publish] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [publish] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [publish] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [publish] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level publishing-specific logging helpers


def log_pass_result(result, verbose: bool = False) -> None:
    """
    Log the outcome of one sync pass.

    Args:
        result: PassResult from run_sync_pass()
        verbose: Dump s3cmd output even when the pass succeeded
    """
    if result.success:
        _log_success(f"Pass '{result.name}' completed ({result.time_s:.2f}s)")
    else:
        _log_error(f"Pass '{result.name}' failed with exit code {result.returncode}")

    _log_debug(f"  Command: {' '.join(result.command)}")

    # Raw output keeps s3cmd's progress lines intact
    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nS3CMD STDOUT:\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nS3CMD STDERR:\n{'=' * 80}\n{result.stderr}\n"
            )
