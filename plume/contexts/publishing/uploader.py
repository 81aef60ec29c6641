"""
Site Uploader

Publishes a built site to an S3 bucket by running the sync passes of
sync_policy one after another with s3cmd. The upload stops at the first
failing pass, so a broken stylesheet upload never leaves fresh HTML pointing
at it.
"""

import os
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from plume.contexts.publishing.logger import (
    _log_error,
    _log_info,
    _log_success,
    log_pass_result,
    setup_publish_logger,
)
from plume.contexts.publishing.sync_policy import (
    DEFAULT_SYNC_PASSES,
    SyncPass,
    build_sync_command,
)
from plume.utils.event_logging import LOGS_PATH, log_site_event
from plume.utils.timestamp import now

load_dotenv()
S3CMD = os.getenv("S3CMD", "s3cmd")


@dataclass
class PassResult:
    """
    Result of one sync pass.

    Attributes:
        name: Pass name
        command: Command that was run
        returncode: s3cmd exit code (127 if s3cmd could not be started)
        stdout: Standard output from s3cmd
        stderr: Standard error from s3cmd
        time_s: Pass duration in seconds
    """

    name: str
    command: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    time_s: float = 0.0

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass
class UploadResult:
    """
    Result of a site upload.

    Attributes:
        success: Whether every pass succeeded
        bucket: Destination bucket
        passes: Results of the passes that ran, in order
        errors: Error messages (empty on success)
        dry_run: Whether s3cmd ran with --dry-run
        time_s: Upload duration in seconds
        log_dir: Session log directory
    """

    success: bool
    bucket: str
    passes: List[PassResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    dry_run: bool = False
    time_s: float = 0.0
    log_dir: Optional[Path] = None


def validate_upload_args(output_dir: Path, bucket: str) -> None:
    """
    Check the upload arguments before anything is sent.

    Raises:
        ValueError: If the output directory does not exist or the bucket name is
                    empty or contains a scheme or slashes
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise ValueError(f"Output directory not found: {output_dir}")

    if not bucket or not bucket.strip():
        raise ValueError("Bucket name must not be empty")
    if "://" in bucket:
        raise ValueError(f"Bucket name must not include a scheme: {bucket!r}")
    if "/" in bucket:
        raise ValueError(f"Bucket name must not contain '/': {bucket!r}")
    if bucket != bucket.strip():
        raise ValueError(f"Bucket name must not have surrounding whitespace: {bucket!r}")


def run_sync_pass(
    sync_pass: SyncPass,
    output_dir: Path,
    bucket: str,
    s3cmd: Optional[str] = None,
    dry_run: bool = False,
) -> PassResult:
    """
    Run a single sync pass.

    Args:
        sync_pass: Pass to run
        output_dir: Local site directory
        bucket: Destination bucket name
        s3cmd: s3cmd executable (default: S3CMD env or "s3cmd")
        dry_run: Forward --dry-run to s3cmd

    Returns:
        PassResult with exit code and captured output
    """
    s3cmd = s3cmd or S3CMD
    command = build_sync_command(sync_pass, output_dir, bucket, s3cmd=s3cmd, dry_run=dry_run)
    start_time = time.time()

    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as e:
        return PassResult(
            name=sync_pass.name,
            command=command,
            returncode=127,
            stderr=f"Could not run {s3cmd}: {e}",
            time_s=time.time() - start_time,
        )

    return PassResult(
        name=sync_pass.name,
        command=command,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
        time_s=time.time() - start_time,
    )


def upload_site(
    output_dir: Path,
    bucket: str,
    passes: Optional[List[SyncPass]] = None,
    s3cmd: Optional[str] = None,
    dry_run: bool = False,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
) -> UploadResult:
    """
    Upload a built site to S3 with logging and event tracking.

    Runs the passes in order and stops at the first one that fails. Start,
    per-pass, completion, and failure events go to the site event log.

    Args:
        output_dir: Built site directory
        bucket: Destination bucket name (without s3://)
        passes: Sync passes (default: DEFAULT_SYNC_PASSES)
        s3cmd: s3cmd executable (default: S3CMD env or "s3cmd")
        dry_run: Forward --dry-run to s3cmd
        log_dir: Session log directory (default: LOGS_PATH/publish_<timestamp>)
        verbose: Log s3cmd output for successful passes too

    Returns:
        UploadResult with per-pass results

    Raises:
        ValueError: If output_dir or bucket is invalid
    """
    validate_upload_args(output_dir, bucket)
    output_dir = Path(output_dir).resolve()
    passes = passes if passes is not None else DEFAULT_SYNC_PASSES

    if log_dir is None:
        log_dir = LOGS_PATH / f"publish_{now()}"
    log_dir = Path(log_dir)

    setup_publish_logger(log_dir, output_dir, bucket)
    _log_info(f"Uploading {output_dir} to s3://{bucket}" + (" (dry run)" if dry_run else ""))

    log_site_event(
        event_type="upload_started",
        source="publishing",
        output_dir=str(output_dir),
        bucket=bucket,
        dry_run=dry_run,
    )

    result = UploadResult(success=True, bucket=bucket, dry_run=dry_run, log_dir=log_dir)
    start_time = time.time()

    for sync_pass in passes:
        pass_result = run_sync_pass(sync_pass, output_dir, bucket, s3cmd=s3cmd, dry_run=dry_run)
        result.passes.append(pass_result)
        log_pass_result(pass_result, verbose=verbose)

        log_site_event(
            event_type="upload_pass_completed" if pass_result.success else "upload_pass_failed",
            source="publishing",
            bucket=bucket,
            sync_pass=pass_result.name,
            returncode=pass_result.returncode,
            pass_time_s=round(pass_result.time_s, 2),
        )

        if not pass_result.success:
            result.success = False
            message = f"Pass '{pass_result.name}' failed with exit code {pass_result.returncode}"
            if pass_result.stderr.strip():
                message += f": {pass_result.stderr.strip().splitlines()[-1]}"
            result.errors.append(message)
            break

    result.time_s = time.time() - start_time

    if result.success:
        _log_success(f"Upload completed: {len(result.passes)} passes ({result.time_s:.2f}s)")
        log_site_event(
            event_type="upload_completed",
            source="publishing",
            bucket=bucket,
            upload_time_s=round(result.time_s, 2),
            dry_run=dry_run,
        )
    else:
        skipped = len(passes) - len(result.passes)
        _log_error(f"Upload stopped; {skipped} passes not run. Logs kept in {log_dir}")
        log_site_event(
            event_type="upload_failed",
            source="publishing",
            bucket=bucket,
            upload_time_s=round(result.time_s, 2),
            errors=result.errors,
        )

    return result
