"""
Publishing Context

Responsibilities:
- Defines the s3cmd sync passes and their cache policy
- Uploads the built site to S3, one pass at a time
- Serves the built site locally for preview

Owns: Bucket layout, cache headers
Never: Modifies the output directory
"""

from plume.contexts.publishing.preview import create_preview_app, serve_preview
from plume.contexts.publishing.sync_policy import (
    DEFAULT_SYNC_PASSES,
    SyncPass,
    build_sync_command,
    plan_sync,
    select_files,
)
from plume.contexts.publishing.uploader import (
    PassResult,
    UploadResult,
    run_sync_pass,
    upload_site,
    validate_upload_args,
)

__all__ = [
    "SyncPass",
    "DEFAULT_SYNC_PASSES",
    "build_sync_command",
    "select_files",
    "plan_sync",
    "PassResult",
    "UploadResult",
    "validate_upload_args",
    "run_sync_pass",
    "upload_site",
    "create_preview_app",
    "serve_preview",
]
