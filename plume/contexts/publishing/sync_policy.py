"""
Sync Policy

The four s3cmd sync passes used to publish the site. Each pass uploads a
filtered subset of the output directory with its own Cache-Control max-age
and, for stylesheets and scripts, an explicit MIME type:

    html   *.html                        max-age=1800
    css    *.css                         max-age=43200   text/css
    js     *.js                          max-age=43200   text/javascript
    other  everything except *.sh, *.html, *.js, *.css, *.gz   max-age=86400
"""

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class SyncPass:
    """
    One s3cmd sync invocation.

    Attributes:
        name: Pass identifier ("html", "css", "js", "other")
        max_age: Cache-Control max-age in seconds
        excludes: --exclude globs
        includes: --include globs (re-include files an exclude matched)
        mime_type: Forced MIME type (-m), None to let s3cmd guess
    """

    name: str
    max_age: int
    excludes: List[str] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    mime_type: Optional[str] = None

    @property
    def cache_control(self) -> str:
        return f"Cache-Control: max-age={self.max_age}"


DEFAULT_SYNC_PASSES = [
    SyncPass(name="html", max_age=1800, excludes=["*.*"], includes=["*.html"]),
    SyncPass(
        name="css", max_age=43200, excludes=["*.*"], includes=["*.css"], mime_type="text/css"
    ),
    SyncPass(
        name="js",
        max_age=43200,
        excludes=["*.*"],
        includes=["*.js"],
        mime_type="text/javascript",
    ),
    SyncPass(
        name="other",
        max_age=86400,
        excludes=["*.sh", "*.html", "*.js", "*.css", "*.gz"],
    ),
]


def build_sync_command(
    sync_pass: SyncPass,
    output_dir: Path,
    bucket: str,
    s3cmd: str = "s3cmd",
    dry_run: bool = False,
) -> List[str]:
    """
    Build the argument list for one sync pass.

    Args:
        sync_pass: Pass to run
        output_dir: Local site directory (synced by content, hence the trailing slash)
        bucket: Destination bucket name
        s3cmd: s3cmd executable
        dry_run: Add --dry-run (s3cmd lists what it would upload)

    Returns:
        Command suitable for subprocess.run
    """
    command = [
        s3cmd,
        "sync",
        "--progress",
        "--acl-public",
        "--add-header",
        sync_pass.cache_control,
        f"{output_dir}/",
        f"s3://{bucket}",
    ]
    for pattern in sync_pass.excludes:
        command.extend(["--exclude", pattern])
    for pattern in sync_pass.includes:
        command.extend(["--include", pattern])
    if sync_pass.mime_type:
        command.extend(["-m", sync_pass.mime_type])
    if dry_run:
        command.append("--dry-run")
    return command


def is_selected(sync_pass: SyncPass, path: PurePosixPath) -> bool:
    """
    Whether a pass uploads a file, following s3cmd's filter rules.

    A file is uploaded unless an exclude glob matches it; an include glob
    matching the file overrides the exclusion. Globs are matched against the
    whole relative path, so `*` also matches `/`.
    """
    name = str(path)
    if not any(fnmatchcase(name, pattern) for pattern in sync_pass.excludes):
        return True
    return any(fnmatchcase(name, pattern) for pattern in sync_pass.includes)


def select_files(sync_pass: SyncPass, paths: Iterable[PurePosixPath]) -> List[PurePosixPath]:
    """Filter relative paths down to the ones a pass uploads."""
    return [path for path in paths if is_selected(sync_pass, path)]


def list_output_files(output_dir: Path) -> List[PurePosixPath]:
    """All files below the output directory, relative and sorted."""
    return sorted(
        PurePosixPath(path.relative_to(output_dir).as_posix())
        for path in output_dir.rglob("*")
        if path.is_file()
    )


def plan_sync(
    output_dir: Path, passes: Optional[List[SyncPass]] = None
) -> Dict[str, List[PurePosixPath]]:
    """
    Preview which files each pass would upload.

    Files can appear in more than one pass (e.g., an extensionless file is
    uploaded by both the html and other passes, as s3cmd would).

    Returns:
        Dict mapping pass name to the selected files, in pass order
    """
    passes = passes if passes is not None else DEFAULT_SYNC_PASSES
    files = list_output_files(Path(output_dir))
    return {sync_pass.name: select_files(sync_pass, files) for sync_pass in passes}
