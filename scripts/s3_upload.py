#!/usr/bin/env python3
"""
S3 Upload CLI

Uploads a built site to an S3 bucket with s3cmd, in four sync passes with
per-type cache headers (html, css, js, everything else).

Examples:\n

    s3_upload.py output my-bucket              # Upload

    s3_upload.py output my-bucket --plan       # Show which files each pass uploads

    s3_upload.py output my-bucket --dry-run    # Let s3cmd report without uploading
"""

from pathlib import Path

import typer
from typing_extensions import Annotated

from plume.contexts.publishing.sync_policy import DEFAULT_SYNC_PASSES, plan_sync
from plume.contexts.publishing.uploader import upload_site, validate_upload_args

app = typer.Typer(
    help="Upload a built site to S3 with s3cmd",
    add_completion=False,
)


@app.command()
def main(
    output_dir: Annotated[
        Path,
        typer.Argument(help="Built site directory"),
    ],
    bucket: Annotated[
        str,
        typer.Argument(help="Destination bucket name (without s3://)"),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Run s3cmd with --dry-run"),
    ] = False,
    plan: Annotated[
        bool,
        typer.Option("--plan", help="List the files each pass would upload and exit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log s3cmd output for every pass"),
    ] = False,
):
    """
    Upload OUTPUT_DIR to s3://BUCKET.

    Stops at the first pass that fails.
    """
    try:
        validate_upload_args(output_dir, bucket)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if plan:
        max_ages = {sync_pass.name: sync_pass.max_age for sync_pass in DEFAULT_SYNC_PASSES}
        for name, files in plan_sync(output_dir).items():
            typer.secho(
                f"\n{name} (max-age={max_ages[name]}): {len(files)} files",
                fg=typer.colors.BLUE,
                bold=True,
            )
            for path in files:
                typer.echo(f"  {path}")
        typer.echo("")
        raise typer.Exit(code=0)

    typer.secho(f"\nUploading: {output_dir} → s3://{bucket}", fg=typer.colors.BLUE, bold=True)
    if dry_run:
        typer.echo("Dry run: s3cmd will not upload anything")
    typer.echo("")

    result = upload_site(output_dir, bucket, dry_run=dry_run, verbose=verbose)

    typer.echo("")
    for pass_result in result.passes:
        mark = "✓" if pass_result.success else "✗"
        color = typer.colors.GREEN if pass_result.success else typer.colors.RED
        typer.secho(f"  {mark} {pass_result.name} ({pass_result.time_s:.2f}s)", fg=color)

    if result.success:
        typer.secho("✓ Upload succeeded", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("✗ Upload failed", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    if result.log_dir:
        typer.echo(f"  Log: {result.log_dir / 'publish.log'}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


if __name__ == "__main__":
    app()
