#!/usr/bin/env python3
"""
Site Build and Preview CLI

Builds the static site from a content directory and serves the result locally.

Commands:
    build - Render markdown sources, static files, index, and feeds
    serve - Serve a built site for preview

Examples:\n

    build_site.py build --input content --output output

    build_site.py build -i content -o output --siteurl https://blog.example.com

    build_site.py build -i content -o output --config site.yaml --github-stats

    build_site.py serve --output output --port 8000
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from plume.contexts.publishing.preview import DEFAULT_HOST, DEFAULT_PORT, serve_preview
from plume.contexts.rendering import build_site
from plume.utils.site_config import SiteConfigError, load_site_config


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Build the static site from markdown sources and preview it locally",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    input_dir: Annotated[
        Path,
        typer.Option("--input", "-i", help="Content directory with markdown sources"),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output directory (removed and recreated)"),
    ],
    siteurl: Annotated[
        Optional[str],
        typer.Option("--siteurl", "-s", help="Absolute site URL used in feed links"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Site configuration file (site.yaml)"),
    ] = None,
    github_stats: Annotated[
        bool,
        typer.Option("--github-stats", help="Also write the GitHub language stats script"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show every build error"),
    ] = False,
):
    """
    Build the site.

    Drafts (`status: draft`) are skipped. Feeds are written to the paths in the
    site configuration (default: feeds/all.rss.xml and feeds/all.atom.xml).

    Examples:\n

        $ build_site.py build -i content -o output                        # Build with defaults

        $ build_site.py build -i content -o output -s https://example.com  # Absolute feed links

        $ build_site.py build -i content -o output -c site.yaml -v         # Config file, verbose
    """
    try:
        config = load_site_config(config_path, siteurl=siteurl)
    except SiteConfigError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nBuilding: {display_path(input_dir.resolve())}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Output: {display_path(output_dir.resolve())}")
    typer.echo("")

    result = build_site(
        input_dir=input_dir,
        output_dir=output_dir,
        config=config,
        github_stats=github_stats,
        verbose=verbose,
    )

    typer.echo("")
    if result.success:
        typer.secho("✓ Build succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.pages_written}")
        typer.echo(f"  Drafts skipped: {result.drafts_skipped}")
        typer.echo(f"  Static files: {result.static_files_copied}")
        for feed in result.feeds:
            typer.echo(f"  Feed: {display_path(feed)}")
        if result.stats_path:
            typer.echo(f"  Language stats: {display_path(result.stats_path)}")
    else:
        typer.secho(
            f"✗ Build failed with {len(result.errors)} errors", fg=typer.colors.RED, bold=True
        )
        for error in result.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        if len(result.errors) > 10:
            typer.echo(f"  ... and {len(result.errors) - 10} more")

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'build.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("serve")
def serve_command(
    output_dir: Annotated[
        Path,
        typer.Option("--output", "-o", help="Built site directory to serve"),
    ] = Path("output"),
    host: Annotated[
        str,
        typer.Option("--host", help="Interface to bind"),
    ] = DEFAULT_HOST,
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to listen on", min=1, max=65535),
    ] = DEFAULT_PORT,
):
    """
    Serve a built site locally.

    Examples:\n

        $ build_site.py serve                           # Serve ./output on 127.0.0.1:8000

        $ build_site.py serve -o public --port 9000     # Serve another directory
    """
    try:
        serve_preview(output_dir, host=host, port=port)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
