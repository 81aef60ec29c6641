"""
Preview Server

Serves a built site locally with FastAPI's StaticFiles so pages, feeds, and
relative links can be checked before uploading. Directory URLs resolve to
their index.html, like a bucket website endpoint.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from plume.contexts.publishing.logger import _log_info

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def create_preview_app(output_dir: Path) -> FastAPI:
    """
    Create an app serving the output directory at the root.

    Raises:
        ValueError: If the output directory does not exist
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise ValueError(f"Output directory not found: {output_dir}")

    app = FastAPI(title="Plume preview", docs_url=None, redoc_url=None, openapi_url=None)
    app.mount("/", StaticFiles(directory=output_dir, html=True), name="site")
    return app


def serve_preview(output_dir: Path, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve the output directory with uvicorn until interrupted."""
    import uvicorn

    app = create_preview_app(output_dir)
    _log_info(f"Serving {output_dir} at http://{host}:{port}/")
    uvicorn.run(app, host=host, port=port)
