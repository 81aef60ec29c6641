"""Custom exceptions for the rendering context with template references."""

from pathlib import Path
from typing import Optional


class PageRenderError(Exception):
    """
    Exception raised when a page or feed template fails to render or be written.

    Attributes:
        message: Error description
        page: Site-relative URL of the page being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 or OS error
    """

    def __init__(
        self,
        message: str,
        page: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.page = page
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if page:
            parts.append(f"Page: {page}")

        if template_path:
            parts.append(f"Template: {template_path}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
