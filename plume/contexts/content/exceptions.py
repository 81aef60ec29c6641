"""Custom exceptions for the content context with source references."""

from pathlib import Path
from typing import Optional


class MetadataError(ValueError):
    """
    Exception raised when a source file's metadata header is missing or malformed.

    Attributes:
        message: Error description
        source_path: Path of the offending source file
        line: The header line that failed to parse
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.line = line

        parts = [message]

        if source_path:
            parts.append(f"Source: {source_path}")

        if line is not None:
            snippet = line[:120] + "..." if len(line) > 120 else line
            parts.append(f"Line: {snippet!r}")

        super().__init__("\n".join(parts))
