"""Reading and writing Markdown/text documents with basic safety checks."""

import logging
from pathlib import Path
from typing import Union

from mdvars.exceptions import (
    DocumentError,
    DocumentNotFoundError,
    DocumentTooLargeError,
    UnsupportedDocumentError,
)


logger = logging.getLogger(__name__)

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024
SUPPORTED_EXTENSIONS = {'.md', '.txt'}


def validate_extension(path: Path) -> None:
    """Reject anything but .md and .txt files (case-insensitive)."""
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedDocumentError(
            f"Unsupported file type: {path}. Only .md and .txt files are supported"
        )


def read_document(path: Union[str, Path]) -> str:
    """
    Read a document.

    Raises:
        DocumentNotFoundError: If the file does not exist
        DocumentTooLargeError: If the file is over 10 MiB
        UnsupportedDocumentError: If the extension is not .md or .txt
        DocumentError: If the file cannot be read
    """
    path = Path(path)

    try:
        size = path.stat().st_size
    except FileNotFoundError:
        raise DocumentNotFoundError(f"File not found: {path}")

    if size > MAX_DOCUMENT_BYTES:
        raise DocumentTooLargeError(f"File too large (max 10MB): {path}")

    validate_extension(path)

    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Failed to read file {path}: {e}") from e


def write_document(path: Union[str, Path], content: str) -> None:
    """Write a document, creating parent directories as needed."""
    path = Path(path)
    validate_extension(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise DocumentError(f"Failed to save file {path}: {e}") from e

    logger.info(f"Saved document: {path}")
