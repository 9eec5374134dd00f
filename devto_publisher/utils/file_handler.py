# devto_publisher/utils/file_handler.py
"""
file_handler.py

Utility functions for locating and reading markdown articles.

Dependencies: built-in modules only
Input: file and directory paths
Output: file content, display names, markdown file listings
"""

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def read_file(filepath: str | Path, encoding: str = 'utf-8') -> str:
    """Reads and returns the contents of a file."""
    path = Path(filepath)
    if not path.is_file():
        logger.error(f"Attempted to read a non-existent file: {filepath}")
        raise FileNotFoundError(f"File not found: {filepath}")
    try:
        content = path.read_text(encoding=encoding)
        logger.debug(f"Read {len(content)} characters from {filepath}")
        return content
    except Exception as e:
        logger.error(f"Failed to read file {filepath}: {e}")
        raise RuntimeError(f"Failed to read file {filepath}") from e


def display_name(filepath: str | Path, directory: str = "") -> str:
    """Identifier shown in diagnostics: the configured directory plus the file's basename."""
    basename = Path(filepath).name
    if not directory:
        return basename
    return f"{directory.rstrip('/')}/{basename}"


def find_markdown_files(directory: str | Path) -> List[Path]:
    """Returns the markdown files directly inside *directory*, sorted by name."""
    path = Path(directory)
    if not path.is_dir():
        logger.error(f"Articles directory not found: {directory}")
        raise FileNotFoundError(f"Directory not found: {directory}")
    files = sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() == MARKDOWN_SUFFIX)
    logger.debug(f"Found {len(files)} markdown file(s) in {directory}")
    return files
