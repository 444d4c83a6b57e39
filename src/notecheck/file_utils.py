"""Utilities for file operations."""

import hashlib
from pathlib import Path
from typing import Any, Dict, Tuple

import frontmatter
import yaml
from loguru import logger

FRONTMATTER_DELIMITER = "---"


class FileError(Exception):
    """Base exception for file operations."""

    pass


class FileWriteError(FileError):
    """Raised when file operations fail."""

    pass


class ParseError(FileError):
    """Raised when parsing file content fails."""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.line = line


async def compute_checksum(content: str) -> str:
    """
    Compute SHA-256 checksum of content.

    Args:
        content: Text content to hash

    Returns:
        SHA-256 hex digest

    Raises:
        FileError: If checksum computation fails
    """
    try:
        return hashlib.sha256(content.encode()).hexdigest()
    except Exception as e:
        logger.error(f"Failed to compute checksum: {e}")
        raise FileError(f"Failed to compute checksum: {e}") from e


async def ensure_directory(path: Path) -> None:
    """
    Ensure directory exists, creating if necessary.

    Raises:
        FileWriteError: If directory creation fails
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except Exception as e:
        logger.error(f"Failed to create directory: {path}: {e}")
        raise FileWriteError(f"Failed to create directory {path}: {e}") from e


async def write_file_atomic(path: Path, content: str) -> None:
    """
    Write file with atomic operation using temporary file.

    Args:
        path: Target file path
        content: Content to write

    Raises:
        FileWriteError: If write operation fails
    """
    temp_path = path.with_suffix(".tmp")
    try:
        temp_path.write_text(content, encoding="utf-8")
        temp_path.replace(path)
    except Exception as e:
        temp_path.unlink(missing_ok=True)
        logger.error(f"Failed to write file: {path}: {e}")
        raise FileWriteError(f"Failed to write file {path}: {e}") from e


async def add_frontmatter(content: str, metadata: Dict[str, Any]) -> str:
    """
    Add YAML frontmatter to content.

    Args:
        content: Main content text
        metadata: Key-value pairs for frontmatter, written in the given order

    Returns:
        Content with YAML frontmatter prepended

    Raises:
        ParseError: If YAML serialization fails
    """
    post = frontmatter.Post(content)
    post.metadata.update(metadata)
    try:
        return frontmatter.dumps(post, sort_keys=False) + "\n"
    except yaml.YAMLError as e:
        logger.error(f"Failed to add frontmatter: {e}")
        raise ParseError(f"Failed to add frontmatter: {e}") from e


def has_frontmatter(content: str) -> bool:
    """Check whether content opens with a front matter delimiter line."""
    lines = content.lstrip("\ufeff").splitlines()
    return bool(lines) and lines[0].rstrip() == FRONTMATTER_DELIMITER


def frontmatter_line_count(content: str) -> int:
    """Number of lines taken by the front matter block, delimiters included.

    Returns 0 when the content has no (complete) front matter block.
    """
    if not has_frontmatter(content):
        return 0
    lines = content.lstrip("\ufeff").splitlines()
    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONTMATTER_DELIMITER:
            return index + 1
    return 0


async def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Parse YAML frontmatter from content.

    The block must open on the first line with ``---`` and close with a
    second ``---`` line. Content without an opening delimiter has no
    frontmatter and is returned unchanged.

    Args:
        content: Text content with optional frontmatter

    Returns:
        Tuple of (frontmatter dict, remaining content)

    Raises:
        ParseError: If the block is unterminated, is not valid YAML or is
            not a mapping
    """
    try:
        if not has_frontmatter(content):
            return {}, content

        lines = content.lstrip("\ufeff").splitlines(keepends=True)
        end = frontmatter_line_count(content)
        if not end:
            raise ParseError(
                "Invalid frontmatter format: missing closing '---' delimiter", line=1
            )

        block = "".join(lines[1 : end - 1])
        remaining = "".join(lines[end:])

        try:
            frontmatter = yaml.safe_load(block)
        except yaml.YAMLError as e:
            line = None
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                # offset by the opening delimiter, 1-based
                line = mark.line + 2
            raise ParseError(f"Invalid YAML in frontmatter: {e}", line=line) from e

        if frontmatter is None:
            return {}, remaining
        if not isinstance(frontmatter, dict):
            raise ParseError("Frontmatter must be a YAML dictionary", line=2)

        return frontmatter, remaining

    except Exception as e:
        if not isinstance(e, ParseError):
            logger.error(f"Failed to parse frontmatter: {e}")
            raise ParseError(f"Failed to parse frontmatter: {e}") from e
        raise
