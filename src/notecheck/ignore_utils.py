"""Utilities for handling .gitignore patterns and file filtering."""

import fnmatch
from pathlib import Path
from typing import Iterable, Set

from loguru import logger

# Directories and files a documentation site never treats as content
DEFAULT_IGNORE_PATTERNS = {
    ".git",
    ".github",
    ".notecheck",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".DS_Store",
    "Thumbs.db",
    ".idea",
    ".vscode",
    ".obsidian",
    ".cache",
    "public",
    "resources/_gen",
    "_site",
}


def load_gitignore_patterns(base_path: Path, extra: Iterable[str] = ()) -> Set[str]:
    """Load gitignore patterns from .gitignore file and add default patterns.

    Args:
        base_path: The base directory to search for .gitignore file
        extra: Additional patterns from configuration

    Returns:
        Set of patterns to ignore
    """
    patterns = set(DEFAULT_IGNORE_PATTERNS)
    patterns.update(p for p in extra if p)

    gitignore_file = base_path / ".gitignore"
    if gitignore_file.exists():
        try:
            with gitignore_file.open("r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    # Skip empty lines, comments and negations
                    if line and not line.startswith("#") and not line.startswith("!"):
                        patterns.add(line)
        except OSError as e:
            logger.warning(f"Could not read {gitignore_file}: {e}")

    return patterns


def should_ignore_path(file_path: Path, base_path: Path, ignore_patterns: Set[str]) -> bool:
    """Check if a file path should be ignored based on gitignore patterns.

    Args:
        file_path: The file path to check
        base_path: The base directory for relative path calculation
        ignore_patterns: Set of patterns to match against

    Returns:
        True if the path should be ignored, False otherwise
    """
    try:
        relative_path = file_path.relative_to(base_path)
    except ValueError:
        # Outside the base directory, nothing to match against
        return False

    relative_posix = relative_path.as_posix()

    for pattern in ignore_patterns:
        # Root relative patterns
        if pattern.startswith("/"):
            root_pattern = pattern[1:]
            if root_pattern.endswith("/"):
                if relative_path.parts and relative_path.parts[0] == root_pattern[:-1]:
                    return True
            elif fnmatch.fnmatch(relative_posix, root_pattern) or relative_posix.startswith(
                f"{root_pattern}/"
            ):
                return True
            continue

        # Directory patterns
        if pattern.endswith("/"):
            if pattern[:-1] in relative_path.parts[:-1]:
                return True
            continue

        # Multi-segment patterns match a path prefix
        if "/" in pattern:
            if relative_posix == pattern or relative_posix.startswith(f"{pattern}/"):
                return True
            if fnmatch.fnmatch(relative_posix, pattern):
                return True
            continue

        # Direct name match (e.g., ".git", "node_modules")
        if pattern in relative_path.parts:
            return True

        # Glob against any path segment
        if any(fnmatch.fnmatch(part, pattern) for part in relative_path.parts):
            return True

    return False


def filter_files(
    files: list[Path], base_path: Path, ignore_patterns: Set[str] | None = None
) -> tuple[list[Path], int]:
    """Filter a list of files based on gitignore patterns.

    Args:
        files: List of file paths to filter
        base_path: The base directory for relative path calculation
        ignore_patterns: Set of patterns to ignore. If None, loads from .gitignore

    Returns:
        Tuple of (filtered_files, ignored_count)
    """
    if ignore_patterns is None:
        ignore_patterns = load_gitignore_patterns(base_path)

    filtered_files = []
    ignored_count = 0

    for file_path in files:
        if should_ignore_path(file_path, base_path, ignore_patterns):
            ignored_count += 1
        else:
            filtered_files.append(file_path)

    return filtered_files, ignored_count
