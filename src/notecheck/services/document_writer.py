"""Writer for new documentation pages."""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from notecheck.file_utils import (
    FileWriteError,
    add_frontmatter,
    ensure_directory,
    write_file_atomic,
)
from notecheck.markdown.schemas import DocumentFrontmatter
from notecheck.utils import generate_slug


class DocumentWriter:
    """Formats documents into markdown files with frontmatter."""

    def __init__(self, base_path: Path):
        self.base_path = base_path

    def format_frontmatter(self, title: str, draft: bool, tags: List[str]) -> dict:
        """Build validated frontmatter, dropping duplicate tags in order."""
        unique_tags = list(dict.fromkeys(t.strip() for t in tags if t.strip()))
        model = DocumentFrontmatter(title=title, draft=draft, tags=unique_tags)
        return model.model_dump(include={"title", "draft", "tags"})

    def format_content(self, title: str, content: Optional[str] = None) -> str:
        body = content.strip() if content else ""
        if body:
            return f"# {title}\n\n{body}\n"
        return f"# {title}\n"

    async def render(
        self, title: str, draft: bool = True, tags: Optional[List[str]] = None, content: Optional[str] = None
    ) -> str:
        return await add_frontmatter(
            self.format_content(title, content), self.format_frontmatter(title, draft, tags or [])
        )

    async def write(
        self,
        title: str,
        draft: bool = True,
        tags: Optional[List[str]] = None,
        content: Optional[str] = None,
        directory: Optional[Path] = None,
    ) -> Path:
        """Write a new document named after its title.

        Raises:
            FileWriteError: If the target already exists or cannot be written
        """
        slug = generate_slug(title)
        if not slug:
            raise FileWriteError(f"Cannot derive a file name from title {title!r}")

        target_dir = directory or self.base_path
        await ensure_directory(target_dir)
        path = target_dir / f"{slug}.md"
        if path.exists():
            raise FileWriteError(f"File already exists: {path}")

        await write_file_atomic(path, await self.render(title, draft, tags, content))
        logger.info(f"Created {path}")
        return path
