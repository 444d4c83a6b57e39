"""Parser for documentation markdown files.

Uses markdown-it for block structure (headings) and a line scanner for
fenced code blocks, so that an unterminated fence is visible instead of
being silently closed at end of file.
"""

from pathlib import Path
from typing import Any, Dict, List

from loguru import logger
from markdown_it import MarkdownIt
from pydantic import ValidationError

from notecheck.file_utils import (
    FileError,
    ParseError,
    compute_checksum,
    frontmatter_line_count,
    has_frontmatter,
    parse_frontmatter,
)
from notecheck.markdown.fences import scan_fences
from notecheck.markdown.schemas import DocumentFrontmatter, DocumentMarkdown, Heading

md = MarkdownIt("commonmark")


def parse_headings(content: str, line_offset: int = 0) -> List[Heading]:
    """Extract ATX and setext headings from markdown content."""
    headings = []
    tokens = md.parse(content)
    for index, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        inline = tokens[index + 1]
        line = token.map[0] + 1 + line_offset if token.map else None
        headings.append(
            Heading(level=int(token.tag[1:]), text=inline.content.strip(), line=line or 0)
        )
    return headings


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into a single readable line."""
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "frontmatter"
        message = item["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{field}: {message}")
    return "; ".join(messages)


class DocumentParser:
    """Parser for markdown files into DocumentMarkdown objects."""

    def __init__(self, base_path: Path):
        """Initialize parser with base path for resolving relative paths."""
        self.base_path = base_path.resolve()

    def get_file_path(self, path: Path | str) -> Path:
        """Get absolute path for a file using the base path."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.base_path / path

    def parse_frontmatter_model(self, metadata: Dict[str, Any]) -> DocumentFrontmatter:
        """Validate a raw front matter mapping.

        Raises:
            ParseError: If required fields are missing or mistyped
        """
        try:
            return DocumentFrontmatter.model_validate(metadata)
        except ValidationError as e:
            raise ParseError(f"Invalid frontmatter: {format_validation_error(e)}") from e

    async def parse_file(self, path: Path | str, encoding: str = "utf-8") -> DocumentMarkdown:
        """
        Parse a markdown file.

        Args:
            path: Absolute path, or path relative to the base path
            encoding: File encoding to use

        Returns:
            Parsed document

        Raises:
            FileError: If the file does not exist
            ParseError: If the file cannot be decoded
        """
        absolute_path = self.get_file_path(path)
        if not absolute_path.is_file():
            raise FileError(f"File does not exist: {absolute_path}")

        try:
            content = absolute_path.read_text(encoding=encoding)
        except UnicodeError as e:
            raise ParseError(f"Failed to decode {absolute_path}: {e}") from e

        return await self.parse_content(content, absolute_path)

    async def parse_content(self, content: str, path: Path | str) -> DocumentMarkdown:
        """Parse raw file content into a DocumentMarkdown.

        Front matter syntax errors and field errors are recorded on the
        document rather than raised, so callers can report every problem in
        a file at once.
        """
        try:
            document = DocumentMarkdown(
                path=Path(path),
                has_frontmatter=has_frontmatter(content),
                checksum=await compute_checksum(content),
            )

            body = content
            offset = 0
            try:
                metadata, body = await parse_frontmatter(content)
                offset = frontmatter_line_count(content)
                document.metadata = metadata
            except ParseError as e:
                logger.debug(f"Frontmatter syntax error in {path}: {e}")
                document.frontmatter_error = str(e)
                document.frontmatter_error_line = e.line
                # scan the whole file so fence problems are still reported
                body = content
                offset = 0

            if document.has_frontmatter and document.frontmatter_error is None:
                try:
                    document.frontmatter = self.parse_frontmatter_model(document.metadata)
                except ParseError as e:
                    logger.debug(f"Invalid frontmatter fields in {path}: {e}")

            document.content = body
            document.code_blocks = scan_fences(body, line_offset=offset)
            document.headings = parse_headings(body, line_offset=offset)
            return document

        except Exception as e:
            if not isinstance(e, (FileError, ParseError)):
                logger.error(f"Failed to parse {path}: {e}")
                raise ParseError(f"Failed to parse {path}: {e}") from e
            raise
