"""Schema models for documentation markdown files."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class DocumentFrontmatter(BaseModel):
    """Front matter of a documentation page.

    ``draft`` is a strict boolean: YAML strings such as ``"false"`` are
    rejected instead of being coerced.
    """

    model_config = ConfigDict(extra="allow")

    title: str
    draft: StrictBool = False
    tags: List[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def tags_are_strings(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError("tags must be a list of strings")
        for tag in v:
            if not isinstance(tag, str):
                raise ValueError(f"tag {tag!r} is not a string")
        return list(v)

    @property
    def metadata(self) -> Dict[str, Any]:
        """Keys beyond title, draft and tags."""
        return dict(self.model_extra or {})


class Heading(BaseModel):
    """A markdown heading."""

    level: int
    text: str
    line: int


class CodeBlock(BaseModel):
    """A fenced code block."""

    fence: str
    info: str = ""
    language: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)
    start_line: int
    end_line: Optional[int] = None
    closed: bool = True
    content: str = ""

    @property
    def title(self) -> Optional[str]:
        """Filename hint from the ``title`` attribute, if any."""
        return self.attributes.get("title")


class DocumentMarkdown(BaseModel):
    """A parsed documentation file.

    ``metadata`` holds the raw front matter mapping. ``frontmatter`` is only
    set when that mapping validates; field problems are reported by the
    checks rather than raised by the parser.
    """

    path: Path
    has_frontmatter: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)
    frontmatter: Optional[DocumentFrontmatter] = None
    frontmatter_error: Optional[str] = None
    frontmatter_error_line: Optional[int] = None
    content: str = ""
    headings: List[Heading] = Field(default_factory=list)
    code_blocks: List[CodeBlock] = Field(default_factory=list)
    checksum: Optional[str] = None

    @property
    def title(self) -> Optional[str]:
        if self.frontmatter:
            return self.frontmatter.title
        title = self.metadata.get("title")
        return title if isinstance(title, str) else None

    @property
    def draft(self) -> Optional[bool]:
        draft = self.metadata.get("draft")
        return draft if isinstance(draft, bool) else None

    @property
    def tags(self) -> List[str]:
        if self.frontmatter:
            return self.frontmatter.tags
        tags = self.metadata.get("tags")
        if isinstance(tags, list):
            return [t for t in tags if isinstance(t, str)]
        return []
