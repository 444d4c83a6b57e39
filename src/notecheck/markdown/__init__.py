"""Base package for markdown parsing."""

from notecheck.file_utils import ParseError
from notecheck.markdown.document_parser import DocumentParser
from notecheck.markdown.fences import parse_info_string, scan_fences
from notecheck.markdown.schemas import (
    CodeBlock,
    DocumentFrontmatter,
    DocumentMarkdown,
    Heading,
)

__all__ = [
    "CodeBlock",
    "DocumentFrontmatter",
    "DocumentMarkdown",
    "DocumentParser",
    "Heading",
    "ParseError",
    "parse_info_string",
    "scan_fences",
]
