"""Structural checks over parsed documents.

Each rule takes a DocumentMarkdown and the CheckOptions in force and returns
the issues it finds. Rules never raise for authoring errors.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from notecheck.markdown.schemas import DocumentMarkdown


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Issue:
    """A single problem found in a document."""

    path: Path
    rule: str
    severity: Severity
    message: str
    line: Optional[int] = None

    @property
    def location(self) -> str:
        if self.line:
            return f"{self.path}:{self.line}"
        return str(self.path)


@dataclass(frozen=True)
class CheckOptions:
    """Settings that change how rules judge a document."""

    require_draft: bool = True


DEFAULT_OPTIONS = CheckOptions()

Rule = Callable[[DocumentMarkdown, CheckOptions], List[Issue]]

RULES: Dict[str, Rule] = {}
RULE_DESCRIPTIONS: Dict[str, str] = {}


def rule(name: str, description: str):
    """Register a check under name."""

    def decorator(func: Rule) -> Rule:
        RULES[name] = func
        RULE_DESCRIPTIONS[name] = description
        return func

    return decorator


def _error(document: DocumentMarkdown, name: str, message: str, line: Optional[int] = None):
    return Issue(path=document.path, rule=name, severity=Severity.ERROR, message=message, line=line)


@rule("frontmatter-present", "document starts with a --- frontmatter block")
def check_frontmatter_present(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    if document.has_frontmatter:
        return []
    return [_error(document, "frontmatter-present", "Missing frontmatter block ('---' on line 1)", 1)]


@rule("frontmatter-syntax", "frontmatter is closed and parses as a YAML mapping")
def check_frontmatter_syntax(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    if document.frontmatter_error is None:
        return []
    return [
        _error(
            document,
            "frontmatter-syntax",
            document.frontmatter_error,
            document.frontmatter_error_line,
        )
    ]


def _metadata_available(document: DocumentMarkdown) -> bool:
    return document.has_frontmatter and document.frontmatter_error is None


@rule("title-required", "title is present and a non-empty string")
def check_title(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    if not _metadata_available(document):
        return []
    if "title" not in document.metadata:
        return [_error(document, "title-required", "Missing required frontmatter field: title")]
    title = document.metadata["title"]
    if not isinstance(title, str):
        return [
            _error(
                document,
                "title-required",
                f"title must be a string, got {type(title).__name__}",
            )
        ]
    if not title.strip():
        return [_error(document, "title-required", "title must not be empty")]
    return []


@rule("draft-boolean", "draft is present and true or false")
def check_draft(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    """draft must be a boolean; unless options relax it, it must also be present."""
    if not _metadata_available(document):
        return []
    if "draft" not in document.metadata:
        if options.require_draft:
            return [_error(document, "draft-boolean", "Missing required frontmatter field: draft")]
        return []
    draft = document.metadata["draft"]
    if not isinstance(draft, bool):
        return [
            _error(
                document,
                "draft-boolean",
                f"draft must be a boolean (true/false), got {draft!r}",
            )
        ]
    return []


@rule("tags-format", "tags is a list of strings")
def check_tags_format(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    if not _metadata_available(document):
        return []
    tags = document.metadata.get("tags")
    if tags is None:
        return []
    if not isinstance(tags, list):
        return [
            _error(
                document,
                "tags-format",
                f"tags must be a list of strings, got {type(tags).__name__}",
            )
        ]
    return [
        _error(document, "tags-format", f"tag {tag!r} is not a string")
        for tag in tags
        if not isinstance(tag, str)
    ]


@rule("tags-unique", "tags contain no duplicates")
def check_tags_unique(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    if not _metadata_available(document):
        return []
    tags = document.metadata.get("tags")
    if not isinstance(tags, list):
        return []
    counts = Counter(tag for tag in tags if isinstance(tag, str))
    return [
        _error(document, "tags-unique", f"Duplicate tag {tag!r} ({count} times)")
        for tag, count in counts.items()
        if count > 1
    ]


@rule("fences-balanced", "every code fence is closed before end of file")
def check_fences_balanced(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    return [
        _error(
            document,
            "fences-balanced",
            f"Code block opened with {block.fence} is never closed",
            block.start_line,
        )
        for block in document.code_blocks
        if not block.closed
    ]


@rule("fence-language", "code fences carry a language identifier")
def check_fence_language(
    document: DocumentMarkdown, options: CheckOptions = DEFAULT_OPTIONS
) -> List[Issue]:
    return [
        Issue(
            path=document.path,
            rule="fence-language",
            severity=Severity.WARNING,
            message="Code block has no language identifier",
            line=block.start_line,
        )
        for block in document.code_blocks
        if not block.language
    ]


def run_checks(
    document: DocumentMarkdown,
    rules: Optional[Iterable[str]] = None,
    disabled: Iterable[str] = (),
    require_draft: bool = True,
) -> List[Issue]:
    """Run the selected rules against a document.

    Args:
        document: Parsed document
        rules: Rule names to run, defaults to every registered rule
        disabled: Rule names to skip
        require_draft: Whether a missing draft flag is an error

    Raises:
        ValueError: If an unknown rule name is given
    """
    selected = list(rules) if rules is not None else list(RULES)
    disabled = set(disabled)
    unknown = (set(selected) | disabled) - set(RULES)
    if unknown:
        raise ValueError(f"Unknown rule(s): {', '.join(sorted(unknown))}")

    options = CheckOptions(require_draft=require_draft)
    issues: List[Issue] = []
    for name in selected:
        if name in disabled:
            continue
        found = RULES[name](document, options)
        if found:
            logger.debug(f"{document.path}: {name} reported {len(found)} issue(s)")
        issues.extend(found)

    return sorted(issues, key=lambda i: (i.line or 0, i.rule))
