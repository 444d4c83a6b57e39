"""Fenced code block scanning.

Follows the CommonMark fence rules:

- an opening fence is at least three backticks or tildes, indented by no
  more than three spaces
- the info string of a backtick fence may not contain a backtick
- a closing fence uses the same character, is at least as long as the
  opening fence and has nothing but whitespace after it

A fence left open at the end of the input is returned with ``closed=False``.
"""

import re
from typing import Dict, List, Optional, Tuple

from notecheck.markdown.schemas import CodeBlock

FENCE_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
ATTRIBUTE_RE = re.compile(r"""(?P<key>[A-Za-z_][\w-]*)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s}]+))""")


def parse_info_string(info: str) -> Tuple[Optional[str], Dict[str, str]]:
    """Split a fence info string into language and attributes.

    >>> parse_info_string('csharp title="Program.cs"')
    ('csharp', {'title': 'Program.cs'})
    >>> parse_info_string('{title="x.scss"}')
    (None, {'title': 'x.scss'})
    """
    info = info.strip()
    if not info:
        return None, {}

    language = None
    rest = info
    first = info.split(maxsplit=1)[0]
    if "=" not in first and not first.startswith("{"):
        language = first.strip("{}") or None
        rest = info[len(first) :]

    attributes = {}
    for match in ATTRIBUTE_RE.finditer(rest):
        value = match.group("dq")
        if value is None:
            value = match.group("sq")
        if value is None:
            value = match.group("bare")
        attributes[match.group("key")] = value

    return language, attributes


def _closes(line: str, fence: str) -> bool:
    match = FENCE_RE.match(line)
    if not match:
        return False
    candidate = match.group("fence")
    return (
        candidate[0] == fence[0]
        and len(candidate) >= len(fence)
        and not match.group("info").strip()
    )


def scan_fences(text: str, line_offset: int = 0) -> List[CodeBlock]:
    """Find all fenced code blocks in text.

    Args:
        text: Markdown body
        line_offset: Number of lines preceding ``text`` in its file, so that
            reported line numbers are file-relative

    Returns:
        Code blocks in document order, line numbers 1-based
    """
    blocks: List[CodeBlock] = []
    lines = text.splitlines()

    current: Optional[CodeBlock] = None
    body: List[str] = []

    for index, line in enumerate(lines):
        line_no = index + 1 + line_offset

        if current is not None:
            if _closes(line, current.fence):
                current.end_line = line_no
                current.content = "\n".join(body)
                blocks.append(current)
                current = None
                body = []
            else:
                body.append(line)
            continue

        match = FENCE_RE.match(line)
        if not match:
            continue

        fence = match.group("fence")
        info = match.group("info")
        if fence[0] == "`" and "`" in info:
            # inline code span, not a fence
            continue

        language, attributes = parse_info_string(info)
        current = CodeBlock(
            fence=fence,
            info=info.strip(),
            language=language,
            attributes=attributes,
            start_line=line_no,
        )

    if current is not None:
        current.closed = False
        current.content = "\n".join(body)
        blocks.append(current)

    return blocks
