"""Tests for file utilities."""

from pathlib import Path
from textwrap import dedent

import pytest

from notecheck.file_utils import (
    FileError,
    FileWriteError,
    ParseError,
    add_frontmatter,
    compute_checksum,
    ensure_directory,
    frontmatter_line_count,
    has_frontmatter,
    parse_frontmatter,
    write_file_atomic,
)


@pytest.mark.asyncio
async def test_compute_checksum():
    """Test checksum computation."""
    checksum = await compute_checksum("test content")
    assert isinstance(checksum, str)
    assert len(checksum) == 64  # SHA-256 produces 64 char hex string
    assert checksum == await compute_checksum("test content")
    assert checksum != await compute_checksum("other content")


@pytest.mark.asyncio
async def test_compute_checksum_error():
    """Test checksum error handling."""
    with pytest.raises(FileError):
        await compute_checksum(object())  # pyright: ignore [reportArgumentType]


@pytest.mark.asyncio
async def test_ensure_directory(tmp_path: Path):
    test_dir = tmp_path / "nested" / "dir"
    await ensure_directory(test_dir)
    assert test_dir.is_dir()


@pytest.mark.asyncio
async def test_write_file_atomic(tmp_path: Path):
    """Test atomic file writing."""
    test_file = tmp_path / "test.md"
    await write_file_atomic(test_file, "test content")
    assert test_file.read_text() == "test content"

    # Temp file should be cleaned up
    assert not test_file.with_suffix(".tmp").exists()


@pytest.mark.asyncio
async def test_write_file_atomic_error(tmp_path: Path):
    """Writing into a missing directory fails cleanly."""
    with pytest.raises(FileWriteError):
        await write_file_atomic(tmp_path / "nonexistent" / "test.md", "test content")


@pytest.mark.asyncio
async def test_add_frontmatter():
    metadata = {"title": "Compiling SCSS", "draft": True, "tags": ["SCSS", "CSS"]}
    text = await add_frontmatter("# Compiling SCSS\n", metadata)

    assert text.startswith("---\ntitle: Compiling SCSS\ndraft: true\n")
    parsed, body = await parse_frontmatter(text)
    assert parsed == metadata
    assert body.strip() == "# Compiling SCSS"


@pytest.mark.asyncio
async def test_add_frontmatter_error():
    with pytest.raises(ParseError, match="Failed to add frontmatter"):
        await add_frontmatter("body", {"value": object()})


def test_has_frontmatter():
    assert has_frontmatter("---\ntitle: x\n---\n")
    assert has_frontmatter("\ufeff---\ntitle: x\n---\n")
    assert not has_frontmatter("# Title\n---\n")
    assert not has_frontmatter(" ---\ntitle: x\n---\n")
    assert not has_frontmatter("")


def test_frontmatter_line_count():
    assert frontmatter_line_count("---\ntitle: x\ndraft: false\n---\nbody\n") == 4
    assert frontmatter_line_count("---\ntitle: x\n") == 0
    assert frontmatter_line_count("no frontmatter") == 0


@pytest.mark.asyncio
async def test_parse_frontmatter():
    """Test parsing valid frontmatter."""
    content = dedent("""\
        ---
        title: Setting up basic logging with Serilog
        draft: false
        tags: [Serilog, Logging]
        ---

        # Content
        """)

    frontmatter, remaining = await parse_frontmatter(content)
    assert frontmatter == {
        "title": "Setting up basic logging with Serilog",
        "draft": False,
        "tags": ["Serilog", "Logging"],
    }
    assert remaining.strip() == "# Content"


@pytest.mark.asyncio
async def test_parse_frontmatter_keeps_dashes_in_body():
    """A horizontal rule in the body is not mistaken for a delimiter."""
    content = "---\ntitle: x\n---\nabove\n\n---\n\nbelow\n"
    frontmatter, remaining = await parse_frontmatter(content)
    assert frontmatter == {"title": "x"}
    assert remaining == "above\n\n---\n\nbelow\n"


@pytest.mark.asyncio
async def test_parse_frontmatter_absent():
    content = "# Just a heading\n"
    frontmatter, remaining = await parse_frontmatter(content)
    assert frontmatter == {}
    assert remaining == content


@pytest.mark.asyncio
async def test_parse_frontmatter_empty_block():
    frontmatter, remaining = await parse_frontmatter("---\n---\nbody\n")
    assert frontmatter == {}
    assert remaining == "body\n"


@pytest.mark.asyncio
async def test_parse_frontmatter_missing_closing_delimiter():
    with pytest.raises(ParseError) as exc:
        await parse_frontmatter("---\ntitle: x\ndraft: false\n\n# Body\n")
    assert "closing" in str(exc.value)
    assert exc.value.line == 1


@pytest.mark.asyncio
async def test_parse_frontmatter_invalid_yaml():
    content = dedent("""\
        ---
        title: [unclosed
        draft: false
        ---
        """)
    with pytest.raises(ParseError) as exc:
        await parse_frontmatter(content)
    assert "Invalid YAML" in str(exc.value)
    assert exc.value.line is not None


@pytest.mark.asyncio
async def test_parse_frontmatter_not_a_mapping():
    with pytest.raises(ParseError, match="dictionary"):
        await parse_frontmatter("---\n- a\n- b\n---\n")
