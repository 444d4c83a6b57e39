"""Tests for the list, tags, show and new commands."""

from typer.testing import CliRunner

from notecheck.cli.main import app

runner = CliRunner()


def invoke(content_dir, *args):
    return runner.invoke(app, ["--content-dir", str(content_dir), *args])


def test_list_documents(content_dir):
    result = invoke(content_dir, "list")
    assert result.exit_code == 0, result.output
    assert "Serilog" in result.output
    assert "scss.md" in result.output
    assert "soft-delete.md" in result.output


def test_list_drafts_only(content_dir):
    result = invoke(content_dir, "list", "--drafts")
    assert result.exit_code == 0, result.output
    assert "scss.md" in result.output
    assert "serilog.md" not in result.output


def test_list_published_by_tag(content_dir):
    result = invoke(content_dir, "list", "--published", "--tag", "serilog")
    assert result.exit_code == 0, result.output
    assert "serilog.md" in result.output
    assert "soft-delete.md" not in result.output


def test_tags(content_dir):
    result = invoke(content_dir, "tags")
    assert result.exit_code == 0, result.output
    for tag in ("Serilog", "SCSS", "EF Core"):
        assert tag in result.output


def test_tags_empty_directory(tmp_path):
    result = invoke(tmp_path, "tags")
    assert result.exit_code == 0
    assert "No documents found" in result.output


def test_show(content_dir):
    result = invoke(content_dir, "show", "logging/serilog.md")
    assert result.exit_code == 0, result.output
    assert "Program.cs" in result.output
    assert "powershell" in result.output


def test_show_unclosed_fence(broken_content_dir):
    result = invoke(broken_content_dir, "show", "broken.md")
    assert result.exit_code == 0, result.output
    assert "never closed" in result.output


def test_show_missing_file(content_dir):
    result = invoke(content_dir, "show", "missing.md")
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_new_then_check(tmp_path):
    result = invoke(tmp_path, "new", "Setting up basic logging with Serilog", "-t", "Serilog")
    assert result.exit_code == 0, result.output

    path = tmp_path / "setting-up-basic-logging-with-serilog.md"
    assert path.exists()
    assert "draft: true" in path.read_text()

    result = invoke(tmp_path, "check")
    assert result.exit_code == 0, result.output


def test_new_refuses_overwrite(tmp_path):
    assert invoke(tmp_path, "new", "Twice").exit_code == 0
    result = invoke(tmp_path, "new", "Twice")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_list_relative_content_dir(content_dir, monkeypatch):
    monkeypatch.chdir(content_dir.parent)
    result = invoke(content_dir.name, "list")
    assert result.exit_code == 0, result.output
    for name in ("serilog.md", "scss.md", "soft-delete.md"):
        assert name in result.output


def test_tags_relative_content_dir(content_dir, monkeypatch):
    monkeypatch.chdir(content_dir.parent)
    result = invoke(content_dir.name, "tags")
    assert result.exit_code == 0, result.output
    assert "Serilog" in result.output
    assert "No documents found" not in result.output


def test_list_reports_unreadable_files(content_dir):
    (content_dir / "binary.md").write_bytes(b"\xff\xfe\x00\x00")
    result = invoke(content_dir, "list")
    assert result.exit_code == 1
    assert "binary.md" in result.output
    assert "scss.md" in result.output


def test_tags_reports_unreadable_files(content_dir):
    (content_dir / "binary.md").write_bytes(b"\xff\xfe\x00\x00")
    result = invoke(content_dir, "tags")
    assert result.exit_code == 1
    assert "binary.md" in result.output
