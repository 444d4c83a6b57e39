"""Tests for configuration loading."""

from pathlib import Path

from notecheck.config import ProjectConfig, get_project_config


def test_defaults(tmp_path: Path):
    config = ProjectConfig(content_dir=tmp_path)
    assert config.extensions == [".md", ".markdown"]
    assert config.require_draft is True
    assert config.disabled_rules == []
    assert config.log_file == tmp_path / ".notecheck" / "notecheck.log"


def test_extensions_are_normalized(tmp_path: Path):
    config = ProjectConfig(content_dir=tmp_path, extensions=["MD", ".Markdown"])
    assert config.extensions == [".md", ".markdown"]


def test_environment_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("NOTECHECK_CONTENT_DIR", str(tmp_path))
    monkeypatch.setenv("NOTECHECK_REQUIRE_DRAFT", "false")
    monkeypatch.setenv("NOTECHECK_DISABLED_RULES", '["fence-language"]')
    monkeypatch.setenv("NOTECHECK_LOG_LEVEL", "debug")

    config = get_project_config()
    assert config.content_dir == tmp_path
    assert config.require_draft is False
    assert config.disabled_rules == ["fence-language"]
    assert config.log_level == "DEBUG"


def test_explicit_overrides_win(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("NOTECHECK_CONTENT_DIR", "/somewhere/else")
    config = get_project_config(content_dir=tmp_path, log_level=None)
    assert config.content_dir == tmp_path
    assert config.log_level == "WARNING"


def test_relative_content_dir_is_resolved(tmp_path: Path, monkeypatch):
    (tmp_path / "docs").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NOTECHECK_CONTENT_DIR", "docs")

    config = get_project_config()
    assert config.content_dir.is_absolute()
    assert config.content_dir == tmp_path / "docs"
    assert ProjectConfig(content_dir=Path("docs")).content_dir == tmp_path / "docs"
