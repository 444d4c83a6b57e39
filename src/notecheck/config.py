"""Configuration management for notecheck."""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_DIR_NAME = ".notecheck"
LOG_FILE_NAME = "notecheck.log"


class ProjectConfig(BaseSettings):
    """Configuration for a documentation content directory."""

    content_dir: Path = Field(
        default_factory=Path.cwd,
        description="Root directory holding the markdown documents",
    )

    extensions: List[str] = Field(
        default_factory=lambda: [".md", ".markdown"],
        description="File extensions treated as markdown documents",
    )

    ignore_patterns: List[str] = Field(
        default_factory=list,
        description="Extra gitignore-style patterns to skip while scanning",
    )

    disabled_rules: List[str] = Field(
        default_factory=list,
        description="Names of checks that should not run",
    )

    require_draft: bool = Field(
        default=True,
        description="Report documents whose frontmatter has no draft flag",
    )

    log_level: str = Field(default="WARNING", description="Log level for the console sink")
    log_to_file: bool = Field(default=False, description="Also write logs under content_dir")

    model_config = SettingsConfigDict(
        env_prefix="NOTECHECK_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def log_file(self) -> Path:
        """Get log file path."""
        return self.content_dir / LOG_DIR_NAME / LOG_FILE_NAME

    @field_validator("content_dir")
    @classmethod
    def resolve_content_dir(cls, v: Path) -> Path:
        """Anchor a relative content directory at the current working directory."""
        return v.expanduser().resolve()

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Ensure every extension starts with a dot and is lowercase."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


def get_project_config(**overrides) -> ProjectConfig:
    """Load config from environment, applying any explicit overrides."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return ProjectConfig(**values)
