"""Common test fixtures."""

from pathlib import Path
from textwrap import dedent

import pytest
from loguru import logger

from notecheck.config import ProjectConfig
from notecheck.markdown import DocumentParser
from notecheck.services import CheckService

SERILOG_DOC = dedent("""\
    ---
    title: Setting up basic logging with Serilog
    draft: false
    tags:
      - .NET
      - Serilog
      - Logging
    ---

    # Setting up basic logging with Serilog

    Install the packages first.

    ```powershell
    dotnet add package Serilog.AspNetCore
    ```

    Then configure the logger in `Program.cs`:

    ```csharp title="Program.cs"
    Log.Logger = new LoggerConfiguration()
        .WriteTo.Console()
        .CreateLogger();
    ```
    """)

SCSS_DOC = dedent("""\
    ---
    title: Compiling SCSS as part of the build
    draft: true
    tags: [SCSS, CSS, Build]
    ---

    # Compiling SCSS as part of the build

    ```json title="compilerconfig.json"
    [
      { "inputFile": "wwwroot/scss/site.scss", "outputFile": "wwwroot/css/site.css" }
    ]
    ```
    """)

SOFT_DELETE_DOC = dedent("""\
    ---
    title: Soft delete with Entity Framework
    draft: false
    tags:
      - Entity Framework
      - EF Core
    ---

    # Soft delete with Entity Framework

    ## The interceptor

    ```csharp title="SoftDeleteInterceptor.cs"
    public override InterceptionResult<int> SavingChanges(
        DbContextEventData eventData, InterceptionResult<int> result)
    {
        return result;
    }
    ```
    """)

BROKEN_DOC = dedent("""\
    ---
    title: Broken page
    draft: "false"
    tags: [Serilog, Serilog]
    ---

    # Broken page

    ```csharp
    var x = 1;
    """)


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs replace loguru sinks; restore a clean default afterwards."""
    yield
    logger.remove()


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """Content directory with three valid documents."""
    (tmp_path / "logging").mkdir()
    (tmp_path / "logging" / "serilog.md").write_text(SERILOG_DOC, encoding="utf-8")
    (tmp_path / "scss.md").write_text(SCSS_DOC, encoding="utf-8")
    (tmp_path / "ef").mkdir()
    (tmp_path / "ef" / "soft-delete.md").write_text(SOFT_DELETE_DOC, encoding="utf-8")
    return tmp_path


@pytest.fixture
def broken_content_dir(content_dir) -> Path:
    (content_dir / "broken.md").write_text(BROKEN_DOC, encoding="utf-8")
    return content_dir


@pytest.fixture
def project_config(content_dir) -> ProjectConfig:
    return ProjectConfig(content_dir=content_dir)


@pytest.fixture
def parser(content_dir) -> DocumentParser:
    return DocumentParser(content_dir)


@pytest.fixture
def check_service(parser, project_config) -> CheckService:
    return CheckService(parser, project_config)


@pytest.fixture
def serilog_text() -> str:
    return SERILOG_DOC


@pytest.fixture
def broken_text() -> str:
    return BROKEN_DOC
