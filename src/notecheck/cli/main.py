"""Main CLI entry point for notecheck."""  # pragma: no cover

from notecheck.cli.app import app  # pragma: no cover

# Register commands
from notecheck.cli.commands import check, documents, new  # pragma: no cover

__all__ = ["app", "check", "documents", "new"]  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
