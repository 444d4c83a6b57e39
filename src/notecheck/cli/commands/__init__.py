"""CLI commands for notecheck."""

from . import check, documents, new

__all__ = ["check", "documents", "new"]
