"""notecheck - front matter and fence validation for Markdown documentation."""

__version__ = "0.3.0"
