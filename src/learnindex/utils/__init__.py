"""Utility functions for learnindex."""

from learnindex.utils.formatting import format_documents, format_minutes

__all__ = ["format_documents", "format_minutes"]
