"""Plain-text rendering of document listings."""

from typing import Iterable, Optional

from learnindex.models import DocumentRecord


def format_minutes(minutes: Optional[int]) -> str:
    if not minutes:
        return "--"
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest:02d}m"


def format_documents(docs: Iterable[DocumentRecord]) -> str:
    """One line per document: id, depth, reading time, title."""
    lines = []
    for doc in docs:
        minutes = format_minutes(doc.reading_time_minutes)
        lines.append(f"{doc.id:<60} {doc.depth.value:<10} {minutes:>7}  {doc.title}")
    return "\n".join(lines)
