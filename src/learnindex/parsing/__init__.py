"""Front-matter parsing and record validation."""

from learnindex.parsing.frontmatter import ParsedDocument, parse_front_matter
from learnindex.parsing.record_builder import (
    BuildOutcome,
    RecordBuilder,
    build_record,
    derive_document_id,
)

__all__ = [
    "BuildOutcome",
    "ParsedDocument",
    "RecordBuilder",
    "build_record",
    "derive_document_id",
    "parse_front_matter",
]
