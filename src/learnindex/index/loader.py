"""Load a corpus from a content source.

Files are parsed and validated one at a time. A document with structural
problems is left out and reported; the rest of the build carries on. A
duplicate id or a prerequisite cycle stops the build, and the raised error
carries every diagnostic gathered up to that point.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from learnindex.errors import CorpusBuildError, MalformedFrontMatterError, UnsupportedSourceError
from learnindex.index.corpus import CorpusIndex
from learnindex.ingesters import get_ingester
from learnindex.models import Diagnostic, DiagnosticKind, DocumentRecord, Severity, SourceFile
from learnindex.parsing import build_record, derive_document_id, parse_front_matter

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """A built index plus everything noticed while building it."""

    index: CorpusIndex
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.FATAL]


def read_records(
    files: list[SourceFile],
) -> tuple[list[DocumentRecord], list[Diagnostic], list[str]]:
    """Parse and validate source files.

    Returns:
        (records, diagnostics, skipped paths), each in path order
    """
    records: list[DocumentRecord] = []
    diagnostics: list[Diagnostic] = []
    skipped: list[str] = []

    for source in sorted(files, key=lambda f: f.path):
        try:
            parsed = parse_front_matter(source.text)
        except MalformedFrontMatterError as exc:
            diagnostics.append(
                Diagnostic.fatal(
                    derive_document_id(source.path),
                    DiagnosticKind.MALFORMED_FRONT_MATTER,
                    str(exc),
                )
            )
            continue

        if not parsed.has_front_matter:
            logger.debug(f"No front-matter, skipping {source.path}")
            skipped.append(source.path)
            continue

        outcome = build_record(parsed.front_matter, source.path)
        diagnostics.extend(outcome.diagnostics)
        if outcome.record is not None:
            records.append(outcome.record)

    return records, diagnostics, skipped


def build_corpus(files: list[SourceFile]) -> LoadResult:
    """Build a corpus from already-read source files.

    Raises:
        CorpusBuildError: duplicate id or prerequisite cycle; ``diagnostics``
            on the error holds the full report
    """
    records, diagnostics, skipped = read_records(files)

    try:
        index = CorpusIndex.build(records)
    except CorpusBuildError as exc:
        exc.attach(diagnostics)
        raise

    diagnostics.extend(index.warnings)
    for diagnostic in diagnostics:
        if diagnostic.is_fatal:
            logger.warning(
                f"Excluded {diagnostic.document_id}: "
                f"{diagnostic.kind.value} {diagnostic.details}"
            )

    return LoadResult(index=index, diagnostics=diagnostics, skipped=skipped)


def load_corpus(source: Path | str) -> LoadResult:
    """Ingest ``source`` (folder or zip) and build its corpus.

    Raises:
        UnsupportedSourceError: no ingester handles ``source``
        CorpusBuildError: see ``build_corpus``
    """
    source_path = Path(source)
    ingester = get_ingester(source_path)
    if ingester is None:
        raise UnsupportedSourceError(f"Cannot read {source}: expected a folder or .zip file")

    files = list(ingester.ingest(source_path))
    logger.debug(f"Read {len(files)} markdown files from {ingester.source_type} {source}")
    return build_corpus(files)
