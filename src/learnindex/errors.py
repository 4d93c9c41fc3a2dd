"""Exception hierarchy for learnindex.

Per-document problems are reported as diagnostics, not exceptions. The
exceptions here are raised for failures that stop an operation outright:
an unparseable front-matter block, a corpus that cannot be indexed at all,
or a query for a persona tag that does not exist.
"""

from abc import ABCMeta, abstractmethod
from typing import Sequence

from learnindex.models.diagnostics import Diagnostic, DiagnosticKind


class LearnIndexError(Exception):
    """Base class for all learnindex errors."""


class MalformedFrontMatterError(LearnIndexError):
    """The leading front-matter block exists but cannot be used."""


class UnsupportedSourceError(LearnIndexError):
    """No ingester can read the given source."""


class UnknownPersonaError(LearnIndexError, ValueError):
    """A persona tag outside the known enumeration was queried."""

    def __init__(self, tag: str):
        super().__init__(f"Unknown persona: {tag!r}")
        self.tag = tag


class CorpusBuildError(LearnIndexError, metaclass=ABCMeta):
    """A corpus-level failure that aborts the whole build.

    ``diagnostics`` holds everything collected before the failure, the
    fatal entry included, once the loader has attached it.
    """

    def __init__(self, message: str, preceding: Sequence[Diagnostic] = ()):
        super().__init__(message)
        self.preceding = list(preceding)
        self.diagnostics: list[Diagnostic] = []

    @abstractmethod
    def to_diagnostic(self) -> Diagnostic:
        """The fatal diagnostic describing this failure."""

    def attach(self, diagnostics: Sequence[Diagnostic]) -> None:
        self.diagnostics = [*diagnostics, *self.preceding, self.to_diagnostic()]


class DuplicateDocumentError(CorpusBuildError):
    """Two source files derive the same document id."""

    def __init__(self, document_id: str, paths: Sequence[str]):
        super().__init__(
            f"Duplicate document id {document_id!r} from: {', '.join(paths)}"
        )
        self.document_id = document_id
        self.paths = tuple(paths)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic.fatal(
            self.document_id,
            DiagnosticKind.DUPLICATE_DOCUMENT,
            f"same id derived from {', '.join(self.paths)}",
        )


class PrerequisiteCycleError(CorpusBuildError):
    """The prerequisite graph contains a cycle."""

    def __init__(self, cycle: Sequence[str], preceding: Sequence[Diagnostic] = ()):
        self.cycle = tuple(cycle)
        path = " -> ".join([*self.cycle, self.cycle[0]]) if self.cycle else ""
        super().__init__(f"Prerequisite cycle: {path}", preceding)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic.fatal(
            self.cycle[0] if self.cycle else "",
            DiagnosticKind.PREREQUISITE_CYCLE,
            " -> ".join([*self.cycle, self.cycle[0]]) if self.cycle else "",
        )
