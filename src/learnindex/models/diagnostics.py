"""Structured diagnostics produced while building a corpus."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """How bad a diagnostic is.

    ``FATAL`` on a document-level kind excludes that document only; on a
    corpus-level kind (duplicate id, prerequisite cycle) it aborts the build.
    """

    WARNING = "warning"
    FATAL = "fatal"


class DiagnosticKind(str, Enum):
    MALFORMED_FRONT_MATTER = "MalformedFrontMatter"
    MISSING_FIELD = "MissingField"
    INVALID_ENUM = "InvalidEnum"
    INVALID_VALUE = "InvalidValue"
    UNKNOWN_PERSONA = "UnknownPersona"
    DANGLING_REFERENCE = "DanglingReference"
    DUPLICATE_DOCUMENT = "DuplicateDocument"
    PREREQUISITE_CYCLE = "PrerequisiteCycle"


@dataclass(frozen=True)
class Diagnostic:
    """One problem found in one document (or in the corpus as a whole)."""

    document_id: str
    severity: Severity
    kind: DiagnosticKind
    details: str

    @classmethod
    def warning(cls, document_id: str, kind: DiagnosticKind, details: str) -> "Diagnostic":
        return cls(document_id, Severity.WARNING, kind, details)

    @classmethod
    def fatal(cls, document_id: str, kind: DiagnosticKind, details: str) -> "Diagnostic":
        return cls(document_id, Severity.FATAL, kind, details)

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def as_dict(self) -> dict:
        """Plain-dict form for JSON output."""
        return {
            "documentId": self.document_id,
            "severity": self.severity.value,
            "kind": self.kind.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.kind.value} {self.document_id}: {self.details}"
