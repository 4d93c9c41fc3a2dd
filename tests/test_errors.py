"""Tests for corpus-level exceptions and their diagnostics."""

from learnindex.errors import CorpusBuildError, DuplicateDocumentError, PrerequisiteCycleError
from learnindex.models import Diagnostic, DiagnosticKind, Severity


def test_every_corpus_error_must_describe_itself():
    assert CorpusBuildError.__abstractmethods__ == frozenset({"to_diagnostic"})
    assert not DuplicateDocumentError.__abstractmethods__
    assert not PrerequisiteCycleError.__abstractmethods__


def test_duplicate_document_diagnostic():
    error = DuplicateDocumentError("guide", ["guide.md", "guide/index.md"])

    diagnostic = error.to_diagnostic()

    assert diagnostic.document_id == "guide"
    assert diagnostic.kind is DiagnosticKind.DUPLICATE_DOCUMENT
    assert diagnostic.severity is Severity.FATAL
    assert "guide/index.md" in str(error)


def test_attach_orders_collected_then_preceding_then_fatal():
    earlier = Diagnostic.fatal("broken", DiagnosticKind.MISSING_FIELD, "depth")
    dangling = Diagnostic.warning("A", DiagnosticKind.DANGLING_REFERENCE, "prerequisites: ghost")
    error = PrerequisiteCycleError(["A", "B"], preceding=[dangling])

    error.attach([earlier])

    assert error.diagnostics[:2] == [earlier, dangling]
    assert error.diagnostics[-1].kind is DiagnosticKind.PREREQUISITE_CYCLE
    assert error.diagnostics[-1].details == "A -> B -> A"
