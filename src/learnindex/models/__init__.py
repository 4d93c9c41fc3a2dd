"""Data models for learnindex."""

from learnindex.models.diagnostics import Diagnostic, DiagnosticKind, Severity
from learnindex.models.document import Depth, DocumentRecord, Persona, SourceFile
from learnindex.models.persona import PROFILES, PersonaProfile, TimeBudget, get_profile

__all__ = [
    "Depth",
    "Diagnostic",
    "DiagnosticKind",
    "DocumentRecord",
    "PROFILES",
    "Persona",
    "PersonaProfile",
    "Severity",
    "SourceFile",
    "TimeBudget",
    "get_profile",
]
