"""Turn an untyped front-matter mapping into a validated DocumentRecord.

Every field is checked and every problem is collected, so one pass over a
document reports all that is wrong with it. Structural problems (missing
field, bad enum, bad value) are fatal for the document. Unknown persona
tags are only warnings: the persona list grows over time and documents are
not all updated in lockstep.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import PurePosixPath
from typing import Any, Mapping, Optional

from learnindex.models import Depth, Diagnostic, DiagnosticKind, DocumentRecord, Persona

REQUIRED_FIELDS = ("title", "phase", "topic", "depth")
OPTIONAL_TEXT_FIELDS = {"type": "content_type", "domain": "domain", "industry": "industry"}


def derive_document_id(path: str) -> str:
    """Derive a stable document id from a content-relative path.

    The ``.md`` suffix and a trailing ``index`` segment are dropped, so
    ``02-design/api-design/surface/index.md`` becomes
    ``02-design/api-design/surface``. The depth folder is kept because a
    topic is usually published at several depths.
    """
    pure = PurePosixPath(path.replace("\\", "/"))
    parts = list(pure.with_suffix("").parts) if pure.suffix else list(pure.parts)
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts.pop()
    return "/".join(parts)


@dataclass
class BuildOutcome:
    """A record (None when any fatal problem was found) and its diagnostics."""

    record: Optional[DocumentRecord]
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None


class RecordBuilder:
    """Validating deserializer for one document's front-matter."""

    def __init__(self, front_matter: Mapping[str, Any], path: str):
        self.front_matter = front_matter
        self.path = path
        self.document_id = derive_document_id(path)
        self.diagnostics: list[Diagnostic] = []

    def build(self) -> BuildOutcome:
        text = {name: self._required_text(name) for name in REQUIRED_FIELDS}
        depth = self._depth(text["depth"])
        reading_time = self._reading_time()
        prerequisites = self._string_set("prerequisites")
        related_topics = self._string_set("related_topics")
        personas, unknown_personas = self._personas()
        keywords = self._string_set("keywords")
        updated = self._updated()
        extras = {attr: self._optional_text(key) for key, attr in OPTIONAL_TEXT_FIELDS.items()}

        if self.document_id in prerequisites:
            self._fatal(DiagnosticKind.INVALID_VALUE, "prerequisites: document lists itself")
        if text["topic"] is not None and text["topic"] in prerequisites:
            self._fatal(
                DiagnosticKind.INVALID_VALUE,
                f"prerequisites: document lists its own topic {text['topic']!r}",
            )

        if any(d.is_fatal for d in self.diagnostics):
            return BuildOutcome(record=None, diagnostics=self.diagnostics)

        record = DocumentRecord(
            id=self.document_id,
            path=self.path,
            title=text["title"],
            phase=text["phase"],
            topic=text["topic"],
            depth=depth,
            reading_time_minutes=reading_time,
            prerequisites=prerequisites,
            related_topics=related_topics,
            personas=personas,
            unknown_personas=unknown_personas,
            keywords=tuple(sorted(keywords)),
            updated=updated,
            **extras,
        )
        return BuildOutcome(record=record, diagnostics=self.diagnostics)

    # Field readers. Each returns a usable value or None and records problems.

    def _required_text(self, name: str) -> Optional[str]:
        value = self.front_matter.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            self._fatal(DiagnosticKind.MISSING_FIELD, name)
            return None
        if not isinstance(value, str):
            self._fatal(DiagnosticKind.INVALID_VALUE, f"{name}: expected a string, got {value!r}")
            return None
        return value.strip()

    def _optional_text(self, name: str) -> Optional[str]:
        value = self.front_matter.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            self._fatal(DiagnosticKind.INVALID_VALUE, f"{name}: expected a string, got {value!r}")
            return None
        return value.strip() or None

    def _depth(self, value: Optional[str]) -> Optional[Depth]:
        if value is None:
            return None
        depth = Depth.parse(value)
        if depth is None:
            self._fatal(DiagnosticKind.INVALID_ENUM, f"depth: {value!r}")
        return depth

    def _reading_time(self) -> Optional[int]:
        value = self.front_matter.get("reading_time")
        if value is None:
            return None

        minutes: Optional[int] = None
        if isinstance(value, bool):
            minutes = None
        elif isinstance(value, int):
            minutes = value
        elif isinstance(value, float) and value.is_integer():
            minutes = int(value)
        elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
            minutes = int(value.strip())

        if minutes is None or minutes <= 0:
            self._fatal(
                DiagnosticKind.INVALID_VALUE,
                f"reading_time: expected a positive integer, got {value!r}",
            )
            return None
        return minutes

    def _string_list(self, name: str) -> Optional[list[str]]:
        value = self.front_matter.get(name)
        if value is None:
            return []
        if not isinstance(value, list):
            self._fatal(DiagnosticKind.INVALID_VALUE, f"{name}: expected a list of strings")
            return None
        bad = [item for item in value if not isinstance(item, str)]
        if bad:
            self._fatal(DiagnosticKind.INVALID_VALUE, f"{name}: non-string entries {bad!r}")
            return None
        return [item.strip() for item in value if item.strip()]

    def _string_set(self, name: str) -> frozenset[str]:
        return frozenset(self._string_list(name) or ())

    def _personas(self) -> tuple[frozenset[Persona], frozenset[str]]:
        known: set[Persona] = set()
        unknown: set[str] = set()
        for tag in self._string_list("personas") or ():
            persona = Persona.parse(tag)
            if persona is None:
                unknown.add(tag)
                self.diagnostics.append(
                    Diagnostic.warning(self.document_id, DiagnosticKind.UNKNOWN_PERSONA, tag)
                )
            else:
                known.add(persona)
        return frozenset(known), frozenset(unknown)

    def _updated(self) -> Optional[date]:
        value = self.front_matter.get("updated")
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
        self._fatal(DiagnosticKind.INVALID_VALUE, f"updated: expected a date, got {value!r}")
        return None

    def _fatal(self, kind: DiagnosticKind, details: str) -> None:
        self.diagnostics.append(Diagnostic.fatal(self.document_id, kind, details))


def build_record(front_matter: Mapping[str, Any], path: str) -> BuildOutcome:
    """Validate one document's front-matter.

    Args:
        front_matter: Parsed front-matter mapping
        path: Content-relative path of the source file

    Returns:
        BuildOutcome with the record (or None) and all diagnostics found
    """
    return RecordBuilder(front_matter, path).build()
