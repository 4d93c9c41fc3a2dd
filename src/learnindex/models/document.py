"""Core data models for content documents."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Depth(str, Enum):
    """How much detail a document gives on its topic, shallowest first."""

    SURFACE = "surface"
    MID_DEPTH = "mid-depth"
    DEEP_WATER = "deep-water"

    @property
    def rank(self) -> int:
        return _DEPTH_RANK[self]

    @classmethod
    def parse(cls, value: str) -> Optional["Depth"]:
        """Case-insensitive lookup; None when the value is not a depth."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_DEPTH_RANK = {Depth.SURFACE: 0, Depth.MID_DEPTH: 1, Depth.DEEP_WATER: 2}


class Persona(str, Enum):
    """Reader archetypes content is written for."""

    NEW_DEVELOPER = "new-developer"
    YOLO_DEV = "yolo-dev"
    SPECIALIST_EXPANDING = "specialist-expanding"
    GENERALIST_LEVELING_UP = "generalist-leveling-up"
    BUSY_DEVELOPER = "busy-developer"

    @classmethod
    def parse(cls, value: str) -> Optional["Persona"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class SourceFile:
    """A markdown file read from an input source."""

    path: str  # posix, relative to the content root
    text: str
    size_bytes: int


@dataclass(frozen=True)
class DocumentRecord:
    """Validated metadata for one content document."""

    id: str
    path: str
    title: str
    phase: str
    topic: str
    depth: Depth
    reading_time_minutes: Optional[int] = None
    prerequisites: frozenset[str] = field(default_factory=frozenset)
    related_topics: frozenset[str] = field(default_factory=frozenset)
    personas: frozenset[Persona] = field(default_factory=frozenset)
    unknown_personas: frozenset[str] = field(default_factory=frozenset)
    keywords: tuple[str, ...] = ()
    content_type: Optional[str] = None
    domain: Optional[str] = None
    industry: Optional[str] = None
    updated: Optional[date] = None

    @property
    def sort_key(self) -> tuple[str, str, int, str]:
        return (self.phase, self.topic, self.depth.rank, self.id)

    def as_dict(self) -> dict:
        """Plain-dict form for JSON output."""
        return {
            "id": self.id,
            "path": self.path,
            "title": self.title,
            "phase": self.phase,
            "topic": self.topic,
            "depth": self.depth.value,
            "readingTimeMinutes": self.reading_time_minutes,
            "prerequisites": sorted(self.prerequisites),
            "relatedTopics": sorted(self.related_topics),
            "personas": sorted(p.value for p in self.personas),
            "keywords": list(self.keywords),
            "type": self.content_type,
            "domain": self.domain,
            "industry": self.industry,
            "updated": self.updated.isoformat() if self.updated else None,
        }
