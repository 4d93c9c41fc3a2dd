"""Persona reference data.

One profile per persona tag. This is a lookup table describing who each
persona is and where they usually start; nothing mutates it at runtime.
"""

from dataclasses import dataclass
from enum import Enum

from learnindex.models.document import Depth, Persona


class TimeBudget(str, Enum):
    """Rough amount of reading time a persona has per sitting."""

    MINIMAL = "minimal"  # a few minutes, problem-driven
    SHORT = "short"
    MODERATE = "moderate"
    EXTENDED = "extended"


@dataclass(frozen=True)
class PersonaProfile:
    persona: Persona
    tagline: str
    preferred_depth: Depth
    time_budget: TimeBudget
    entry_points: tuple[str, ...]  # fnmatch patterns over document ids


PROFILES: dict[Persona, PersonaProfile] = {
    Persona.NEW_DEVELOPER: PersonaProfile(
        persona=Persona.NEW_DEVELOPER,
        tagline="Learning to build software and wants the whole picture in order.",
        preferred_depth=Depth.SURFACE,
        time_budget=TimeBudget.MODERATE,
        entry_points=("01-*/*/surface", "02-*/*/surface"),
    ),
    Persona.YOLO_DEV: PersonaProfile(
        persona=Persona.YOLO_DEV,
        tagline="Shipped something fast and now needs to keep it running.",
        preferred_depth=Depth.SURFACE,
        time_budget=TimeBudget.SHORT,
        entry_points=("03-*/*/surface", "05-*/*/surface", "06-*/*/surface"),
    ),
    Persona.SPECIALIST_EXPANDING: PersonaProfile(
        persona=Persona.SPECIALIST_EXPANDING,
        tagline="Deep in one area and branching into the rest of the lifecycle.",
        preferred_depth=Depth.MID_DEPTH,
        time_budget=TimeBudget.MODERATE,
        entry_points=("02-*/*/mid-depth", "04-*/*/mid-depth"),
    ),
    Persona.GENERALIST_LEVELING_UP: PersonaProfile(
        persona=Persona.GENERALIST_LEVELING_UP,
        tagline="Knows a bit of everything and wants real depth.",
        preferred_depth=Depth.DEEP_WATER,
        time_budget=TimeBudget.EXTENDED,
        entry_points=("02-*/*/mid-depth", "02-*/*/deep-water"),
    ),
    Persona.BUSY_DEVELOPER: PersonaProfile(
        persona=Persona.BUSY_DEVELOPER,
        tagline="Has a specific problem and ten minutes to solve it.",
        preferred_depth=Depth.SURFACE,
        time_budget=TimeBudget.MINIMAL,
        entry_points=("*/*/surface",),
    ),
}


def get_profile(persona: Persona) -> PersonaProfile:
    return PROFILES[persona]
