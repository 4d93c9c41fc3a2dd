"""Tests for enums, persona profiles and formatting helpers."""

import pytest

from learnindex.models import PROFILES, Depth, Diagnostic, DiagnosticKind, Persona, get_profile
from learnindex.utils import format_minutes


def test_depth_ranks_are_ordered():
    assert Depth.SURFACE.rank < Depth.MID_DEPTH.rank < Depth.DEEP_WATER.rank


def test_every_persona_has_a_profile():
    assert set(PROFILES) == set(Persona)
    assert get_profile(Persona.BUSY_DEVELOPER).preferred_depth is Depth.SURFACE


def test_persona_parse():
    assert Persona.parse(" YOLO-dev ") is Persona.YOLO_DEV
    assert Persona.parse("data-scientist") is None


def test_diagnostic_as_dict():
    diagnostic = Diagnostic.warning("doc", DiagnosticKind.UNKNOWN_PERSONA, "ghost")

    assert diagnostic.as_dict() == {
        "documentId": "doc",
        "severity": "warning",
        "kind": "UnknownPersona",
        "details": "ghost",
    }
    assert not diagnostic.is_fatal


@pytest.mark.parametrize(
    "minutes,expected", [(None, "--"), (0, "--"), (12, "12 min"), (75, "1h 15m")]
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected
