"""Persona-driven reading lists."""

from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Optional

from learnindex.errors import UnknownPersonaError
from learnindex.models import Depth, DocumentRecord, Persona, get_profile

if TYPE_CHECKING:
    from learnindex.index.corpus import CorpusIndex


def coerce_persona(persona: Persona | str) -> Persona:
    if isinstance(persona, Persona):
        return persona
    parsed = Persona.parse(persona)
    if parsed is None:
        raise UnknownPersonaError(persona)
    return parsed


def coerce_depth(depth: Depth | str | None) -> Optional[Depth]:
    if depth is None or isinstance(depth, Depth):
        return depth
    parsed = Depth.parse(depth)
    if parsed is None:
        raise ValueError(f"Unknown depth: {depth!r}")
    return parsed


class PersonaMatcher:
    """Select and order a corpus's documents for one persona."""

    def match(
        self,
        corpus: "CorpusIndex",
        persona: Persona | str,
        max_depth: Depth | str | None = None,
    ) -> tuple[DocumentRecord, ...]:
        """Documents for ``persona`` no deeper than ``max_depth``.

        Results follow the corpus's prerequisite order, so a document never
        appears before a prerequisite that is also in the result. No match
        gives an empty tuple.

        Raises:
            UnknownPersonaError: ``persona`` is not a known tag
            ValueError: ``max_depth`` is not a known depth
        """
        tag = coerce_persona(persona)
        ceiling = coerce_depth(max_depth)

        docs = corpus.by_persona(tag)
        if ceiling is not None:
            docs = tuple(d for d in docs if d.depth.rank <= ceiling.rank)

        return self._in_reading_order(corpus, docs)

    def entry_points(
        self, corpus: "CorpusIndex", persona: Persona | str
    ) -> tuple[DocumentRecord, ...]:
        """Documents for ``persona`` matching its profile's entry-point patterns."""
        profile = get_profile(coerce_persona(persona))
        docs = tuple(
            d
            for d in corpus.by_persona(profile.persona)
            if any(fnmatchcase(d.id, pattern) for pattern in profile.entry_points)
        )
        return self._in_reading_order(corpus, docs)

    @staticmethod
    def _in_reading_order(
        corpus: "CorpusIndex", docs: tuple[DocumentRecord, ...]
    ) -> tuple[DocumentRecord, ...]:
        relations = corpus.relations
        return tuple(sorted(docs, key=lambda d: relations.position(d.id)))
