"""In-memory index over validated document records."""

from collections import defaultdict
from typing import Iterable, Iterator, Optional

from learnindex.errors import DuplicateDocumentError
from learnindex.index.matcher import PersonaMatcher
from learnindex.index.relations import RelationGraph, RelationResolver
from learnindex.models import Depth, Diagnostic, DocumentRecord, Persona


def _group(pairs: Iterable[tuple[str, str]]) -> dict[str, frozenset[str]]:
    grouped: dict[str, set[str]] = defaultdict(set)
    for key, doc_id in pairs:
        grouped[key].add(doc_id)
    return {key: frozenset(ids) for key, ids in grouped.items()}


class CorpusIndex:
    """Immutable, queryable collection of DocumentRecords.

    Construct with ``CorpusIndex.build``. Every view is computed from scratch
    when the index is built; to pick up changes, build a new index and
    replace the old one.

    All queries return tuples sorted by ``(phase, topic, depth, id)``,
    whatever order the records were supplied in.
    """

    def __init__(self, documents: dict[str, DocumentRecord]):
        self._documents = dict(documents)
        docs = list(self._documents.values())

        self._by_phase = _group((d.phase, d.id) for d in docs)
        self._by_topic = _group((d.topic, d.id) for d in docs)
        self._by_depth = _group((d.depth.value, d.id) for d in docs)
        self._by_persona = _group((p.value, d.id) for d in docs for p in d.personas)
        self._ordered = tuple(sorted(docs, key=lambda d: d.sort_key))

        self._relations: Optional[RelationGraph] = None

    @classmethod
    def build(cls, documents: Iterable[DocumentRecord]) -> "CorpusIndex":
        """Index ``documents`` and resolve their relations.

        Raises:
            DuplicateDocumentError: two records share an id
            PrerequisiteCycleError: the prerequisite graph has a cycle
        """
        by_id: dict[str, DocumentRecord] = {}
        paths: dict[str, list[str]] = defaultdict(list)
        for doc in documents:
            by_id[doc.id] = doc
            paths[doc.id].append(doc.path)

        duplicates = sorted(doc_id for doc_id, p in paths.items() if len(p) > 1)
        if duplicates:
            first = duplicates[0]
            raise DuplicateDocumentError(first, sorted(paths[first]))

        index = cls(by_id)
        index._relations = RelationResolver().resolve(index)
        return index

    # Lookups

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def __iter__(self) -> Iterator[DocumentRecord]:
        return iter(self._ordered)

    def get(self, doc_id: str) -> Optional[DocumentRecord]:
        return self._documents.get(doc_id)

    def documents(self) -> tuple[DocumentRecord, ...]:
        return self._ordered

    def phases(self) -> list[str]:
        return sorted(self._by_phase)

    def topics(self) -> list[str]:
        return sorted(self._by_topic)

    def topic_ids(self, topic: str) -> frozenset[str]:
        return self._by_topic.get(topic, frozenset())

    def find(self, phase: str, topic: str, depth: Depth | str) -> Optional[DocumentRecord]:
        """Return the document published at ``phase/topic/depth``, if any."""
        for doc in self.by_topic(topic):
            if doc.phase == phase and doc.depth is _as_depth(depth):
                return doc
        return None

    # Views

    def by_phase(self, phase: str) -> tuple[DocumentRecord, ...]:
        return self._select(self._by_phase.get(phase, ()))

    def by_topic(self, topic: str) -> tuple[DocumentRecord, ...]:
        return self._select(self._by_topic.get(topic, ()))

    def by_depth(self, depth: Depth | str) -> tuple[DocumentRecord, ...]:
        parsed = _as_depth(depth)
        if parsed is None:
            return ()
        return self._select(self._by_depth.get(parsed.value, ()))

    def by_persona(self, persona: Persona | str) -> tuple[DocumentRecord, ...]:
        """Documents tagged for ``persona``; an unknown tag matches nothing."""
        parsed = persona if isinstance(persona, Persona) else Persona.parse(persona)
        if parsed is None:
            return ()
        return self._select(self._by_persona.get(parsed.value, ()))

    # Relations

    @property
    def relations(self) -> RelationGraph:
        if self._relations is None:
            raise RuntimeError("CorpusIndex was not created with CorpusIndex.build()")
        return self._relations

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        """Dangling references found while resolving relations."""
        return self.relations.warnings

    def recommended_order(
        self, persona: Persona | str, max_depth: Depth | str | None = None
    ) -> tuple[DocumentRecord, ...]:
        """Reading order for ``persona``, prerequisites first."""
        return PersonaMatcher().match(self, persona, max_depth)

    def _select(self, ids: Iterable[str]) -> tuple[DocumentRecord, ...]:
        return tuple(sorted((self._documents[i] for i in ids), key=lambda d: d.sort_key))


def _as_depth(depth: Depth | str) -> Optional[Depth]:
    return depth if isinstance(depth, Depth) else Depth.parse(depth)
