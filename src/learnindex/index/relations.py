"""Prerequisite and related-topic resolution.

References in ``prerequisites`` and ``related_topics`` are resolved against
document ids first and topic slugs second. A topic slug stands for every
document of that topic other than the one doing the referencing.
Unresolvable references are warnings; the corpus may point at topics that
live outside the indexed tree.

The prerequisite graph must be acyclic, otherwise no reading order exists.
"""

import heapq
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from learnindex.errors import PrerequisiteCycleError
from learnindex.models import Diagnostic, DiagnosticKind, DocumentRecord

if TYPE_CHECKING:
    from learnindex.index.corpus import CorpusIndex

_UNVISITED, _VISITING, _VISITED = 0, 1, 2


class RelationGraph:
    """Resolved relations between documents of one corpus."""

    def __init__(
        self,
        order: Iterable[str],
        prerequisites: Mapping[str, frozenset[str]],
        related: Mapping[str, frozenset[str]],
        warnings: Iterable[Diagnostic] = (),
    ):
        self._order = tuple(order)
        self._position = {doc_id: i for i, doc_id in enumerate(self._order)}
        self._prerequisites = dict(prerequisites)
        self._related = dict(related)
        self._warnings = tuple(warnings)

        dependents: dict[str, set[str]] = {doc_id: set() for doc_id in self._order}
        for doc_id, prereqs in self._prerequisites.items():
            for prereq in prereqs:
                dependents[prereq].add(doc_id)
        self._dependents = {k: frozenset(v) for k, v in dependents.items()}

    @property
    def order(self) -> tuple[str, ...]:
        """All document ids, prerequisites before the documents needing them."""
        return self._order

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return self._warnings

    def position(self, doc_id: str) -> int:
        return self._position[doc_id]

    def prerequisites_of(self, doc_id: str) -> frozenset[str]:
        return self._prerequisites.get(doc_id, frozenset())

    def dependents_of(self, doc_id: str) -> frozenset[str]:
        return self._dependents.get(doc_id, frozenset())

    def related_of(self, doc_id: str) -> frozenset[str]:
        return self._related.get(doc_id, frozenset())


class RelationResolver:
    """Builds the RelationGraph for a corpus, failing on prerequisite cycles."""

    def resolve(self, corpus: "CorpusIndex") -> RelationGraph:
        documents = corpus.documents()
        prerequisites: dict[str, frozenset[str]] = {}
        related: dict[str, frozenset[str]] = {}
        warnings: list[Diagnostic] = []

        for doc in documents:
            prerequisites[doc.id] = self._resolve_all(
                corpus, doc, doc.prerequisites, "prerequisites", warnings
            )
            related[doc.id] = self._resolve_all(
                corpus, doc, doc.related_topics, "related_topics", warnings
            )

        cycle = find_cycle(prerequisites)
        if cycle:
            raise PrerequisiteCycleError(cycle, preceding=warnings)

        order = topological_order(documents, prerequisites)
        return RelationGraph(order, prerequisites, related, warnings)

    def _resolve_all(
        self,
        corpus: "CorpusIndex",
        doc: DocumentRecord,
        references: frozenset[str],
        field_name: str,
        warnings: list[Diagnostic],
    ) -> frozenset[str]:
        resolved: set[str] = set()
        for ref in sorted(references):
            targets = self._resolve(corpus, doc, ref)
            if targets is None:
                warnings.append(
                    Diagnostic.warning(
                        doc.id, DiagnosticKind.DANGLING_REFERENCE, f"{field_name}: {ref}"
                    )
                )
            else:
                resolved |= targets
        return frozenset(resolved)

    @staticmethod
    def _resolve(
        corpus: "CorpusIndex", doc: DocumentRecord, ref: str
    ) -> Optional[frozenset[str]]:
        if ref in corpus:
            return frozenset({ref}) - {doc.id}
        topic_ids = corpus.topic_ids(ref)
        if topic_ids:
            return topic_ids - {doc.id}
        return None


def find_cycle(edges: Mapping[str, Iterable[str]]) -> Optional[list[str]]:
    """Return the first cycle found in ``edges``, or None.

    Iterative depth-first search with three-colour marking. Nodes and
    neighbours are visited in sorted order so the same graph always yields
    the same cycle. The cycle is listed in edge direction, starting at the
    node where the search re-entered it.
    """
    color = {node: _UNVISITED for node in edges}

    for start in sorted(edges):
        if color[start] != _UNVISITED:
            continue

        color[start] = _VISITING
        path = [start]
        stack = [iter(sorted(edges[start]))]

        while stack:
            for nxt in stack[-1]:
                state = color.get(nxt, _VISITED)
                if state == _VISITING:
                    return path[path.index(nxt):]
                if state == _UNVISITED:
                    color[nxt] = _VISITING
                    path.append(nxt)
                    stack.append(iter(sorted(edges[nxt])))
                    break
            else:
                color[path.pop()] = _VISITED
                stack.pop()

    return None


def topological_order(
    documents: Iterable[DocumentRecord],
    prerequisites: Mapping[str, frozenset[str]],
) -> list[str]:
    """Order ids so every prerequisite precedes the documents needing it.

    Among documents that are ready at the same time, the one with the
    smallest ``(phase, topic, depth, id)`` goes first. The graph must
    already be known to be acyclic.
    """
    by_id = {doc.id: doc for doc in documents}
    remaining = {doc_id: len(prerequisites.get(doc_id, ())) for doc_id in by_id}
    dependents: dict[str, list[str]] = {doc_id: [] for doc_id in by_id}
    for doc_id, prereqs in prerequisites.items():
        for prereq in prereqs:
            dependents[prereq].append(doc_id)

    ready = [(by_id[i].sort_key, i) for i, count in remaining.items() if count == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, doc_id = heapq.heappop(ready)
        order.append(doc_id)
        for dependent in dependents[doc_id]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, (by_id[dependent].sort_key, dependent))

    return order
