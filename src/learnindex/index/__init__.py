"""Corpus indexing, relation resolution and persona matching."""

from learnindex.index.corpus import CorpusIndex
from learnindex.index.holder import IndexHolder
from learnindex.index.loader import LoadResult, build_corpus, load_corpus, read_records
from learnindex.index.matcher import PersonaMatcher
from learnindex.index.relations import RelationGraph, RelationResolver, find_cycle, topological_order

__all__ = [
    "CorpusIndex",
    "IndexHolder",
    "LoadResult",
    "PersonaMatcher",
    "RelationGraph",
    "RelationResolver",
    "build_corpus",
    "find_cycle",
    "load_corpus",
    "read_records",
    "topological_order",
]
