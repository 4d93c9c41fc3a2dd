"""Tests for relation resolution, cycle detection and ordering."""

from learnindex.index import CorpusIndex, find_cycle
from learnindex.models import Depth, DiagnosticKind


def test_find_cycle_on_acyclic_graph():
    edges = {"a": ["b", "c"], "b": ["c"], "c": []}

    assert find_cycle(edges) is None


def test_find_cycle_returns_cycle_members_in_order():
    edges = {"a": ["b"], "b": ["c"], "c": ["a"], "d": ["a"]}

    assert find_cycle(edges) == ["a", "b", "c"]


def test_find_cycle_reports_only_the_loop():
    edges = {"start": ["x"], "x": ["y"], "y": ["x"]}

    assert find_cycle(edges) == ["x", "y"]


def test_find_cycle_ignores_unknown_targets():
    assert find_cycle({"a": ["outside"]}) is None


def test_references_resolve_by_id_then_topic(make_record):
    index = CorpusIndex.build(
        [
            make_record("arch-surface", topic="architecture-design"),
            make_record("arch-deep", topic="architecture-design", depth=Depth.DEEP_WATER),
            make_record("api", topic="api-design", prerequisites=["architecture-design"]),
            make_record("review", topic="code-review", prerequisites=["api"]),
        ]
    )
    relations = index.relations

    assert relations.prerequisites_of("api") == frozenset({"arch-surface", "arch-deep"})
    assert relations.prerequisites_of("review") == frozenset({"api"})
    assert relations.dependents_of("api") == frozenset({"review"})
    assert index.warnings == ()


def test_topic_reference_skips_the_referencing_document(make_record):
    index = CorpusIndex.build(
        [
            make_record("arch-surface", topic="architecture-design"),
            make_record(
                "arch-mid",
                topic="architecture-design",
                depth=Depth.MID_DEPTH,
                related_topics=["architecture-design"],
            ),
        ]
    )

    assert index.relations.related_of("arch-mid") == frozenset({"arch-surface"})
    assert index.warnings == ()


def test_dangling_prerequisites_and_related_topics_are_reported(make_record):
    index = CorpusIndex.build(
        [
            make_record(
                "doc",
                prerequisites=["missing-prereq"],
                related_topics=["missing-related", "other"],
            ),
            make_record("other"),
        ]
    )

    details = sorted(w.details for w in index.warnings)
    assert details == ["prerequisites: missing-prereq", "related_topics: missing-related"]
    assert all(w.kind is DiagnosticKind.DANGLING_REFERENCE for w in index.warnings)
    assert index.relations.related_of("doc") == frozenset({"other"})


def test_order_is_topological_with_lexical_tie_breaks(make_record):
    docs = [
        make_record("late", topic="zeta", phase="01-discovery"),
        make_record("first", topic="alpha", phase="03-development", prerequisites=["late"]),
        make_record("b", topic="beta", phase="02-design"),
        make_record("a", topic="alpha", phase="02-design"),
    ]
    order = CorpusIndex.build(docs).relations.order

    assert order == ("late", "a", "b", "first")


def test_order_respects_every_prerequisite(make_record):
    docs = [
        make_record("d1", topic="t1", phase="05", prerequisites=["d2", "d3"]),
        make_record("d2", topic="t2", phase="04", prerequisites=["d4"]),
        make_record("d3", topic="t3", phase="03", prerequisites=["d4"]),
        make_record("d4", topic="t4", phase="06"),
        make_record("d5", topic="t5", phase="01", prerequisites=["d1"]),
    ]
    index = CorpusIndex.build(docs)
    position = {doc_id: i for i, doc_id in enumerate(index.relations.order)}

    for doc in docs:
        for prereq in index.relations.prerequisites_of(doc.id):
            assert position[prereq] < position[doc.id]
