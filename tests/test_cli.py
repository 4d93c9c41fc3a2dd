"""Tests for the command-line interface."""

import json
import logging
import sys

import pytest

from learnindex import cli


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["learnindex", *args])
    cli.main()


@pytest.fixture
def chain(write_doc, content_root):
    for name, depth, prereqs in [
        ("doc-A", "surface", []),
        ("doc-B", "mid-depth", ["doc-A"]),
        ("doc-C", "deep-water", ["doc-B"]),
    ]:
        write_doc(
            f"{name}.md",
            title=name,
            phase="02-design",
            topic=name.lower(),
            depth=depth,
            prerequisites=prereqs,
            personas=["new-developer", "busy-developer"],
        )
    return content_root


def test_path_command_prints_reading_order(monkeypatch, capsys, chain):
    run(monkeypatch, "path", str(chain), "new-developer", "--max-depth", "mid-depth", "--json")

    output = json.loads(capsys.readouterr().out)
    assert [doc["id"] for doc in output] == ["doc-A", "doc-B"]


def test_path_command_with_profile_depth(monkeypatch, capsys, chain):
    run(monkeypatch, "path", str(chain), "busy-developer", "--profile-depth", "--json")

    output = json.loads(capsys.readouterr().out)
    assert [doc["id"] for doc in output] == ["doc-A"]


def test_query_command(monkeypatch, capsys, chain):
    run(monkeypatch, "query", str(chain), "--depth", "deep-water", "--json")

    output = json.loads(capsys.readouterr().out)
    assert [doc["id"] for doc in output] == ["doc-C"]
    assert output[0]["prerequisites"] == ["doc-B"]


def test_build_command_json_report(monkeypatch, capsys, write_doc, content_root):
    write_doc(
        "guide.md",
        title="Guide",
        phase="02-design",
        topic="guide",
        depth="surface",
        related_topics=["nonexistent-topic"],
    )
    write_doc("README.md", body="plain\n")

    run(monkeypatch, "build", str(content_root), "--json")

    report = json.loads(capsys.readouterr().out)
    assert report["documents"] == 1
    assert report["skipped"] == ["README.md"]
    assert report["diagnostics"] == [
        {
            "documentId": "guide",
            "severity": "warning",
            "kind": "DanglingReference",
            "details": "related_topics: nonexistent-topic",
        }
    ]


def test_build_command_exits_on_cycle(monkeypatch, write_doc, content_root):
    write_doc("a.md", title="A", phase="p", topic="a", depth="surface", prerequisites=["b"])
    write_doc("b.md", title="B", phase="p", topic="b", depth="surface", prerequisites=["a"])

    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, "build", str(content_root))

    assert excinfo.value.code == 1


def test_unsupported_source_exits(monkeypatch, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, "build", str(tmp_path / "missing"))

    assert excinfo.value.code == 1


def test_audit_command_fails_on_missing_content(monkeypatch, chain, tmp_path):
    paths_dir = tmp_path / "paths"
    paths_dir.mkdir()
    (paths_dir / "p.json").write_text(
        json.dumps({"steps": [{"phase": "02-design", "topic": "gone", "depth": "surface"}]}),
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as excinfo:
        run(monkeypatch, "audit", str(chain), str(paths_dir))

    assert excinfo.value.code == 1


def test_audit_command_lists_missing_metadata(monkeypatch, caplog, chain, tmp_path):
    paths_dir = tmp_path / "paths"
    paths_dir.mkdir()
    (paths_dir / "intro.json").write_text(
        json.dumps({"steps": [{"phase": "02-design", "topic": "doc-a", "depth": "surface"}]}),
        encoding="utf-8",
    )
    metadata_dir = tmp_path / "metadata"
    (metadata_dir / "topics").mkdir(parents=True)
    caplog.set_level(logging.INFO)

    run(monkeypatch, "audit", str(chain), str(paths_dir), "--metadata-dir", str(metadata_dir))

    assert "topics/doc-a.json" in caplog.text
    assert "Referenced by: intro" in caplog.text
    assert "Audit passed" in caplog.text


def test_personas_command(monkeypatch, capsys):
    run(monkeypatch, "personas")

    output = capsys.readouterr().out
    for tag in ("new-developer", "yolo-dev", "specialist-expanding",
                "generalist-leveling-up", "busy-developer"):
        assert tag in output
