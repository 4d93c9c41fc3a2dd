"""Shared fixtures for learnindex tests."""

from pathlib import Path

import pytest
import yaml

from learnindex.models import Depth, DocumentRecord, Persona


def front_matter(**fields) -> str:
    return "---\n" + yaml.safe_dump(fields, sort_keys=False) + "---\n"


@pytest.fixture
def content_root(tmp_path) -> Path:
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def write_doc(content_root):
    """Write a markdown file under the content root.

    Keyword arguments become front-matter fields; with none, the file has
    no front-matter at all.
    """

    def _write(rel_path: str, body: str = "# Heading\n\nSome prose.\n", **fields) -> Path:
        path = content_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        text = front_matter(**fields) + body if fields else body
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_record():
    """Build a DocumentRecord directly, skipping the parser."""

    def _make(
        doc_id: str,
        topic: str | None = None,
        phase: str = "02-design",
        depth: Depth = Depth.SURFACE,
        prerequisites=(),
        related_topics=(),
        personas=(Persona.NEW_DEVELOPER,),
    ) -> DocumentRecord:
        return DocumentRecord(
            id=doc_id,
            path=f"{doc_id}.md",
            title=doc_id.replace("-", " ").title(),
            phase=phase,
            topic=topic or doc_id,
            depth=depth,
            prerequisites=frozenset(prerequisites),
            related_topics=frozenset(related_topics),
            personas=frozenset(personas),
        )

    return _make
