"""Audit learning-path definitions against an indexed corpus.

A learning path is a JSON file whose steps point at content by
``phase``/``topic``/``depth``. Steps may sit under ``milestones[].steps``,
``journey_steps`` or ``steps``. Steps without a full reference are fine when
they are dynamic (carry a ``note`` or ``problem``), otherwise they are
flagged.

With a metadata directory, every referenced topic is also expected to have
``topics/<topic>.json`` there. Missing metadata is reported but does not
fail the audit.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from learnindex.index import CorpusIndex

logger = logging.getLogger(__name__)

REFERENCE_KEYS = ("phase", "topic", "depth")


@dataclass(frozen=True)
class MissingContent:
    path_name: str
    phase: str
    topic: str
    depth: str

    @property
    def key(self) -> str:
        return f"{self.phase}/{self.topic}/{self.depth}"


@dataclass
class MissingMetadata:
    topic: str
    referenced_by: list[str] = field(default_factory=list)


@dataclass
class AuditReport:
    total_paths: int = 0
    total_steps: int = 0
    valid_references: int = 0
    missing_content: list[MissingContent] = field(default_factory=list)
    missing_metadata: list[MissingMetadata] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    unreferenced: list[str] = field(default_factory=list)

    @property
    def invalid_references(self) -> int:
        return len(self.missing_content)

    @property
    def passed(self) -> bool:
        return not self.missing_content

    def note_missing_metadata(self, topic: str, path_name: str) -> None:
        for entry in self.missing_metadata:
            if entry.topic == topic:
                if path_name not in entry.referenced_by:
                    entry.referenced_by.append(path_name)
                return
        self.missing_metadata.append(MissingMetadata(topic, [path_name]))


def _list_at(data: dict, key: str, where: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{where}{key} must be a list")
    return value


def collect_steps(path_data: dict) -> list:
    """Gather steps from every place a learning path may keep them.

    Raises:
        ValueError: a step container is not a list, or a milestone is not
            an object
    """
    steps: list = []
    for number, milestone in enumerate(_list_at(path_data, "milestones", ""), start=1):
        if not isinstance(milestone, dict):
            raise ValueError(f"milestone {number} is not an object")
        steps.extend(_list_at(milestone, "steps", f"milestone {number} "))
    steps.extend(_list_at(path_data, "journey_steps", ""))
    steps.extend(_list_at(path_data, "steps", ""))
    return steps


def metadata_exists(topic: str, metadata_dir: Path) -> bool:
    return (metadata_dir / "topics" / f"{topic}.json").is_file()


def audit_learning_paths(
    index: CorpusIndex,
    paths_dir: Path | str,
    metadata_dir: Optional[Path | str] = None,
) -> AuditReport:
    """Check every learning path under ``paths_dir`` against ``index``.

    Args:
        index: Built corpus to check references against
        paths_dir: Directory holding learning-path ``.json`` files
        metadata_dir: Optional directory holding ``topics/<topic>.json``

    Returns:
        AuditReport summarising valid and missing references
    """
    report = AuditReport()
    referenced: set[str] = set()
    metadata_root = Path(metadata_dir) if metadata_dir is not None else None

    for path_file in sorted(Path(paths_dir).rglob("*.json")):
        path_name = path_file.stem
        try:
            path_data = json.loads(path_file.read_text(encoding="utf-8"))
            if not isinstance(path_data, dict):
                raise ValueError("expected a JSON object")
            steps = collect_steps(path_data)
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to parse {path_file.name}: {exc}")
            report.warnings.append(f"Failed to parse {path_file.name}: {exc}")
            continue

        report.total_paths += 1
        report.total_steps += len(steps)

        for number, step in enumerate(steps, start=1):
            if not isinstance(step, dict):
                report.warnings.append(f"{path_name}: Step {number} is not an object")
                continue

            if not all(isinstance(step.get(key), str) and step[key] for key in REFERENCE_KEYS):
                if step.get("note") or step.get("problem"):
                    continue
                report.warnings.append(f"{path_name}: Step {number} missing phase/topic/depth")
                continue

            doc = index.find(step["phase"], step["topic"], step["depth"])
            if doc is None:
                report.missing_content.append(
                    MissingContent(path_name, step["phase"], step["topic"], step["depth"])
                )
            else:
                report.valid_references += 1
                referenced.add(doc.id)

            if metadata_root is not None and not metadata_exists(step["topic"], metadata_root):
                report.note_missing_metadata(step["topic"], path_name)

    report.unreferenced = [doc.id for doc in index.documents() if doc.id not in referenced]
    return report
