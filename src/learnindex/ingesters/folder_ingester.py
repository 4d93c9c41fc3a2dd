"""Ingester for local folders."""

import logging
import os
from pathlib import Path
from typing import Iterator

from learnindex.ingesters.filters import should_skip
from learnindex.models import SourceFile

logger = logging.getLogger(__name__)


class FolderIngester:
    """Ingester for local filesystem folders."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def ingest(self, source: Path) -> Iterator[SourceFile]:
        """Yield markdown files from a folder recursively.

        Args:
            source: Path to the content root

        Yields:
            SourceFile objects for each markdown file under the root
        """
        for root, _, files in os.walk(source):
            for filename in files:
                full_path = Path(root) / filename
                rel_path = full_path.relative_to(source)

                if should_skip(rel_path):
                    continue

                try:
                    raw_content = full_path.read_bytes()
                except OSError as exc:
                    logger.warning(f"Skipping unreadable file {rel_path}: {exc}")
                    continue

                yield SourceFile(
                    path=rel_path.as_posix(),
                    text=raw_content.decode("utf-8", errors="replace"),
                    size_bytes=len(raw_content),
                )
