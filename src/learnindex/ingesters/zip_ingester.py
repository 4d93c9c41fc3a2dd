"""Ingester for ZIP archive files."""

import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterator

from learnindex.ingesters.filters import should_skip
from learnindex.models import SourceFile


class ZipIngester:
    """Ingester for ZIP archives of content."""

    source_type = "zip"

    def can_handle(self, source: Path) -> bool:
        """Check if this is a zip file."""
        return source.suffix.lower() == ".zip" and source.is_file()

    def ingest(self, source: Path) -> Iterator[SourceFile]:
        """Yield markdown files from a ZIP archive.

        Args:
            source: Path to the ZIP file

        Yields:
            SourceFile objects for each markdown member of the archive
        """
        with zipfile.ZipFile(source, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue

                member = PurePosixPath(info.filename)
                if should_skip(member):
                    continue

                raw_content = zf.read(info.filename)

                yield SourceFile(
                    path=member.as_posix(),
                    text=raw_content.decode("utf-8", errors="replace"),
                    size_bytes=info.file_size,
                )
