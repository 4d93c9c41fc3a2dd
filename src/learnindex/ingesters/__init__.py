"""Content sources for learnindex: a folder tree or a zip of one."""

from pathlib import Path
from typing import Optional

from learnindex.ingesters.folder_ingester import FolderIngester
from learnindex.ingesters.zip_ingester import ZipIngester
from learnindex.protocols import Ingester

# Zip is tried first; a folder ingester would reject the archive anyway.
_INGESTERS: tuple[Ingester, ...] = (
    ZipIngester(),
    FolderIngester(),
)


def get_ingester(source: Path | str) -> Optional[Ingester]:
    """Pick the ingester for a content source.

    Args:
        source: Content folder, or a zip archive of one

    Returns:
        The first ingester whose ``can_handle`` accepts the source, or None
        when the path is neither
    """
    source_path = Path(source)
    for ingester in _INGESTERS:
        if ingester.can_handle(source_path):
            return ingester
    return None


__all__ = ["get_ingester", "ZipIngester", "FolderIngester"]
