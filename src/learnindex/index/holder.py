"""Hold the live corpus and replace it wholesale on reload."""

import logging
import threading
from pathlib import Path
from typing import Optional

from learnindex.index.loader import LoadResult, load_corpus

logger = logging.getLogger(__name__)


class IndexHolder:
    """Owns the current LoadResult for one source.

    ``reload`` builds a complete new index before touching the reference,
    so readers see either the old index or the new one, never a mix. A
    failed reload leaves the old index in place.
    """

    def __init__(self, source: Path | str):
        self.source = Path(source)
        self._current: Optional[LoadResult] = None
        self._reload_lock = threading.Lock()

    @property
    def current(self) -> LoadResult:
        """The live result, built on first access."""
        result = self._current
        if result is None:
            result = self.reload()
        return result

    def reload(self) -> LoadResult:
        """Rebuild from the source and swap it in.

        Raises:
            UnsupportedSourceError, CorpusBuildError: the rebuild failed; the
                previous index is still current
        """
        with self._reload_lock:
            result = load_corpus(self.source)
            self._current = result
        logger.info(f"Indexed {len(result.index)} documents from {self.source}")
        return result
