"""Protocol definitions for extensible components."""

from learnindex.protocols.ingester import Ingester

__all__ = ["Ingester"]
