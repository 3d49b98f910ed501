"""Timestamp-based staleness checks for staged hooks.

The aggregator file's modification time is the reference clock: a source
newer than the last published index is re-copied even when its staged copy
looks fresh, and a missing index marks every candidate stale.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .logging import get_logger
from .models import AssetCandidate

_LOGGER = get_logger("staleness")


def modification_time(path: Path) -> Optional[int]:
    """Return ``path``'s mtime in nanoseconds, or ``None`` when it is absent."""
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


def is_stale(
    candidate: AssetCandidate, dest_path: Path, aggregator_mtime: Optional[int]
) -> bool:
    """Return True when ``candidate`` must be copied to ``dest_path``.

    Raises ``OSError`` if the source cannot be stat'ed; a source that
    vanished after location is not skipped.
    """
    if not dest_path.exists():
        _LOGGER.debug("%s is not staged yet", candidate.destination_name)
        return True
    if aggregator_mtime is None:
        _LOGGER.debug("No index file; restaging %s", candidate.destination_name)
        return True
    source_mtime = candidate.source_path.stat().st_mtime_ns
    if source_mtime > aggregator_mtime:
        _LOGGER.debug("%s changed since the index was written", candidate.source_path)
        return True
    return False


__all__ = ["is_stale", "modification_time"]
