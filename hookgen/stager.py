"""Copy hooks into the output directory and prune orphaned copies."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, Optional, Set

from .constants import HOOKS_EXTENSION
from .logging import get_logger
from .models import AssetCandidate, StageResult
from .staleness import is_stale


class StagingError(RuntimeError):
    """Raised when a staged file cannot be copied, removed or written."""


class Stager:
    """Keeps ``<identifier>.hooks.js`` copies in sync with located hooks."""

    def __init__(self) -> None:
        self.logger = get_logger("stager")

    def stage(
        self,
        output_dir: Path,
        hooks_candidates: Iterable[AssetCandidate],
        *,
        aggregator_mtime: Optional[int] = None,
    ) -> StageResult:
        """Delete orphans, then copy every stale candidate.

        ``aggregator_mtime`` is the index file's mtime in nanoseconds, or
        ``None`` when no index has been written yet.
        """
        candidates = list(hooks_candidates)
        result = StageResult()
        result.removed_orphans = self.remove_orphans(output_dir, candidates)

        for candidate in candidates:
            dest_path = output_dir / candidate.destination_name
            try:
                stale = is_stale(candidate, dest_path, aggregator_mtime)
            except OSError as exc:
                raise StagingError(f"Cannot read {candidate.source_path}: {exc}") from exc
            if not stale:
                continue
            self._copy(candidate.source_path, dest_path)
            result.copied.append(dest_path)
            result.did_copy = True

        return result

    def find_orphans(
        self, output_dir: Path, hooks_candidates: Iterable[AssetCandidate]
    ) -> Set[Path]:
        """Return staged hooks files that no candidate maps to."""
        expected = {output_dir / candidate.destination_name for candidate in hooks_candidates}
        staged = {
            path
            for path in output_dir.glob(f"*{HOOKS_EXTENSION}")
            if not path.name.startswith(".")
        }
        return staged - expected

    def remove_orphans(
        self, output_dir: Path, hooks_candidates: Iterable[AssetCandidate]
    ) -> Set[Path]:
        orphans = self.find_orphans(output_dir, hooks_candidates)
        for path in sorted(orphans):
            try:
                path.unlink()
            except OSError as exc:
                raise StagingError(f"Cannot remove unused hooks file {path}: {exc}") from exc
            self.logger.info("Removed unused hooks file %s", path.name)
        return orphans

    def _copy(self, source: Path, dest: Path) -> None:
        try:
            shutil.copyfile(source, dest)
        except OSError as exc:
            raise StagingError(f"Cannot copy {source} to {dest}: {exc}") from exc
        self.logger.info("Staged %s", dest.name)


def write_file(path: Path, content: str) -> None:
    """Overwrite ``path`` with ``content``, raising ``StagingError`` on failure."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise StagingError(f"Cannot write {path}: {exc}") from exc


__all__ = ["Stager", "StagingError", "write_file"]
