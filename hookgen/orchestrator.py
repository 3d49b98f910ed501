"""Pipeline orchestration for the hooks compile step."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .aggregator import render
from .config import HookgenConfig
from .constants import INDEX_FILENAME
from .discovery import ComponentSource, build_source
from .locator import AssetLocator
from .logging import get_logger
from .models import CompileStatus, LocatedAssets
from .staleness import modification_time
from .stager import Stager, StagingError, write_file


class Orchestrator:
    """Locates, stages and indexes component hooks for one output directory."""

    def __init__(
        self,
        source: ComponentSource,
        output_dir: Path,
        *,
        locator: AssetLocator | None = None,
        stager: Stager | None = None,
    ) -> None:
        self.source = source
        self.output_dir = Path(output_dir)
        self.locator = locator or AssetLocator()
        self.stager = stager or Stager()
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(
        cls,
        config: HookgenConfig,
        *,
        output_dir: Path | None = None,
        sources: Sequence[str] | None = None,
    ) -> "Orchestrator":
        return cls(
            build_source(config, sources),
            output_dir if output_dir is not None else config.hooks_output_dir,
        )

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILENAME

    def locate(self) -> LocatedAssets:
        """Return hooks and CSS candidates for the currently known components."""
        return self.locator.locate(self.source.list_components())

    def run(self) -> CompileStatus:
        """Bring the output directory up to date.

        Returns ``CompileStatus.NOOP`` when nothing was copied, removed or
        regenerated. Filesystem failures raise ``StagingError``.
        """
        assets = self.locate()
        self.logger.debug("Compiling hooks into %s", self.output_dir)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StagingError(f"Cannot create {self.output_dir}: {exc}") from exc

        index_mtime = modification_time(self.index_path)
        result = self.stager.stage(
            self.output_dir, assets.hooks, aggregator_mtime=index_mtime
        )

        if index_mtime is None or result.did_copy or result.removed_orphans:
            write_file(self.index_path, render(assets.hooks))
            self.logger.info(
                "Generated %s with %d hooks file(s)", self.index_path.name, len(assets.hooks)
            )
            return CompileStatus.OK

        self.logger.debug("Hooks in %s are up to date", self.output_dir)
        return CompileStatus.NOOP


__all__ = ["Orchestrator"]
