"""Locate hooks and CSS files colocated with component sources."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Set

from .constants import HOOKS_EXTENSION, STYLE_EXTENSION
from .logging import get_logger
from .models import AssetCandidate, ComponentRecord, LocatedAssets


def _candidate(record: ComponentRecord, extension: str) -> AssetCandidate:
    base, _ = os.path.splitext(str(record.source_module_path))
    return AssetCandidate(
        source_path=Path(f"{base}{extension}"),
        destination_name=f"{record.identifier}{extension}",
    )


def hooks_candidate(record: ComponentRecord) -> AssetCandidate:
    """Return the hooks candidate for a component, whether or not it exists."""
    return _candidate(record, HOOKS_EXTENSION)


def style_candidate(record: ComponentRecord) -> AssetCandidate:
    """Return the CSS candidate for a component, whether or not it exists."""
    return _candidate(record, STYLE_EXTENSION)


class AssetLocator:
    """Derives asset candidates from component records and keeps those on disk."""

    def __init__(self) -> None:
        self.logger = get_logger("locator")

    def locate(self, components: Iterable[ComponentRecord]) -> LocatedAssets:
        hooks: Set[AssetCandidate] = set()
        styles: Set[AssetCandidate] = set()
        for record in components:
            js = hooks_candidate(record)
            if js.source_path.exists():
                hooks.add(js)
            css = style_candidate(record)
            if css.source_path.exists():
                styles.add(css)
        self.logger.debug(
            "Located %d hooks file(s) and %d CSS file(s)", len(hooks), len(styles)
        )
        return LocatedAssets(hooks=frozenset(hooks), styles=frozenset(styles))


__all__ = ["AssetLocator", "hooks_candidate", "style_candidate"]
