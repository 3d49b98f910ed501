"""Core data models shared across hookgen components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet


@dataclass(frozen=True)
class ComponentRecord:
    """A compiled component as reported by a discovery source."""

    identifier: str
    source_module_path: Path


@dataclass(frozen=True, order=True)
class AssetCandidate:
    """A colocated asset and the file name it is staged under."""

    source_path: Path
    destination_name: str


@dataclass(frozen=True)
class LocatedAssets:
    """Hooks and style candidates found next to component sources."""

    hooks: FrozenSet[AssetCandidate] = frozenset()
    styles: FrozenSet[AssetCandidate] = frozenset()


@dataclass
class StageResult:
    """Outcome of a staging pass over the output directory."""

    did_copy: bool = False
    copied: list[Path] = field(default_factory=list)
    removed_orphans: set[Path] = field(default_factory=set)


class CompileStatus(str, Enum):
    """Two-state result surfaced to the invoking build task."""

    OK = "ok"
    NOOP = "noop"

    @property
    def changed(self) -> bool:
        return self is CompileStatus.OK
