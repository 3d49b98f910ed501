"""Built-in component sources."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator, List, Mapping, Sequence, Set

from ..logging import get_logger
from ..models import ComponentRecord
from .base import ComponentSource

COMPONENT_MARKER = "component_type"


class StaticComponentSource(ComponentSource):
    """Serves a fixed list of records, typically declared in ``.hookgen.yml``."""

    def __init__(self, records: Iterable[ComponentRecord]) -> None:
        self._records = list(records)

    def list_components(self) -> Sequence[ComponentRecord]:
        return list(self._records)

    @classmethod
    def from_mapping(
        cls, entries: Iterable[Mapping[str, str]], *, root: Path
    ) -> "StaticComponentSource":
        records = []
        for entry in entries:
            path = Path(entry["path"]).expanduser()
            if not path.is_absolute():
                path = root / path
            records.append(ComponentRecord(identifier=str(entry["id"]), source_module_path=path))
        return cls(records)


class PackageComponentSource(ComponentSource):
    """Imports every module under the given packages and keeps marked components.

    A module counts as a component when it exposes a callable
    ``component_type`` attribute. Its dotted name is the identifier and its
    ``__file__`` the source path.
    """

    def __init__(self, packages: Sequence[str]) -> None:
        self.packages = list(dict.fromkeys(packages))
        self.logger = get_logger("discovery.packages")

    def list_components(self) -> Sequence[ComponentRecord]:
        records: List[ComponentRecord] = []
        seen: Set[str] = set()
        for module in self._iter_modules():
            if module.__name__ in seen or not _is_component(module):
                continue
            source = getattr(module, "__file__", None)
            if not source:
                continue
            seen.add(module.__name__)
            records.append(
                ComponentRecord(identifier=module.__name__, source_module_path=Path(source))
            )
        self.logger.debug("Found %d component module(s) in %s", len(records), self.packages)
        return records

    def _iter_modules(self) -> Iterator[ModuleType]:
        for package_name in self.packages:
            package = self._import(package_name)
            if package is None:
                continue
            yield package
            yield from self._walk(package)

    def _walk(self, package: ModuleType) -> Iterator[ModuleType]:
        search_path = getattr(package, "__path__", None)
        if search_path is None:
            return
        for info in pkgutil.iter_modules(search_path, prefix=f"{package.__name__}."):
            module = self._import(info.name)
            if module is None:
                continue
            yield module
            if info.ispkg:
                yield from self._walk(module)

    def _import(self, name: str) -> ModuleType | None:
        try:
            return importlib.import_module(name)
        except Exception as exc:  # modules that fail to import are not compiled components
            self.logger.warning("Skipping %s: %s", name, exc)
            return None


class CompositeComponentSource(ComponentSource):
    """Concatenates several sources; the first record for an identifier wins."""

    def __init__(self, sources: Iterable[ComponentSource]) -> None:
        self.sources = list(sources)

    def list_components(self) -> Sequence[ComponentRecord]:
        records: List[ComponentRecord] = []
        seen: Set[str] = set()
        for source in self.sources:
            for record in source.list_components():
                if record.identifier in seen:
                    continue
                seen.add(record.identifier)
                records.append(record)
        return records


def _is_component(module: ModuleType) -> bool:
    return callable(getattr(module, COMPONENT_MARKER, None))


__all__ = [
    "COMPONENT_MARKER",
    "CompositeComponentSource",
    "PackageComponentSource",
    "StaticComponentSource",
]
