"""Component discovery sources and plugin loading."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from ..config import HookgenConfig
from .base import ComponentSource
from .sources import (
    COMPONENT_MARKER,
    CompositeComponentSource,
    PackageComponentSource,
    StaticComponentSource,
)

_ENTRY_POINT_GROUP = "hookgen.sources"

SourceFactory = Callable[[HookgenConfig], ComponentSource]


def _static_source(config: HookgenConfig) -> ComponentSource:
    return StaticComponentSource.from_mapping(config.components, root=config.root)


def _package_source(config: HookgenConfig) -> ComponentSource:
    return PackageComponentSource(config.packages)


_BUILTIN_FACTORIES: dict[str, SourceFactory] = {
    "static": _static_source,
    "packages": _package_source,
}


def _default_enabled(config: HookgenConfig) -> List[str]:
    enabled: List[str] = []
    if config.components:
        enabled.append("static")
    if config.packages:
        enabled.append("packages")
    return enabled


def discover_sources(
    config: HookgenConfig, enabled: Sequence[str] | None = None
) -> List[ComponentSource]:
    """Return instantiated component sources for ``config``.

    Without an explicit ``enabled`` list, ``config.sources`` is used; when
    that is unset too, built-ins with configuration plus every installed
    plugin are returned.
    """
    if enabled is None:
        enabled = config.sources
    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}
    default_builtins = set(_default_enabled(config))

    sources: List[ComponentSource] = []
    seen: Set[str] = set()

    def _add(name: str, factory: SourceFactory, *, builtin: bool) -> None:
        key = name.lower()
        if key in seen:
            return
        if enabled_set is not None:
            if key not in enabled_set:
                return
        elif builtin and key not in default_builtins:
            return
        instance = factory(config)
        if not isinstance(instance, ComponentSource):
            raise TypeError(f"Source factory for '{name}' did not return a ComponentSource")
        sources.append(instance)
        seen.add(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory, builtin=True)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load component source '{name}': {exc}") from exc

        def _factory(cfg: HookgenConfig, obj: object = loaded) -> ComponentSource:
            return _coerce_source(obj, cfg)

        _add(name, _factory, builtin=False)

    if enabled_set:
        missing = sorted(enabled_set - seen)
        if missing:
            raise ValueError(f"Unknown component sources requested: {', '.join(missing)}")

    return sources


def build_source(config: HookgenConfig, enabled: Sequence[str] | None = None) -> ComponentSource:
    """Combine every discovered source into a single ``ComponentSource``."""
    return CompositeComponentSource(discover_sources(config, enabled))


def _coerce_source(obj: object, config: HookgenConfig) -> ComponentSource:
    if isinstance(obj, ComponentSource):
        return obj
    if isinstance(obj, type) and issubclass(obj, ComponentSource):
        return obj()
    if callable(obj):
        instance = obj(config)
        if isinstance(instance, ComponentSource):
            return instance
    raise TypeError("Component source entry point must be a ComponentSource subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "COMPONENT_MARKER",
    "ComponentSource",
    "CompositeComponentSource",
    "PackageComponentSource",
    "StaticComponentSource",
    "build_source",
    "discover_sources",
]
