"""Configuration loading for hookgen (.hookgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import CONFIG_FILENAME, DEFAULT_HOOKS_OUTPUT_DIR


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompilerConfig:
    """Settings for the hooks compile step."""

    hooks_output_dir: str = DEFAULT_HOOKS_OUTPUT_DIR


@dataclass
class HookgenConfig:
    """Represents the settings defined in .hookgen.yml."""

    root: Path
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    components: List[Dict[str, str]] = field(default_factory=list)
    packages: List[str] = field(default_factory=list)
    sources: Optional[List[str]] = None

    @property
    def hooks_output_dir(self) -> Path:
        """Absolute output directory, resolved against the project root."""
        path = Path(self.compiler.hooks_output_dir).expanduser()
        if path.is_absolute():
            return path
        return self.root / path


def load_config(config_path: Path) -> HookgenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return HookgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    compiler = CompilerConfig()
    compiler_data = _as_dict(data.get("compiler"))
    output_dir = _as_str(compiler_data.get("hooks_output_dir"))
    if output_dir:
        compiler.hooks_output_dir = output_dir

    components = [_as_component(item) for item in _as_list(data.get("components"))]
    packages = _as_str_list(data.get("packages"))
    sources = _as_str_list(data.get("sources")) if "sources" in data else None

    return HookgenConfig(
        root=root,
        compiler=compiler,
        components=components,
        packages=packages,
        sources=sources,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_component(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise ConfigError("Each entry under 'components' must be a mapping with 'id' and 'path'")
    identifier = _as_str(value.get("id"))
    path = _as_str(value.get("path"))
    if not identifier or not path:
        raise ConfigError("Component entries require both 'id' and 'path'")
    return {"id": identifier, "path": path}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CompilerConfig", "ConfigError", "HookgenConfig", "load_config"]
