"""Shared file naming constants for staged assets."""

HOOKS_EXTENSION = ".hooks.js"
STYLE_EXTENSION = ".css"

INDEX_FILENAME = "index.js"

DEFAULT_HOOKS_OUTPUT_DIR = "assets/js/_hooks"

CONFIG_FILENAME = ".hookgen.yml"

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_HOOKS_OUTPUT_DIR",
    "HOOKS_EXTENSION",
    "INDEX_FILENAME",
    "STYLE_EXTENSION",
]
