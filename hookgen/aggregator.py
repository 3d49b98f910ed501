"""Render the ``index.js`` module that merges every staged hooks file."""

from __future__ import annotations

from typing import Iterable, List

from .constants import HOOKS_EXTENSION
from .models import AssetCandidate

HEADER = "/* This file was generated by hookgen */\n"

EMPTY_INDEX = HEADER + "\nexport default {}\n"

NS_HELPER = """function ns(hooks, nameSpace) {
  const updatedHooks = {}
  Object.keys(hooks).map(function(key) {
    updatedHooks[`${nameSpace}#${key}`] = hooks[key]
  })
  return updatedHooks
}
"""


def namespace_for(destination_name: str) -> str:
    """Strip the hooks suffix from a staged file name."""
    if destination_name.endswith(HOOKS_EXTENSION):
        return destination_name[: -len(HOOKS_EXTENSION)]
    return destination_name


def render(hooks_candidates: Iterable[AssetCandidate]) -> str:
    """Return the aggregator source for ``hooks_candidates``.

    Output depends only on the set of destination names, so enumeration
    order upstream never changes the generated bytes.
    """
    names = sorted({candidate.destination_name for candidate in hooks_candidates})
    if not names:
        return EMPTY_INDEX

    imports: List[str] = []
    hooks: List[str] = []
    for index, name in enumerate(names, start=1):
        var = f"c{index}"
        namespace = namespace_for(name)
        imports.append(f'import * as {var} from "./{namespace}.hooks"')
        hooks.append(f'ns({var}, "{namespace}")')

    return (
        f"{HEADER}\n"
        f"{NS_HELPER}\n"
        + "\n".join(imports)
        + "\n\nlet hooks = Object.assign(\n  "
        + ",\n  ".join(hooks)
        + "\n)\n\nexport default hooks\n"
    )


__all__ = ["EMPTY_INDEX", "namespace_for", "render"]
