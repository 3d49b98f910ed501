"""Stage colocated component hooks and generate their aggregator module."""

from .models import AssetCandidate, CompileStatus, ComponentRecord, LocatedAssets, StageResult
from .orchestrator import Orchestrator

__all__ = [
    "AssetCandidate",
    "CompileStatus",
    "ComponentRecord",
    "LocatedAssets",
    "Orchestrator",
    "StageResult",
]
