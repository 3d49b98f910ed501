"""HTTP service mode for editor and watch tooling."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
