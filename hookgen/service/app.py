"""FastAPI application entrypoint for hookgen service mode."""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config
from ..models import AssetCandidate, CompileStatus, LocatedAssets
from ..orchestrator import Orchestrator

OrchestratorFactory = Callable[[str, Optional[str]], Orchestrator]


class CompileRequest(BaseModel):
    path: str
    output_dir: Optional[str] = None


class CompileResponse(BaseModel):
    status: str
    output_dir: str


class AssetsRequest(BaseModel):
    path: str


class AssetEntry(BaseModel):
    source_path: str
    destination_name: str


class AssetsResponse(BaseModel):
    hooks: List[AssetEntry]
    styles: List[AssetEntry]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator(path: str, output_dir: Optional[str] = None) -> Orchestrator:
    config = load_config(Path(path))
    target = None
    if output_dir:
        target = Path(output_dir)
        if not target.is_absolute():
            target = config.root / target
    return Orchestrator.from_config(config, output_dir=target)


def _entries(candidates: frozenset[AssetCandidate]) -> List[AssetEntry]:
    return [
        AssetEntry(source_path=str(item.source_path), destination_name=item.destination_name)
        for item in sorted(candidates, key=lambda item: item.destination_name)
    ]


def create_app(
    orchestrator_factory: OrchestratorFactory = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing hookgen operations.

    Compiles never overlap; they are serialised through a single lock.
    """
    app = FastAPI(title="Hookgen Service", version="1.0.0")
    compile_lock = threading.Lock()

    async def get_factory() -> OrchestratorFactory:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/compile", response_model=CompileResponse)
    async def compile_hooks(
        payload: CompileRequest,
        factory: OrchestratorFactory = Depends(get_factory),
    ) -> CompileResponse:
        def _run_compile() -> tuple[CompileStatus, Orchestrator]:
            orchestrator = factory(payload.path, payload.output_dir)
            with compile_lock:
                return orchestrator.run(), orchestrator

        loop = asyncio.get_running_loop()
        status, orchestrator = await loop.run_in_executor(None, _run_compile)
        return CompileResponse(status=status.value, output_dir=str(orchestrator.output_dir))

    @app.post("/assets", response_model=AssetsResponse)
    async def list_assets(
        payload: AssetsRequest,
        factory: OrchestratorFactory = Depends(get_factory),
    ) -> AssetsResponse:
        def _locate() -> LocatedAssets:
            return factory(payload.path, None).locate()

        loop = asyncio.get_running_loop()
        assets = await loop.run_in_executor(None, _locate)
        return AssetsResponse(hooks=_entries(assets.hooks), styles=_entries(assets.styles))

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
