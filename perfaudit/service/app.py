"""FastAPI application entrypoint for perfaudit service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..models import AuditResult
from ..orchestrator import AuditOptions, AuditRunner


class AnalyzeRequest(BaseModel):
    path: str
    performance_only: bool = False
    bundle_only: bool = False


class AnalyzeResponse(BaseModel):
    root: str
    timestamp: str
    options: Dict[str, Any]
    sections: Dict[str, Any]
    summary: Dict[str, Any]
    warnings: List[str]
    artifacts: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_runner() -> AuditRunner:
    return AuditRunner()


def create_app(
    runner_factory: Callable[[], AuditRunner] = _default_runner,
) -> FastAPI:
    """Create the FastAPI application exposing perfaudit analysis."""

    app = FastAPI(title="perfaudit Service", version="0.1.0")

    async def get_runner() -> AuditRunner:
        return runner_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        runner: AuditRunner = Depends(get_runner),
    ) -> AnalyzeResponse:
        # Service runs never write report files; the result is the response.
        options = AuditOptions(
            run_performance=not payload.bundle_only,
            run_bundle=not payload.performance_only,
            output_format="json",
            write_report=False,
        )

        def _run_analysis() -> AuditResult:
            return runner.run(payload.path, options)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_analysis)
        return AnalyzeResponse(**result.to_dict())

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PermissionError)
    async def permission_error_handler(_: Any, exc: PermissionError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
