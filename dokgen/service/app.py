"""FastAPI application entrypoint for dokgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..assembler import document_project
from ..config import ConfigError
from ..detect import UnsupportedProjectError, detect_project
from ..logging import get_logger
from ..manifest import ManifestError
from ..models import ProjectDocumentation

_logger = get_logger("service")


class ExtractRequest(BaseModel):
    path: str


class HealthResponse(BaseModel):
    status: str


def _default_extractor(path: str) -> ProjectDocumentation:
    detect_project(path)
    return document_project(path)


def create_app(
    extractor: Callable[[str], ProjectDocumentation] = _default_extractor,
) -> FastAPI:
    """Create the FastAPI application exposing the extraction engine."""

    app = FastAPI(title="Dokgen Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract")
    async def extract(payload: ExtractRequest) -> Dict[str, Any]:
        _logger.info("Extract requested for %s", payload.path)
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(None, extractor, payload.path)
        return record.to_dict()

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(OSError)
    async def os_error_handler(_: Any, exc: OSError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedProjectError)
    async def unsupported_handler(_: Any, exc: UnsupportedProjectError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ManifestError)
    async def manifest_error_handler(_: Any, exc: ManifestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(UnicodeDecodeError)
    async def decode_error_handler(_: Any, exc: UnicodeDecodeError) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"detail": f"Input is not valid UTF-8 text: {exc}"}
        )

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
