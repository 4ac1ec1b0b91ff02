"""FastAPI application exposing snapshot generation over HTTP."""

from __future__ import annotations

import os
import asyncio
import logging
from typing import Any, List, Optional

import click
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..adapters import InvalidRootError, validate_root
from ..core.generator import SnapshotGenerator
from ..core.languages import DEFAULT_TEXT_EXTS
from ..core.models import Config

logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    """Request body; field names follow the browser client's camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    directory: Optional[str] = None
    include_contents: bool = Field(False, alias="includeContents")
    max_depth: Optional[int] = Field(None, ge=0, alias="maxDepth")
    max_file_size: Optional[int] = Field(500_000, ge=0, alias="maxFileSizeBytes")
    max_lines_per_file: Optional[int] = Field(1200, ge=0, alias="maxLinesPerFile")
    max_bytes_per_file: Optional[int] = Field(200_000, ge=0, alias="maxBytesPerFile")
    max_total_bytes: Optional[int] = Field(5_000_000, ge=0, alias="maxTotalBytes")
    ext_whitelist: Optional[List[str]] = Field(None, alias="extWhitelist")
    exclude_globs: List[str] = Field(default_factory=list, alias="excludeGlobs")
    analyze: bool = False


class GenerateResponse(BaseModel):
    ok: bool
    filename: str
    markdown: str


class HealthResponse(BaseModel):
    status: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_config(payload: GenerateRequest, root: str) -> Config:
    """Translate a request body into an engine configuration."""
    return Config.from_options(
        root,
        ext_whitelist=payload.ext_whitelist if payload.ext_whitelist is not None else DEFAULT_TEXT_EXTS,
        exclude_globs=payload.exclude_globs,
        include_contents=payload.include_contents,
        analyze=payload.analyze,
        max_depth=payload.max_depth,
        max_file_size=payload.max_file_size,
        max_lines_per_file=payload.max_lines_per_file,
        max_bytes_per_file=payload.max_bytes_per_file,
        max_total_bytes=payload.max_total_bytes,
    )


def create_app() -> FastAPI:
    """Create the FastAPI application exposing dir2md generation."""

    app = FastAPI(title="dir2md", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/api/generate", response_model=GenerateResponse)
    async def generate(payload: GenerateRequest) -> Any:
        if not payload.directory:
            return _error(400, "Missing 'directory'.")

        try:
            root = validate_root(payload.directory)
        except InvalidRootError as e:
            if e.reason == "missing":
                return _error(404, "Directory not found.")
            return _error(400, "Path is not a directory.")

        config = build_config(payload, root)

        def _run_generate() -> str:
            return SnapshotGenerator(config).generate()

        loop = asyncio.get_running_loop()
        try:
            markdown = await loop.run_in_executor(None, _run_generate)
        except Exception as e:
            logger.exception("Snapshot generation failed")
            return _error(500, str(e) or "Server error")

        return GenerateResponse(
            ok=True,
            filename=f"snapshot-{os.path.basename(root)}.md",
            markdown=markdown,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request.") if errors else "Invalid request."
        return _error(400, message)

    return app


def run_service(host: Optional[str] = None, port: Optional[int] = None) -> None:  # pragma: no cover - integration path
    """Run the service with uvicorn; host and port default from the environment."""
    load_dotenv()
    host = host or os.getenv("DIR2MD_HOST", "127.0.0.1")
    port = port or int(os.getenv("DIR2MD_PORT") or os.getenv("PORT") or 3000)

    app = create_app()
    logger.info(f"Serving on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)


@click.command()
@click.option('--host', default=None, help='Bind address (default: $DIR2MD_HOST or 127.0.0.1)')
@click.option('--port', type=int, default=None, help='Port (default: $DIR2MD_PORT, $PORT or 3000)')
def serve(host: Optional[str], port: Optional[int]) -> None:  # pragma: no cover - integration path
    """Serve the dir2md HTTP API."""
    logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    run_service(host, port)
