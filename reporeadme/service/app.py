"""FastAPI application exposing README generation over HTTP."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, load_config
from ..models import GenerationResult
from ..orchestrator import ReadmeGenerator

_STATUS_BY_ERROR = {
    "InvalidRepositoryURL": 400,
    "GenerationInProgress": 409,
    "MissingCredential": 500,
    "RateLimited": 503,
    "GenerationFailure": 502,
    "MalformedResponse": 502,
}


class GenerationAborted(RuntimeError):
    """Raised by the endpoints when a run ends without a README."""

    def __init__(self, result: GenerationResult) -> None:
        super().__init__(result.error)
        self.result = result


class UrlRequest(BaseModel):
    url: str


class FilesRequest(BaseModel):
    paths: List[str] = Field(default_factory=list)


class StatusModel(BaseModel):
    step: int
    message: str
    error: bool = False


class GenerateResponse(BaseModel):
    readme: Optional[str] = None
    error: Optional[str] = None
    statuses: List[StatusModel] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str


def _response_body(result: GenerationResult) -> GenerateResponse:
    return GenerateResponse(
        readme=result.readme,
        error=result.error,
        statuses=[
            StatusModel(step=status.step, message=status.message, error=status.error)
            for status in result.statuses
        ],
    )


def _default_generator() -> ReadmeGenerator:
    return ReadmeGenerator.from_config(load_config(Path.cwd()))


def create_app(
    generator_factory: Callable[[], ReadmeGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing generation endpoints."""
    app = FastAPI(title="RepoReadme Service", version="1.0.0")

    async def get_generator() -> ReadmeGenerator:
        # Lazy-instantiate per request to keep state predictable.
        return generator_factory()

    async def _run(func: Callable[[], GenerationResult]) -> GenerateResponse:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, func)
        if result.error is not None:
            raise GenerationAborted(result)
        return _response_body(result)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate/url", response_model=GenerateResponse)
    async def generate_url(
        payload: UrlRequest,
        generator: ReadmeGenerator = Depends(get_generator),
    ) -> GenerateResponse:
        return await _run(lambda: generator.generate_from_url(payload.url))

    @app.post("/generate/files", response_model=GenerateResponse)
    async def generate_files(
        payload: FilesRequest,
        generator: ReadmeGenerator = Depends(get_generator),
    ) -> GenerateResponse:
        return await _run(lambda: generator.generate_from_paths(payload.paths))

    @app.exception_handler(GenerationAborted)
    async def generation_aborted_handler(_: Any, exc: GenerationAborted) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(exc.result.error_kind or "", 500)
        return JSONResponse(
            status_code=status_code, content=_response_body(exc.result).model_dump()
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
