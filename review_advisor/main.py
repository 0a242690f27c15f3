"""FastAPI application factory and global exception handling."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from review_advisor import __version__ as app_version
from review_advisor.api.routes import router
from review_advisor.config import get_settings
from review_advisor.errors import GenerationFailed, RetrievalEmpty, RetrievalFailed
from review_advisor.service import AdvisorServices, build_services


def create_application(services: Optional[AdvisorServices] = None) -> FastAPI:
    """Create and configure the FastAPI application instance."""
    owns_services = services is None
    services = services or build_services(get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_services:
            services.close()

    app = FastAPI(
        title="Review Advisor",
        description="Review summaries and advisory chat backed by a local Ollama model.",
        version=app_version,
        lifespan=lifespan,
    )
    app.state.services = services

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(RetrievalEmpty)
    async def retrieval_empty_handler(
        request: Request, exc: RetrievalEmpty
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404, content={"error": "no_reviews", "details": str(exc)}
        )

    @app.exception_handler(RetrievalFailed)
    async def retrieval_failed_handler(
        request: Request, exc: RetrievalFailed
    ) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "error": "retrieval_failed",
                "status_code": exc.status_code,
                "details": exc.body,
            },
        )

    @app.exception_handler(GenerationFailed)
    async def generation_failed_handler(
        request: Request, exc: GenerationFailed
    ) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "error": "generation_failed",
                "status_code": exc.status_code,
                "details": exc.body,
            },
        )

    @app.get("/healthz", tags=["health"])
    async def healthz() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": app_version,
            "model": services.settings.ollama_model,
        }

    app.include_router(router)
    return app
