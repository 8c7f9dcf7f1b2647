"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from legalease import __version__
from legalease.config import configure_logging, get_settings

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level)
    settings.ensure_directories()

    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        upload_dir=str(settings.upload_dir),
    )

    yield

    logger.info("application_shutting_down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="LegalEase API",
        description="Plain-language analysis and risk scoring for legal documents",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "detail": str(exc) if settings.debug else None,
            },
        )

    from legalease.api.routes import documents, templates

    app.include_router(documents.router, prefix="/api", tags=["documents"])
    app.include_router(templates.router, prefix="/api/templates", tags=["templates"])

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        from legalease.services.llm_service import get_llm_service

        return {
            "status": "healthy",
            "services": {
                "llm": get_llm_service().health_check(),
            },
        }

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "name": "LegalEase API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
