"""FastAPI application entry point."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ingredient_api.api.dependencies import (
    get_catalog_recognition_service,
    get_recognition_service,
)
from ingredient_api.api.routes import recognition
from ingredient_api.core.config import get_settings
from ingredient_api.core.exceptions import RecognitionError
from ingredient_api.models import HealthStatus
from ingredient_api.services.catalog import get_catalog_client
from ingredient_api.services.vision import get_tagger_client, get_vision_client

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Closes upstream HTTP clients on shutdown.
    """
    logger.info(f"Starting {settings.app_name} v{settings.api_version}")
    if not settings.is_vision_configured:
        logger.warning("GEMINI_API_KEY is not set; vision recognition will fail")

    yield

    logger.info("Shutting down...")
    await asyncio.gather(
        get_vision_client().close(),
        get_tagger_client().close(),
        get_catalog_client().close(),
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Ingredient recognition from food photos",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RecognitionError)
    async def recognition_error_handler(request: Request, exc: RecognitionError):
        """Handle recognition pipeline errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            },
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Report whether credentials and upstream endpoints are usable."""
        vision_status, catalog_status = await asyncio.gather(
            get_recognition_service().health_check(),
            get_catalog_recognition_service().health_check(),
        )
        status = HealthStatus(
            vision=vision_status.vision,
            tagger=vision_status.tagger or catalog_status.tagger,
            catalog=catalog_status.catalog,
        )
        status.overall = status.vision or (status.tagger and status.catalog)
        return {
            "status": "healthy" if status.overall else "degraded",
            "service": settings.app_name,
            "version": settings.api_version,
            **status.model_dump(),
        }

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    # Include routers
    app.include_router(recognition.router, prefix="/recognize", tags=["Recognition"])

    return app


# Create app instance
app = create_app()
