"""
Resume Studio Backend - Main FastAPI Application

Stores resume drafts, scores them with rule-based ATS and general analysis,
and publishes read-only shareable snapshots.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import router
from app.config import Settings, get_settings
from app.services.exceptions import ResumeStudioError
from app.services.store import CollectionStore, build_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")

    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = build_store(settings)
    logger.info(f"Storage backend: {app.state.store.backend}")

    yield

    # Shutdown
    if owns_store:
        await app.state.store.close()
    logger.info(f"Shutting down {settings.app_name}")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[CollectionStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        store: Pre-built collection store; when omitted one is built from
            settings at startup and closed at shutdown
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
## Resume Studio Backend API

Build, score and share resumes.

### Features

- **Drafts**: Save any number of named resume drafts and edit their entries
- **ATS Analysis**: Keyword coverage of a resume against a job description
- **General Analysis**: Structural quality score with strengths and weaknesses
- **Public Sharing**: Publish read-only snapshots addressed by a share id

### Quick Start

1. Save a draft with `POST /api/resumes`
2. Score it with `POST /api/analyze/general` or `POST /api/analyze/ats`
3. Publish a snapshot with `POST /api/shares` and open `/api/public/{shareId}`
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(ResumeStudioError)
    async def service_exception_handler(request: Request, exc: ResumeStudioError):
        logger.warning(f"Unhandled service error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": exc.message}
        )

    # Add global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "An internal error occurred",
                "detail": str(exc) if settings.debug else "Please try again later"
            }
        )

    # Include API routes
    app.include_router(router, prefix="/api")

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
            "api": "/api"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
