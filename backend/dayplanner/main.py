"""
Day Planner - Main Application Entry Point

Daily schedule editor with cascading time edits, undo/redo,
AI generation and PDF/CSV export.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplanner.core.config import get_settings
from dayplanner.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(f"Starting Day Planner in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from dayplanner.infrastructure.local.database import init_db

        await init_db()

    yield

    logger.info("Shutting down Day Planner...")
    if settings.is_local:
        from dayplanner.infrastructure.local.database import dispose_engine

        await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Day Planner",
        description="Daily schedule planner with cascading edits",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # Include routers
    from dayplanner.api import admin, auth, schedule

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "dayplanner.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
