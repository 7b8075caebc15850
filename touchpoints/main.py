"""
Application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from touchpoints.api.v1.router import create_router
from touchpoints.core.config import settings
from touchpoints.core.database import DatabaseManager
from touchpoints.core.logging import setup_logging
from touchpoints.core.middleware import setup_error_handlers

logger = setup_logging()


def create_app(db_manager: Optional[DatabaseManager] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        db_manager: storage handle to use; a MongoDB-backed one is built from
            settings when omitted. It is opened on startup and closed on
            shutdown.
    """
    db = db_manager or DatabaseManager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.open()
        app.state.db = db
        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
        try:
            yield
        finally:
            db.close()
            logger.info(f"{settings.PROJECT_NAME} stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.DESCRIPTION,
        version=settings.VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )
    # Enable GZip compression for responses
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    setup_error_handlers(app)

    app.include_router(create_router(prefix=settings.API_V1_STR))

    @app.get("/api/health", tags=["health"])
    def health():
        return {
            "status": "ok",
            "version": settings.VERSION,
            "database": "connected" if db.is_open else "disconnected",
        }

    return app


app = create_app()
