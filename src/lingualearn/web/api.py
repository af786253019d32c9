"""FastAPI application factory.

Main entry point for the lingualearn Web API. The rendering layer reads
session state from it and calls engine operations in response to input.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lingualearn.web.routes import (
    auth_router,
    health_router,
    languages_router,
    lessons_router,
    session_router,
    vocabulary_router,
)
from lingualearn.web.sessions import get_engine, reset_engine

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    engine = get_engine()
    logger.info(
        "api_startup",
        languages=engine.languages,
        screen=engine.screen.value,
        user=engine.user.username if engine.user else None,
    )
    yield
    # Shutdown: cancel pending notification timers
    reset_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="LinguaLearn API",
        description="Learning-progress engine for the LinguaLearn lesson app",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(languages_router)
    app.include_router(lessons_router)
    app.include_router(vocabulary_router)
    app.include_router(session_router)

    return app


# Default app instance for uvicorn
app = create_app()
