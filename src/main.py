"""
FastAPI Application Entry Point.

Путь: src/main.py
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import Container
from src.api.errors import register_exception_handlers
from src.api.routes import articles
from src.api.routes import system
from src.infrastructure.config.logging_config import setup_logging
from src.infrastructure.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    logger.info(
        f"[App] Started: model={container.generation_config.snapshot().model}, "
        f"api_key_configured={container.generation_config.api_key_configured}"
    )
    yield
    await container.client.close()
    logger.info("[App] Stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Собрать приложение со своим набором singleton-зависимостей."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="AI Article Pipeline API",
        description="Генерация статей конвейером LLM-вызовов",
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = Container.build(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routes
    app.include_router(articles.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "success": True,
            "message": "Service is healthy",
            "data": await system.health_payload(app.state.container),
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "AI Article Pipeline API",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
            "generate": "/api/v1/articles/generate-advanced",
        }

    return app


app = create_app()
