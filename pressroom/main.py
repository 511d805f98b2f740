"""Pressroom API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PressroomError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - AppContainer built on startup and closed on shutdown via the lifespan;
      a container passed to create_app() is used as-is (and not closed)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pressroom.api.error_handlers import register_error_handlers
from pressroom.api.routes import auth, blog_pages, health, images, posts
from pressroom.config import get_settings
from pressroom.container import AppContainer, build_container
from pressroom.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    owned = getattr(app.state, "container", None) is None
    if owned:
        app.state.container = build_container(settings)
    container: AppContainer = app.state.container
    if settings.prerender_on_startup:
        await container.renderer.prerender_all(container.db)
    logger.info("Pressroom API started")
    yield
    logger.info("Pressroom API shutting down")
    if owned:
        await container.close()
        app.state.container = None


def create_app(container: AppContainer | None = None) -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Pressroom API", version="1.0.0", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(blog_pages.router)
    app.include_router(posts.router)
    app.include_router(images.router)

    register_error_handlers(app)
    return app


app = create_app()
