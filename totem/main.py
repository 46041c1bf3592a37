"""Entrypoint for the FastAPI application."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from totem.api import health, products
from totem.api.errors import register_error_handlers
from totem.core.config import Settings, get_settings
from totem.core.db import build_engine, build_session_factory, init_db
from totem.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    init_db(app.state.engine)
    logger.info(f"{settings.app_name} started - environment: {settings.environment}, docs: {settings.docs_url}")
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for ``settings`` (defaults to the environment)."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "API backend do sistema Totem. Gerenciamento de produtos para totens de autoatendimento."
        ),
        docs_url=settings.docs_url,
        openapi_url=f"{settings.docs_url}/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Register API routers
    app.include_router(health.router)
    app.include_router(products.router)

    return app


app = create_app()
