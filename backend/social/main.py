"""Social API — FastAPI application factory.

Invariants:
    - Settings resolved once and passed in; stored on app.state, never a module global
    - Routes registered explicitly into a RouteTable, frozen before serving
    - Database manager created in lifespan and disposed on shutdown

Design Decisions:
    - create_app() factory over a module-level app: tests build isolated apps with
      their own settings; `uvicorn --factory social.main:create_app` still works
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from social import __version__
from social.api.route_table import RouteTable
from social.api.routes import example, health, users
from social.api.server import build_app
from social.config import Settings, resolve_settings
from social.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


def build_route_table() -> RouteTable:
    table = RouteTable()
    table.register(example.route(), *health.routes(), users.route())
    return table


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or resolve_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        app.state.db = DatabaseSessionManager.from_settings(settings)
        logger.info(
            f"{settings.service_name} API started",
            extra={"service": settings.service_name},
        )
        yield
        await app.state.db.dispose()
        logger.info(
            f"{settings.service_name} API shutting down",
            extra={"service": settings.service_name},
        )

    app = build_app(
        settings.service_name,
        build_route_table(),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    return app
