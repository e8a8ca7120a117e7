"""HTTP Server — builds the FastAPI app from a RouteTable and runs it under uvicorn.

Invariants:
    - The route table is frozen before the app exists; nothing registers at runtime
    - Every request passes the route guard: unregistered (method, path) → 404 envelope,
      so FastAPI's own 405 / implicit HEAD / slash-redirect answers never surface
    - No docs/openapi endpoints: the HTTP surface is exactly the route table

Design Decisions:
    - build_app() is the single assembly point used by both entry points
    - Server wraps build_app + uvicorn for services that only need name, port and
      routes (see cmd/api_wd.py)
"""

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from social import __version__
from social.api.error_handlers import register_error_handlers
from social.api.route_table import Route, RouteTable
from social.core.errors import RouteNotFoundError

logger = logging.getLogger(__name__)

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


def build_app(
    title: str,
    routes: RouteTable,
    *,
    version: str = __version__,
    lifespan: Lifespan | None = None,
) -> FastAPI:
    """Assemble a FastAPI app whose routing is owned by `routes`."""
    app = FastAPI(
        title=title,
        version=version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    routes.mount(app)
    app.state.routes = routes

    @app.middleware("http")
    async def route_guard(request: Request, call_next):
        try:
            routes.dispatch(request.method, request.url.path)
        except RouteNotFoundError as e:
            logger.info(
                e.message,
                extra={
                    "error_code": e.code,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": e.http_status,
                },
            )
            return JSONResponse(status_code=e.http_status, content=e.to_response())
        return await call_next(request)

    register_error_handlers(app)
    return app


class Server:
    """Named HTTP service: collect routes, then start()."""

    def __init__(
        self,
        name: str,
        *,
        host: str = "0.0.0.0",
        port: int = 8081,
        version: str = __version__,
        lifespan: Lifespan | None = None,
    ):
        self.name = name
        self.host = host
        self.port = port
        self.version = version
        self.lifespan = lifespan
        self.routes = RouteTable()

    def register_route(self, *routes: Route) -> None:
        self.routes.register(*routes)

    def build(self) -> FastAPI:
        return build_app(
            self.name, self.routes, version=self.version, lifespan=self.lifespan,
        )

    def start(self) -> None:
        """Build the app and serve until shutdown (uvicorn exits non-zero on bind failure)."""
        app = self.build()
        logger.info(
            f"{self.name} listening on {self.host}:{self.port} "
            f"({len(self.routes)} routes)",
            extra={"service": self.name},
        )
        uvicorn.run(app, host=self.host, port=self.port, log_config=None)
