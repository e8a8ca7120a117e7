"""Route Table — declarative (method, path) → handler bindings, assembled once at startup.

Invariants:
    - Registration is append-only and happens before the listener accepts connections
    - After freeze() (or mount()) the table never changes; no locking needed
    - dispatch() is an exact-match dict lookup, O(1) in route count
    - An unregistered (method, path) pair raises RouteNotFoundError (HTTP 404)

Design Decisions:
    - Routes are plain values returned by each route module's route() function;
      registration order is explicit in one place (main.py / cmd)
    - The table stays the source of truth at runtime: the server's route guard
      dispatches through it before FastAPI routing runs
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from fastapi import FastAPI

from social.core.errors import RouteNotFoundError

SUPPORTED_METHODS = frozenset({
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS",
})


class RouteRegistrationError(ValueError):
    """Invalid, duplicate, or late route registration (a startup bug)."""


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Callable[..., Any]
    status_code: int = 200
    response_model: Any = None
    name: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def key(self) -> tuple[str, str]:
        return (self.method.upper(), self.path)


class RouteTable:
    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Route] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, *routes: Route) -> None:
        for route in routes:
            self._check(route)
            self._routes[route.key] = route

    def _check(self, route: Route) -> None:
        if self._frozen:
            raise RouteRegistrationError(
                f"route table is frozen, cannot register {route.method} {route.path}",
            )
        if route.method.upper() not in SUPPORTED_METHODS:
            raise RouteRegistrationError(f"unsupported method {route.method!r}")
        if not route.path.startswith("/"):
            raise RouteRegistrationError(f"path must start with '/': {route.path!r}")
        if route.key in self._routes:
            raise RouteRegistrationError(
                f"duplicate route {route.method.upper()} {route.path}",
            )

    def dispatch(self, method: str, path: str) -> Route:
        """Return the route bound to (method, path) or raise RouteNotFoundError."""
        route = self._routes.get((method.upper(), path))
        if route is None:
            raise RouteNotFoundError(method.upper(), path)
        return route

    def freeze(self) -> None:
        self._frozen = True

    def mount(self, app: FastAPI) -> None:
        """Freeze and register every route on the FastAPI app."""
        self.freeze()
        for route in self._routes.values():
            app.add_api_route(
                route.path,
                route.endpoint,
                methods=[route.method.upper()],
                status_code=route.status_code,
                response_model=route.response_model,
                name=route.name,
                tags=list(route.tags) or None,
            )

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __contains__(self, key: object) -> bool:
        return key in self._routes
