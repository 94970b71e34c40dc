"""Mounting — turn a route table into handlers on a host.

``mount_routes()`` validates every route, binds its action once, and
registers one ``RouteHandler`` per route through the host's per-method
registration primitive. Any table problem surfaces here, at startup, as
a ``ConfigurationError``.

Usage::

    class Users:
        def __init__(self, repo):
            self.repo = repo

        async def show(self, ctx):
            request, user = ctx
            return Result(Json(user))

    routes = [
        Route(Method.GET, "/users/{id:int}", resolves=(load_user,), action="show"),
    ]
    mount_routes(app, routes, controller=Users(repo))
"""

from collections.abc import Iterable
from typing import Any, Protocol

from pathrouter._internal.types import Action, ErrorMapper, RequestHandler
from pathrouter.config import RouterConfig
from pathrouter.errors import ConfigurationError
from pathrouter.log import Log, LoggingLog
from pathrouter.routing.route import Method, Route
from pathrouter.server.handler import RouteHandler


class Registrar(Protocol):
    """The host's registration surface: one primitive per HTTP method."""

    def get(self, path: str, handler: RequestHandler) -> Any: ...
    def post(self, path: str, handler: RequestHandler) -> Any: ...
    def patch(self, path: str, handler: RequestHandler) -> Any: ...
    def put(self, path: str, handler: RequestHandler) -> Any: ...
    def delete(self, path: str, handler: RequestHandler) -> Any: ...


def normalize_method(method: Method | str) -> Method:
    """Return *method* as a ``Method``, accepting any letter case."""
    try:
        return Method(str(method).upper())
    except ValueError:
        msg = f"Unsupported route method {method!r}; expected one of {', '.join(Method)}"
        raise ConfigurationError(msg) from None


def bind_action(route: Route, controller: object | None) -> Action:
    """Resolve the callable a route dispatches to.

    ``action`` names a method on *controller*; the bound method keeps the
    controller as receiver. Otherwise ``callback`` is used directly.
    """
    if route.action is not None:
        if controller is None:
            msg = f"Route {route.path!r} names action {route.action!r} but no controller was given"
            raise ConfigurationError(msg)
        bound = getattr(controller, route.action, None)
        if not callable(bound):
            msg = (
                f"Route {route.path!r}: {type(controller).__name__}.{route.action} "
                "is missing or not callable"
            )
            raise ConfigurationError(msg)
        return bound

    if route.callback is None or not callable(route.callback):
        msg = f"Route {route.path!r} needs an action or a callable callback"
        raise ConfigurationError(msg)
    return route.callback


def build_handlers(
    routes: Iterable[Route],
    *,
    config: RouterConfig | None = None,
    controller: object | None = None,
    on_error: ErrorMapper | None = None,
    log: Log | None = None,
) -> list[tuple[Method, RouteHandler]]:
    """Validate *routes* and build their handlers without registering them."""
    config = config or RouterConfig()
    log = log or LoggingLog()
    handlers: list[tuple[Method, RouteHandler]] = []
    for route in routes:
        method = normalize_method(route.method)
        handler = RouteHandler(
            route=route,
            action=bind_action(route, controller),
            config=config,
            log=log,
            on_error=on_error,
        )
        handlers.append((method, handler))
    return handlers


def mount_routes(
    registrar: Registrar,
    routes: Iterable[Route],
    *,
    config: RouterConfig | None = None,
    controller: object | None = None,
    on_error: ErrorMapper | None = None,
    log: Log | None = None,
) -> Registrar:
    """Register a handler for every route in *routes* on *registrar*.

    The whole table is validated before anything is registered.
    Returns *registrar* for chaining.
    """
    handlers = build_handlers(
        routes, config=config, controller=controller, on_error=on_error, log=log
    )
    for method, handler in handlers:
        register = getattr(registrar, method.lower())
        register(handler.route.path, handler)
    return registrar
