"""Bundled ASGI host.

``App`` is the host the pipeline is mounted on: it owns path matching,
builds the ``Request``, hands each matched route an ``AsgiResponse`` sink,
and speaks the ASGI lifespan protocol. It is mutable during setup and
frozen when the first lifespan or HTTP scope arrives.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any

from pathrouter._internal.asgi import Receive, Scope, Send
from pathrouter._internal.types import ErrorMapper, RequestHandler
from pathrouter.config import RouterConfig
from pathrouter.errors import HTTPError
from pathrouter.http.request import Request
from pathrouter.http.response import AsgiResponse
from pathrouter.log import Log
from pathrouter.mount import mount_routes
from pathrouter.routing.route import Endpoint, Method, Route
from pathrouter.routing.router import Router, parse_path
from pathrouter.server.errors import internal_error_body

logger = logging.getLogger("pathrouter.server")

# Error names for host-level HTTP errors
_HTTP_ERROR_NAMES = {404: "notFound", 405: "methodNotAllowed"}


class App:
    """ASGI application hosting route handlers.

    Usage::

        app = App(RouterConfig(debug=True))
        app.mount(routes, controller=UsersController(repo), on_error=map_error)

        # any ASGI server: uvicorn module:app, hypercorn module:app, ...

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock and
        a double check, so concurrent first requests compile once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._router = Router()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Registration (the Registrar surface) --

    def add(self, method: Method | str, path: str, handler: RequestHandler) -> None:
        """Register *handler* for *method* on *path*."""
        self._check_not_frozen()
        param_types = {
            seg.param_name: seg.param_type
            for seg in parse_path(path)
            if seg.is_param and seg.param_name
        }
        self._router.add(Endpoint(path, str(method).upper(), handler, param_types))

    def get(self, path: str, handler: RequestHandler) -> None:
        self.add(Method.GET, path, handler)

    def post(self, path: str, handler: RequestHandler) -> None:
        self.add(Method.POST, path, handler)

    def patch(self, path: str, handler: RequestHandler) -> None:
        self.add(Method.PATCH, path, handler)

    def put(self, path: str, handler: RequestHandler) -> None:
        self.add(Method.PUT, path, handler)

    def delete(self, path: str, handler: RequestHandler) -> None:
        self.add(Method.DELETE, path, handler)

    def mount(
        self,
        routes: Iterable[Route],
        *,
        controller: object | None = None,
        on_error: ErrorMapper | None = None,
        log: Log | None = None,
    ) -> "App":
        """Mount a route table using this app's config."""
        mount_routes(
            self,
            routes,
            config=self.config,
            controller=controller,
            on_error=on_error,
            log=log,
        )
        return self

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        return self._router.endpoints

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook (sync or async). Usable as a decorator."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook (sync or async). Usable as a decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise RuntimeError(msg)

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._frozen = True
                logger.debug("Serving %d endpoints", len(self._router.endpoints))

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        self._ensure_frozen()
        await self._handle_http(scope, receive, send)

    async def _handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request.from_asgi(scope, receive)
        response = AsgiResponse(send)

        try:
            match = self._router.match(request.method, request.path)
            request = replace(request, path_params=match.path_params)
            await match.endpoint.handler(request, response)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            if response.committed:
                return
            response.set_status(exc.status)
            for name, value in exc.headers:
                response.set_header(name, value)
            name = _HTTP_ERROR_NAMES.get(exc.status, "httpError")
            await response.json({"error": {"name": name, "message": exc.detail}})
            return
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            if not response.committed:
                response.set_status(500)
                await response.json(internal_error_body(exc))
            return

        if not response.committed:
            # A handler registered directly on the host returned without writing.
            await response.end()

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run startup/shutdown hooks and report back to the server."""
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return
