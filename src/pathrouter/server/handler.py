"""Per-route request handler — the whole pipeline for one matched request.

Resolve inputs, dispatch the action, materialize the result. Any failure
along the way is handed to the error interceptor, so the host always gets
back a request that has been answered exactly once.
"""

import time
from dataclasses import dataclass
from typing import Any

from pathrouter._internal.types import Action, ErrorMapper
from pathrouter.config import RouterConfig
from pathrouter.http.response import ResponseSink
from pathrouter.log import Log
from pathrouter.routing.route import Route
from pathrouter.server.dispatch import dispatch
from pathrouter.server.errors import intercept
from pathrouter.server.materialize import materialize
from pathrouter.server.resolve import resolve_inputs


@dataclass(frozen=True, slots=True)
class RouteHandler:
    """Callable registered on the host for one route.

    Built once by ``mount_routes()``; holds the action already bound, so
    nothing is looked up per request.
    """

    route: Route
    action: Action
    config: RouterConfig
    log: Log
    on_error: ErrorMapper | None = None

    async def __call__(self, request: Any, response: ResponseSink) -> None:
        started = time.perf_counter()
        try:
            context = await resolve_inputs(request, response, self.route.resolves)
            result = await dispatch(self.action, context)
            await materialize(result, response, config=self.config, started=started)
        except Exception as exc:
            await intercept(
                exc,
                request,
                response,
                on_error=self.on_error,
                log=self.log,
                tag=self.config.log_tag,
            )
