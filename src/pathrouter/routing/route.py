"""Route descriptors and host endpoint records."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pathrouter._internal.types import Action, RequestHandler, Resolver


class Method(StrEnum):
    """HTTP methods a route table may declare."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class Route:
    """One entry of a route table.

    ``resolves`` run concurrently before the action; their values follow
    the request in the action's context. Either ``action`` (a method name
    on the controller) or ``callback`` must name something callable;
    ``action`` wins when both are set.

    Usage::

        Route(Method.GET, "/users/{id:int}", resolves=(load_user,), action="show")
        Route("post", "/ping", callback=lambda ctx: {"text": "pong"})
    """

    method: Method | str
    path: str
    resolves: tuple[Resolver, ...] = ()
    action: str | None = None
    callback: Action | None = None


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a host route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/{id}``   (is_param=True, param_name="id")
    Typed:   ``/{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A handler registered on the host for one method and path."""

    path: str
    method: str
    handler: RequestHandler
    param_types: dict[str, str]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful host route match."""

    endpoint: Endpoint
    path_params: dict[str, Any]

