"""Trie-based path matching for the bundled ASGI host.

Endpoints are added while the host is being set up and matched per
request. Static segments win over parameters, parameters over catch-alls.
"""

import re
from dataclasses import dataclass

from pathrouter.errors import ConfigurationError, MethodNotAllowed, NotFound
from pathrouter.routing.params import CONVERTERS, convert_params
from pathrouter.routing.route import Endpoint, PathSegment, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"             -> [PathSegment("users")]
        "/users/{id}"        -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/files/{rest:path}" -> [PathSegment("files"), PathSegment(..., param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            name, _, param_type = part[1:-1].partition(":")
            param_type = param_type or "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown path converter {param_type!r} in {path!r}"
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "endpoints", "param_child")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.param_child: _ParamEdge | None = None
        self.catch_all: _CatchAllEdge | None = None
        self.endpoints: dict[str, Endpoint] = {}


@dataclass(slots=True)
class _ParamEdge:
    param_name: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """Consumes the remaining path."""

    param_name: str
    endpoints: dict[str, Endpoint]


class Router:
    """Path trie keyed by segment, with endpoints keyed by method.

    Usage::

        router = Router()
        router.add(Endpoint("/users/{id:int}", "GET", handler, {"id": "int"}))
        match = router.match("GET", "/users/42")
        match.path_params  # {"id": 42}
    """

    __slots__ = ("_endpoints", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._endpoints: list[Endpoint] = []

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        """All registered endpoints, in registration order."""
        return tuple(self._endpoints)

    def add(self, endpoint: Endpoint) -> None:
        """Register *endpoint*.

        Raises ``ConfigurationError`` when the same method and path
        shape is registered twice.
        """
        node = self._root
        table: dict[str, Endpoint] | None = None
        for seg in parse_path(endpoint.path):
            if seg.is_param and seg.param_type == "path":
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(seg.param_name or "path", {})
                table = node.catch_all.endpoints
                break
            if seg.is_param:
                if node.param_child is None:
                    pattern, _ = CONVERTERS[seg.param_type]
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        regex=re.compile(f"^{pattern}$"),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        if table is None:
            table = node.endpoints
        if endpoint.method in table:
            msg = f"Duplicate route: {endpoint.method} {endpoint.path}"
            raise ConfigurationError(msg)
        table[endpoint.method] = endpoint
        self._endpoints.append(endpoint)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path.

        Raises ``NotFound`` if no path matches, ``MethodNotAllowed`` if the
        path matches but not for *method*.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        found = self._match_node(self._root, parts, 0, {})
        if found is None:
            raise NotFound(f"No route matches {method} {path!r}")

        endpoints, params = found
        endpoint = endpoints.get(method)
        if endpoint is None:
            raise MethodNotAllowed(frozenset(endpoints))
        return RouteMatch(
            endpoint=endpoint,
            path_params=convert_params(params, endpoint.param_types),
        )

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[dict[str, Endpoint], dict[str, str]] | None:
        if index == len(parts):
            return (node.endpoints, params) if node.endpoints else None

        part = parts[index]

        if part in node.children:
            found = self._match_node(node.children[part], parts, index + 1, params)
            if found is not None:
                return found

        edge = node.param_child
        if edge is not None and edge.regex.match(part):
            found = self._match_node(
                edge.node, parts, index + 1, {**params, edge.param_name: part}
            )
            if found is not None:
                return found

        if node.catch_all is not None:
            rest = "/".join(parts[index:])
            return node.catch_all.endpoints, {**params, node.catch_all.param_name: rest}

        return None
