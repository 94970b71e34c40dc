"""pathrouter exception hierarchy.

Shared across mounting, the host router and the request pipeline so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PathRouterError(Exception):
    """Base for all pathrouter-specific errors."""


class ConfigurationError(PathRouterError):
    """Raised when a route table or host setup is invalid.

    Always raised while mounting routes at startup, never per request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PathRouterError):
    """An error that maps directly to an HTTP status code.

    Raised by the bundled host when no route matches. Route pipelines
    never raise these to the host; their failures are rendered by the
    error interceptor.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
