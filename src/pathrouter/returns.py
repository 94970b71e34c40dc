"""Return types for route actions.

An action returns a ``Result``: an envelope (cookies, headers, redirect,
status, count, debug) around exactly one body. The body is a tagged
union (``Binary``, ``Json``, ``Text``, ``Html``, ``Stream`` or ``Empty``),
so "one body kind" holds by construction.

Actions may also return a plain mapping using the field names of the
classic result shape; ``coerce_result()`` converts it, picking the body
by fixed precedence::

    {"json": {...}, "status": 201}          -> Result(Json({...}), status=201)
    {"content": "<p>hi</p>"}               -> Result(Html("<p>hi</p>"))
    {"redirect": "/login"}                  -> Result(Empty(), redirect="/login")
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from pathrouter.http.cookies import Cookie


@dataclass(frozen=True, slots=True)
class Binary:
    """Raw bytes written as the whole body; no content type is inferred."""

    data: bytes


@dataclass(frozen=True, slots=True)
class Json:
    """A JSON-serializable value (mapping or sequence)."""

    value: Any


@dataclass(frozen=True, slots=True)
class Text:
    """A plain string body with no content type override."""

    value: str


@dataclass(frozen=True, slots=True)
class Html:
    """An HTML string body.

    Sent as ``text/html; charset=UTF-8`` unless the result's own headers
    already name a content type.
    """

    value: str


@dataclass(frozen=True, slots=True)
class Stream:
    """A chunk source piped into the response as it is produced."""

    chunks: Iterable[bytes | str] | AsyncIterable[bytes | str]


@dataclass(frozen=True, slots=True)
class Empty:
    """No body. Materializes as a 400 ``badRequest`` error."""


Body: TypeAlias = Binary | Json | Text | Html | Stream | Empty


@dataclass(frozen=True, slots=True)
class Result:
    """The structured value an action hands back to the pipeline."""

    body: Body = field(default_factory=Empty)
    cookies: Mapping[str, Cookie] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    redirect: str | None = None
    status: int | None = None
    count: int | None = None
    debug: Any = None


@dataclass(frozen=True, slots=True)
class ErrorResult:
    """Structured error produced by an application error mapper.

    Every field is optional; ``name``, ``message`` and ``details`` are
    rendered as given.
    """

    status: int | None = None
    name: str | None = None
    message: str | None = None
    details: Any = None


def is_int(value: Any) -> bool:
    """True for a real ``int``; ``bool`` does not count."""
    return isinstance(value, int) and not isinstance(value, bool)


def _is_stream(value: Any) -> bool:
    if value is None or isinstance(value, (str, bytes, bytearray, memoryview, Mapping)):
        return False
    return isinstance(value, (Iterable, AsyncIterable))


def _select_body(fields: Mapping[str, Any]) -> Body:
    """Pick the body: binary > json > text > content > stream > empty."""
    binary = fields.get("binary")
    if isinstance(binary, (bytes, bytearray, memoryview)):
        return Binary(bytes(binary))
    value = fields.get("json")
    if isinstance(value, (Mapping, list, tuple)):
        return Json(value)
    value = fields.get("text")
    if isinstance(value, str):
        return Text(value)
    value = fields.get("content")
    if isinstance(value, str):
        return Html(value)
    value = fields.get("stream")
    if _is_stream(value):
        return Stream(value)
    return Empty()


# Cookie option spellings of the classic result shape
_COOKIE_OPTIONS = {"maxAge": "max_age", "httpOnly": "httponly", "sameSite": "samesite"}


def _coerce_cookie(value: Any) -> Cookie:
    if isinstance(value, Cookie):
        return value
    if isinstance(value, Mapping):
        options = {
            _COOKIE_OPTIONS.get(key, key): option
            for key, option in (value.get("options") or {}).items()
        }
        return Cookie(value=str(value.get("value", "")), **options)
    return Cookie(value=str(value))


def coerce_result(value: Any) -> Result:
    """Normalize an action's return value into a ``Result``.

    Accepts a ``Result`` as-is, or a mapping with the classic field names.
    Fields of the wrong type are ignored, as if absent.

    Raises:
        TypeError: If *value* is neither (for example ``None``).
    """
    if isinstance(value, Result):
        return value
    if not isinstance(value, Mapping):
        msg = f"Action must return a Result or a mapping, got {type(value).__name__}"
        raise TypeError(msg)

    cookies = value.get("cookies")
    headers = value.get("headers")
    redirect = value.get("redirect")
    status = value.get("status")
    count = value.get("count")
    return Result(
        body=_select_body(value),
        cookies=(
            {name: _coerce_cookie(c) for name, c in cookies.items()}
            if isinstance(cookies, Mapping)
            else {}
        ),
        headers=dict(headers) if isinstance(headers, Mapping) else {},
        redirect=redirect if isinstance(redirect, str) else None,
        status=status if is_int(status) else None,
        count=count if is_int(count) else None,
        debug=value.get("debug"),
    )


def coerce_error(value: Any) -> ErrorResult:
    """Normalize an error mapper's return value into an ``ErrorResult``."""
    if isinstance(value, ErrorResult):
        return value
    if isinstance(value, Mapping):
        return ErrorResult(
            status=value.get("status"),
            name=value.get("name"),
            message=value.get("message"),
            details=value.get("details"),
        )
    msg = f"Error mapper must return an ErrorResult or a mapping, got {type(value).__name__}"
    raise TypeError(msg)
