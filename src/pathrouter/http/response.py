"""Response sink — the mutable write side of one HTTP exchange.

The pipeline writes through the ``ResponseSink`` protocol only. Status,
headers and cookies are buffered until the single body write (``json``,
``end``, ``redirect`` or ``pipe``) commits the response.

``AsgiResponse`` is the implementation used by the bundled host; it
translates the buffered state into ASGI ``send()`` messages.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterable, Iterable
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

from pathrouter._internal.asgi import Send
from pathrouter.http.cookies import Cookie

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

ChunkSource = Iterable[bytes | str] | AsyncIterable[bytes | str]

# Characters left as-is in a Location value; everything else is percent-encoded.
_LOCATION_SAFE = ":/?#[]@!$&'()*+,;=%"


def encode_json(value: Any) -> bytes:
    """Serialize *value* compactly, the way it goes on the wire."""
    return json_module.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _header_bytes(value: str) -> bytes:
    """Encode a header name or value for the wire, rejecting non-Latin-1 text."""
    try:
        return value.encode("latin-1")
    except UnicodeEncodeError:
        msg = f"Invalid character in header content: {value!r}"
        raise ValueError(msg) from None


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


@runtime_checkable
class ResponseSink(Protocol):
    """What the pipeline needs from the host's response object."""

    @property
    def status(self) -> int: ...

    @property
    def committed(self) -> bool: ...

    def set_status(self, status: int) -> None: ...

    def set_header(self, name: str, value: str) -> None: ...

    def has_header(self, name: str) -> bool: ...

    def set_cookie(self, name: str, cookie: Cookie) -> None: ...

    async def json(self, value: Any) -> None: ...

    async def end(self, body: bytes | str = b"") -> None: ...

    async def redirect(self, url: str, status: int = 302) -> None: ...

    async def pipe(self, chunks: ChunkSource) -> None: ...


class AsgiResponse:
    """``ResponseSink`` over an ASGI ``send`` callable.

    Headers are replaced case-insensitively; cookies accumulate as
    separate ``Set-Cookie`` headers. Any second body write raises
    ``RuntimeError``.
    """

    __slots__ = ("_committed", "_cookies", "_headers", "_send", "_status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status = 200
        self._headers: list[tuple[str, str]] = []
        self._cookies: list[tuple[str, Cookie]] = []
        self._committed = False

    @property
    def status(self) -> int:
        return self._status

    @property
    def committed(self) -> bool:
        """True once the response start message has been sent."""
        return self._committed

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    def set_status(self, status: int) -> None:
        self._status = status

    def set_header(self, name: str, value: str) -> None:
        _header_bytes(name)
        _header_bytes(value)
        lowered = name.lower()
        self._headers = [(n, v) for n, v in self._headers if n.lower() != lowered]
        self._headers.append((name, value))

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(n.lower() == lowered for n, _ in self._headers)

    def set_cookie(self, name: str, cookie: Cookie) -> None:
        _header_bytes(cookie.to_header_value(name))
        self._cookies.append((name, cookie))

    # -- Body writes (each commits the response) --

    async def json(self, value: Any) -> None:
        """Write *value* as a JSON body.

        Sets ``Content-Type`` only if no content type was set before.
        """
        payload = encode_json(value)
        if not self.has_header("content-type"):
            self.set_header("Content-Type", JSON_CONTENT_TYPE)
        await self.end(payload)

    async def end(self, body: bytes | str = b"") -> None:
        """Write *body* as the complete response body."""
        data = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        if not _body_allowed(self._status):
            data = b""
        await self._start(content_length=len(data))
        await self._send({"type": "http.response.body", "body": data})

    async def redirect(self, url: str, status: int = 302) -> None:
        """Redirect to *url* with an empty body.

        Characters outside the URL syntax (spaces, non-ASCII text) are
        percent-encoded; existing escapes are kept.
        """
        location = quote(url, safe=_LOCATION_SAFE)
        self._status = status
        self.set_header("Location", location)
        await self.end(b"")

    async def pipe(self, chunks: ChunkSource) -> None:
        """Send *chunks* as they are produced, then close the body.

        The closing message is sent even when the source fails; the
        failure still propagates to the caller.
        """
        await self._start(content_length=None)
        try:
            if isinstance(chunks, AsyncIterable):
                async for chunk in chunks:
                    await self._send_chunk(chunk)
            else:
                for chunk in chunks:
                    await self._send_chunk(chunk)
        finally:
            await self._send({"type": "http.response.body", "body": b"", "more_body": False})

    # -- ASGI emission --

    async def _send_chunk(self, chunk: bytes | str) -> None:
        if not chunk:
            return
        data = chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
        await self._send({"type": "http.response.body", "body": data, "more_body": True})

    async def _start(self, *, content_length: int | None) -> None:
        if self._committed:
            msg = "Response already sent."
            raise RuntimeError(msg)

        raw_headers: list[tuple[bytes, bytes]] = [
            (_header_bytes(name.lower()), _header_bytes(value)) for name, value in self._headers
        ]
        raw_headers.extend(
            (b"set-cookie", _header_bytes(cookie.to_header_value(name)))
            for name, cookie in self._cookies
        )
        if content_length is not None:
            raw_headers.append((b"content-length", str(content_length).encode("latin-1")))

        # Committed only once every header has encoded.
        self._committed = True

        await self._send(
            {
                "type": "http.response.start",
                "status": self._status,
                "headers": raw_headers,
            }
        )
