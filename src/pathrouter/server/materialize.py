"""Response materialization — write a Result onto the response sink.

The rules run in a fixed order and the sink receives exactly one body
write:

1. cookies, passed through unchanged
2. headers, each replacing any same-named header
3. redirect — stops here, no status or body rules apply
4. status (default 200)
5. total count header
6. request duration header (debug only)
7. the body, by kind: Binary, Json, Text, Html, Stream, or Empty (400)
"""

import time
from collections.abc import Mapping

from pathrouter.config import RouterConfig
from pathrouter.http.response import ResponseSink
from pathrouter.returns import Binary, Empty, Html, Json, Result, Stream, Text, is_int

HTML_CONTENT_TYPE = "text/html; charset=UTF-8"

BAD_REQUEST_BODY = {"error": {"name": "badRequest", "message": "Bad Request"}}


def _names_content_type(headers: Mapping[str, str]) -> bool:
    return any(name.lower() == "content-type" for name in headers)


def elapsed_ms(started: float) -> int:
    """Whole milliseconds since *started* (a ``time.perf_counter()`` value)."""
    return int((time.perf_counter() - started) * 1000)


async def materialize(
    result: Result,
    response: ResponseSink,
    *,
    config: RouterConfig,
    started: float,
) -> None:
    """Apply *result* to *response*."""
    for name, cookie in result.cookies.items():
        response.set_cookie(name, cookie)

    for name, value in result.headers.items():
        response.set_header(name, str(value))

    if result.redirect is not None:
        await response.redirect(result.redirect, config.redirect_status)
        return

    response.set_status(result.status if is_int(result.status) else 200)

    if is_int(result.count):
        response.set_header(config.count_header, str(result.count))

    if config.debug:
        response.set_header(config.duration_header, str(elapsed_ms(started)))

    match result.body:
        case Binary(data=data):
            await response.end(data)
        case Json(value=value):
            if config.debug and result.debug and isinstance(value, Mapping):
                value = {**value, "debug": result.debug}
            await response.json(value)
        case Text(value=value):
            await response.end(value)
        case Html(value=value):
            if not _names_content_type(result.headers):
                response.set_header("Content-Type", HTML_CONTENT_TYPE)
            await response.end(value)
        case Stream(chunks=chunks):
            await response.pipe(chunks)
        case Empty():
            response.set_status(400)
            await response.json(BAD_REQUEST_BODY)
