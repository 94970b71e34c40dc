"""Error interception — every pipeline failure becomes one JSON response.

With an application error mapper, the mapped status, name, message and
details are rendered as given. Without one, the failure is logged and
surfaces as a generic 500 whose message is the exception's own text.
Nothing here re-raises.
"""

from typing import Any

from pathrouter._internal.invoke import invoke
from pathrouter._internal.types import ErrorMapper
from pathrouter.http.response import ResponseSink
from pathrouter.log import Log
from pathrouter.returns import coerce_error, is_int


def internal_error_body(error: BaseException) -> dict[str, Any]:
    """Envelope for an unmapped failure. Never carries details."""
    return {"error": {"name": "internalError", "message": str(error) or "Internal Error"}}


async def intercept(
    error: Exception,
    request: Any,
    response: ResponseSink,
    *,
    on_error: ErrorMapper | None,
    log: Log,
    tag: str,
) -> None:
    """Write the error response for *error*."""
    if response.committed:
        # Body already on the wire (stream failed mid-flight); nothing to rewrite.
        log.error(tag, error)
        return

    if on_error is not None:
        try:
            mapped = coerce_error(await invoke(on_error, error, request))
            envelope = {
                "error": {
                    "name": mapped.name,
                    "message": mapped.message,
                    "details": mapped.details,
                }
            }
            if is_int(mapped.status):
                response.set_status(mapped.status)
            await response.json(envelope)
            return
        except Exception as mapper_error:
            # No mapped envelope could be written; fall back to the generic 500.
            log.error(tag, mapper_error)
            if response.committed:
                return

    log.error(tag, error)
    response.set_status(500)
    await response.json(internal_error_body(error))
