"""Router configuration.

RouterConfig is a frozen dataclass, created once at startup, threaded
into ``mount_routes()`` / ``App``, read-only for the process lifetime.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Pipeline configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True)
    """

    # Diagnostics: X-Request-Duration header and ``debug`` JSON payloads
    debug: bool = False

    # Tag passed to Log.error() for unmapped failures
    log_tag: str = "[pathrouter]"

    # Response header names
    count_header: str = "X-Total-Count"
    duration_header: str = "X-Request-Duration"

    redirect_status: int = 302
