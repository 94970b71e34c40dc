"""Cookie parsing and Set-Cookie serialization.

The read side (``parse_cookies``) feeds ``Request.cookies``; the write side
(``Cookie``) is what a result's ``cookies`` mapping carries. Attributes are
emitted exactly as the application set them; nothing is added or
interpreted beyond serialization.
"""

from dataclasses import dataclass


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers. Pairs without
    ``=`` are skipped; later duplicates win.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep:
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class Cookie:
    """A cookie to set on the response: a value plus opaque attributes."""

    value: str
    max_age: int | None = None
    expires: str | None = None
    path: str | None = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None

    def to_header_value(self, name: str) -> str:
        """Serialize to a ``Set-Cookie`` header value for cookie *name*."""
        parts = [f"{name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.expires:
            parts.append(f"Expires={self.expires}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)
