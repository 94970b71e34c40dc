"""Shared type aliases used across pathrouter modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Resolver: (request, response) -> value or awaitable value
Resolver: TypeAlias = Callable[[Any, Any], Any]

# Action: receives one ActionContext, returns a Result (or awaitable of one)
Action: TypeAlias = Callable[[Any], Any]

# Error mapper: (error, request) -> ErrorResult (or awaitable of one)
ErrorMapper: TypeAlias = Callable[[Exception, Any], Any]

# Registered request handler: what the host calls per matched request
RequestHandler: TypeAlias = Callable[[Any, Any], Awaitable[None]]
