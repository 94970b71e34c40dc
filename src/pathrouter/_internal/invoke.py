"""Invoke helpers — call sync or async callables uniformly.

Resolvers, actions and error mappers can each be ``def`` or ``async def``.
The sync/async check lives here so every caller treats a value that is
ready immediately the same as one that has to be awaited.

Usage::

    from pathrouter._internal.invoke import invoke

    value = await invoke(resolver, request, response)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: value is used as-is
        def current_user(request, response):
            return request.headers.get("x-user")

        # async: awaited automatically
        async def payload(request, response):
            return await request.json()
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
