"""Resolver chain — concurrent input resolution for one request.

Every resolver of a route is started at once in an anyio task group and
the chain waits for all of them. Values come back in declaration order,
not completion order. The first failure fails the whole chain: the
remaining resolvers are cancelled and that exception propagates as-is.

Sync resolvers are called inline; async ones are awaited. Both land in
the same slot model via ``invoke()``.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import anyio

from pathrouter._internal.invoke import invoke
from pathrouter._internal.types import Resolver


@dataclass(frozen=True, slots=True)
class ActionContext:
    """What an action receives: the raw request and the resolved inputs.

    Iterating yields the request first, then each resolved value, so a
    handler may destructure it::

        def show(self, ctx):
            request, user, page = ctx
    """

    request: Any
    resolved: tuple[Any, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.request
        yield from self.resolved

    def __len__(self) -> int:
        return 1 + len(self.resolved)


async def resolve_inputs(
    request: Any,
    response: Any,
    resolvers: Sequence[Resolver],
) -> ActionContext:
    """Run *resolvers* concurrently against ``(request, response)``."""
    if not resolvers:
        return ActionContext(request)

    values: list[Any] = [None] * len(resolvers)
    failures: list[Exception] = []

    async with anyio.create_task_group() as tg:

        async def _resolve(index: int, resolver: Resolver) -> None:
            try:
                values[index] = await invoke(resolver, request, response)
            except Exception as exc:
                if not failures:
                    failures.append(exc)
                tg.cancel_scope.cancel()

        for index, resolver in enumerate(resolvers):
            tg.start_soon(_resolve, index, resolver)

    if failures:
        raise failures[0]
    return ActionContext(request, tuple(values))
