"""Tests for pathrouter.server.handler — the composed per-route pipeline."""

import anyio
import pytest

from pathrouter.config import RouterConfig
from pathrouter.http.response import AsgiResponse
from pathrouter.returns import ErrorResult, Json, Result, Stream
from pathrouter.routing.route import Method, Route
from pathrouter.server.handler import RouteHandler


def _handler(route: Route, action, log, **kwargs) -> RouteHandler:
    return RouteHandler(route=route, action=action, config=RouterConfig(), log=log, **kwargs)


class TestRouteHandler:
    @pytest.mark.asyncio
    async def test_action_receives_request_then_values(self, sent, log) -> None:
        async def r1(request, response):
            await anyio.sleep(0.02)
            return "v1"

        def r2(request, response):
            return "v2"

        received = []

        def action(ctx):
            received.append(tuple(ctx))
            return {"json": {"ok": True}}

        route = Route(Method.GET, "/", resolves=(r1, r2))
        await _handler(route, action, log)("req", AsgiResponse(sent))

        assert received == [("req", "v1", "v2")]
        assert sent.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_resolver_failure_without_mapper(self, sent, log) -> None:
        error = LookupError("no such user")

        def resolver(request, response):
            raise error

        called = []
        route = Route(Method.GET, "/", resolves=(resolver,))
        await _handler(route, called.append, log)("req", AsgiResponse(sent))

        assert called == []
        assert sent.status == 500
        assert sent.json() == {"error": {"name": "internalError", "message": "no such user"}}
        assert len(log.calls) == 1
        assert log.calls[0][1] is error

    @pytest.mark.asyncio
    async def test_resolver_failure_with_mapper(self, sent, log) -> None:
        def resolver(request, response):
            raise LookupError("x")

        route = Route(Method.GET, "/", resolves=(resolver,))
        handler = _handler(
            route,
            lambda ctx: Result(),
            log,
            on_error=lambda error, request: ErrorResult(status=404, name="notFound"),
        )
        await handler("req", AsgiResponse(sent))

        assert sent.status == 404
        assert sent.body == b'{"error":{"name":"notFound","message":null,"details":null}}'

    @pytest.mark.asyncio
    async def test_bad_return_value_becomes_500(self, sent, log) -> None:
        route = Route(Method.POST, "/")
        await _handler(route, lambda ctx: None, log)("req", AsgiResponse(sent))
        assert sent.status == 500
        assert sent.json()["error"]["name"] == "internalError"

    @pytest.mark.asyncio
    async def test_stream_failure_closes_without_second_write(self, sent, log) -> None:
        async def chunks():
            yield b"partial"
            raise OSError("disk")

        route = Route(Method.GET, "/")
        await _handler(route, lambda ctx: Result(Stream(chunks())), log)("req", AsgiResponse(sent))

        starts = [m for m in sent.messages if m["type"] == "http.response.start"]
        assert len(starts) == 1
        assert sent.body == b"partial"
        assert sent.messages[-1]["more_body"] is False
        assert isinstance(log.calls[0][1], OSError)

    @pytest.mark.asyncio
    async def test_duration_header_in_debug(self, sent, log) -> None:
        route = Route(Method.GET, "/")
        handler = RouteHandler(
            route=route,
            action=lambda ctx: Result(Json({})),
            config=RouterConfig(debug=True),
            log=log,
        )
        await handler("req", AsgiResponse(sent))
        assert sent.headers["x-request-duration"].isdigit()
