"""Tests for pathrouter.routing.router — the host's path trie."""

import pytest

from pathrouter.errors import ConfigurationError, MethodNotAllowed, NotFound
from pathrouter.routing.route import Endpoint
from pathrouter.routing.router import Router, parse_path


async def _noop(request, response) -> None:
    return None


def _endpoint(path: str, method: str = "GET") -> Endpoint:
    types = {
        seg.param_name: seg.param_type for seg in parse_path(path) if seg.is_param and seg.param_name
    }
    return Endpoint(path, method, _noop, types)


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users/list")
        assert [s.value for s in segments] == ["users", "list"]
        assert not any(s.is_param for s in segments)

    def test_typed_param(self) -> None:
        (_, seg) = parse_path("/users/{id:int}")
        assert seg.is_param
        assert seg.param_name == "id"
        assert seg.param_type == "int"

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_path("/x/{id:uuid}")


class TestMatch:
    def test_static_match(self) -> None:
        router = Router()
        endpoint = _endpoint("/health")
        router.add(endpoint)
        assert router.match("GET", "/health").endpoint is endpoint

    def test_root(self) -> None:
        router = Router()
        router.add(_endpoint("/"))
        assert router.match("GET", "/").path_params == {}

    def test_int_param_converted(self) -> None:
        router = Router()
        router.add(_endpoint("/users/{id:int}"))
        assert router.match("GET", "/users/42").path_params == {"id": 42}

    def test_int_param_rejects_text(self) -> None:
        router = Router()
        router.add(_endpoint("/users/{id:int}"))
        with pytest.raises(NotFound):
            router.match("GET", "/users/bob")

    def test_static_beats_param(self) -> None:
        router = Router()
        me = _endpoint("/users/me")
        router.add(_endpoint("/users/{name}"))
        router.add(me)
        assert router.match("GET", "/users/me").endpoint is me
        assert router.match("GET", "/users/ann").path_params == {"name": "ann"}

    def test_catch_all(self) -> None:
        router = Router()
        router.add(_endpoint("/files/{rest:path}"))
        assert router.match("GET", "/files/a/b/c.txt").path_params == {"rest": "a/b/c.txt"}

    def test_method_not_allowed(self) -> None:
        router = Router()
        router.add(_endpoint("/items", "GET"))
        router.add(_endpoint("/items", "POST"))
        with pytest.raises(MethodNotAllowed) as info:
            router.match("DELETE", "/items")
        assert info.value.headers == (("Allow", "GET, POST"),)

    def test_not_found(self) -> None:
        with pytest.raises(NotFound):
            Router().match("GET", "/nothing")

    def test_duplicate_rejected(self) -> None:
        router = Router()
        router.add(_endpoint("/a"))
        with pytest.raises(ConfigurationError, match="Duplicate"):
            router.add(_endpoint("/a"))

    def test_endpoints_in_order(self) -> None:
        router = Router()
        first, second = _endpoint("/a"), _endpoint("/b", "POST")
        router.add(first)
        router.add(second)
        assert router.endpoints == (first, second)
