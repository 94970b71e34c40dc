"""Tests for pathrouter.mount — table validation and registration."""

import pytest

from pathrouter.config import RouterConfig
from pathrouter.errors import ConfigurationError
from pathrouter.mount import bind_action, build_handlers, mount_routes, normalize_method
from pathrouter.routing.route import Method, Route
from pathrouter.server.handler import RouteHandler


class FakeRegistrar:
    def __init__(self) -> None:
        self.registered: list[tuple[str, str, object]] = []

    def _add(self, method: str):
        def register(path, handler):
            self.registered.append((method, path, handler))

        return register

    def __getattr__(self, name: str):
        if name in {"get", "post", "patch", "put", "delete"}:
            return self._add(name.upper())
        raise AttributeError(name)


class Controller:
    label = "not callable"

    def show(self, ctx):
        return {"text": "show"}

    def other(self, ctx):
        return {"text": "other"}


class TestNormalizeMethod:
    def test_enum(self) -> None:
        assert normalize_method(Method.PATCH) is Method.PATCH

    def test_lowercase_string(self) -> None:
        assert normalize_method("delete") is Method.DELETE

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="OPTIONS"):
            normalize_method("OPTIONS")


class TestBindAction:
    def test_action_bound_to_controller(self) -> None:
        controller = Controller()
        bound = bind_action(Route(Method.GET, "/", action="show"), controller)
        assert bound.__self__ is controller

    def test_action_wins_over_callback(self) -> None:
        controller = Controller()
        route = Route(Method.GET, "/", action="other", callback=lambda ctx: {})
        assert bind_action(route, controller).__func__ is Controller.other

    def test_missing_action(self) -> None:
        with pytest.raises(ConfigurationError, match="missing or not callable"):
            bind_action(Route(Method.GET, "/", action="nope"), Controller())

    def test_non_callable_action(self) -> None:
        with pytest.raises(ConfigurationError, match="label"):
            bind_action(Route(Method.GET, "/", action="label"), Controller())

    def test_action_without_controller(self) -> None:
        with pytest.raises(ConfigurationError, match="no controller"):
            bind_action(Route(Method.GET, "/", action="show"), None)

    def test_callback(self) -> None:
        def callback(ctx):
            return {}

        assert bind_action(Route(Method.GET, "/", callback=callback), None) is callback

    def test_neither(self) -> None:
        with pytest.raises(ConfigurationError, match="needs an action"):
            bind_action(Route(Method.GET, "/"), None)


class TestBuildHandlers:
    def test_handlers_share_config(self) -> None:
        config = RouterConfig(debug=True)
        handlers = build_handlers(
            [Route("get", "/a", callback=lambda ctx: {}), Route("post", "/b", action="show")],
            config=config,
            controller=Controller(),
        )
        assert [m for m, _ in handlers] == [Method.GET, Method.POST]
        assert all(isinstance(h, RouteHandler) and h.config is config for _, h in handlers)


class TestMountRoutes:
    def test_registers_per_method(self) -> None:
        registrar = FakeRegistrar()
        routes = [
            Route(Method.GET, "/users", action="show"),
            Route(Method.PUT, "/users/{id}", action="other"),
            Route("delete", "/users/{id}", callback=lambda ctx: {}),
        ]
        assert mount_routes(registrar, routes, controller=Controller()) is registrar

        assert [(m, p) for m, p, _ in registrar.registered] == [
            ("GET", "/users"),
            ("PUT", "/users/{id}"),
            ("DELETE", "/users/{id}"),
        ]

    def test_invalid_table_registers_nothing(self) -> None:
        registrar = FakeRegistrar()
        routes = [
            Route(Method.GET, "/ok", callback=lambda ctx: {}),
            Route(Method.GET, "/broken", action="missing"),
        ]
        with pytest.raises(ConfigurationError):
            mount_routes(registrar, routes, controller=Controller())
        assert registrar.registered == []
