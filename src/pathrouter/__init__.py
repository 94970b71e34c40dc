"""pathrouter — declarative route tables over an async request pipeline.

Each route declares its inputs (resolvers, run concurrently) and its
action; the action returns a structured ``Result`` that the pipeline turns
into status, headers, cookies and exactly one body. Every failure becomes
a JSON error envelope instead of an unhandled exception.

Basic usage::

    from pathrouter import App, Json, Method, Result, Route

    async def load_user(request, response):
        return await users.get(request.path_params["id"])

    def show(ctx):
        request, user = ctx
        return Result(Json(user), headers={"Cache-Control": "no-store"})

    app = App()
    app.mount([Route(Method.GET, "/users/{id:int}", resolves=(load_user,), callback=show)])
"""

__version__ = "0.1.0"
__all__ = [
    "ActionContext",
    "App",
    "Binary",
    "ConfigurationError",
    "Cookie",
    "Empty",
    "ErrorResult",
    "HTTPError",
    "Html",
    "Json",
    "Log",
    "LoggingLog",
    "Method",
    "MethodNotAllowed",
    "NotFound",
    "PathRouterError",
    "Request",
    "Result",
    "Route",
    "RouterConfig",
    "Stream",
    "Text",
    "build_handlers",
    "mount_routes",
]

_LOCATIONS = {
    "ActionContext": "pathrouter.server.resolve",
    "App": "pathrouter.app",
    "Binary": "pathrouter.returns",
    "ConfigurationError": "pathrouter.errors",
    "Cookie": "pathrouter.http.cookies",
    "Empty": "pathrouter.returns",
    "ErrorResult": "pathrouter.returns",
    "HTTPError": "pathrouter.errors",
    "Html": "pathrouter.returns",
    "Json": "pathrouter.returns",
    "Log": "pathrouter.log",
    "LoggingLog": "pathrouter.log",
    "Method": "pathrouter.routing.route",
    "MethodNotAllowed": "pathrouter.errors",
    "NotFound": "pathrouter.errors",
    "PathRouterError": "pathrouter.errors",
    "Request": "pathrouter.http.request",
    "Result": "pathrouter.returns",
    "Route": "pathrouter.routing.route",
    "RouterConfig": "pathrouter.config",
    "Stream": "pathrouter.returns",
    "Text": "pathrouter.returns",
    "build_handlers": "pathrouter.mount",
    "mount_routes": "pathrouter.mount",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pathrouter`` cheap while exposing a flat namespace.
    """
    module_name = _LOCATIONS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
