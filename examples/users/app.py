"""Users — a JSON resource driven by a route table.

Shows the whole pipeline: resolvers load inputs concurrently, a controller
method gets ``(request, *inputs)``, the result envelope sets status, count
and cookies, and an error mapper turns lookup failures into 404 envelopes.

Run with any ASGI server, for example:
    cd examples/users && uvicorn app:app
"""

import threading

from pathrouter import (
    App,
    Cookie,
    ErrorResult,
    Html,
    Json,
    Method,
    Result,
    Route,
    RouterConfig,
)


class UnknownUser(LookupError):
    pass


class Users:
    """In-memory store plus the actions the table dispatches to."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: dict[int, dict] = {}
        self._next_id = 1

    # -- actions --

    def index(self, ctx):
        request, limit = ctx
        with self._lock:
            rows = sorted(self._rows.values(), key=lambda row: row["id"])
        return Result(Json(rows[:limit]), count=len(rows), debug={"limit": limit})

    def show(self, ctx):
        request, user = ctx
        return {"json": user}

    def profile(self, ctx):
        request, user = ctx
        return Result(Html(f"<h1>{user['name']}</h1>"))

    async def create(self, ctx):
        request, payload = ctx
        name = str(payload.get("name", "")).strip()
        with self._lock:
            user = {"id": self._next_id, "name": name}
            self._rows[self._next_id] = user
            self._next_id += 1
        return Result(
            Json(user),
            status=201,
            cookies={"last_user": Cookie(str(user["id"]), httponly=True)},
        )

    def remove(self, ctx):
        request, user = ctx
        with self._lock:
            del self._rows[user["id"]]
        return {"redirect": "/users"}

    # -- resolvers --

    def load(self, request, response):
        with self._lock:
            user = self._rows.get(request.path_params["id"])
        if user is None:
            raise UnknownUser(request.path_params["id"])
        return user


def limit(request, response):
    return max(1, min(request.query.get_int("limit", 50) or 50, 100))


async def payload(request, response):
    return await request.json()


def map_error(error, request):
    if isinstance(error, UnknownUser):
        return ErrorResult(status=404, name="notFound", message=f"No user {error.args[0]}")
    return ErrorResult(status=500, name="internalError", message=str(error))


users = Users()

routes = [
    Route(Method.GET, "/users", resolves=(limit,), action="index"),
    Route(Method.POST, "/users", resolves=(payload,), action="create"),
    Route(Method.GET, "/users/{id:int}", resolves=(users.load,), action="show"),
    Route(Method.GET, "/users/{id:int}/profile", resolves=(users.load,), action="profile"),
    Route(Method.DELETE, "/users/{id:int}", resolves=(users.load,), action="remove"),
]

app = App(RouterConfig(debug=True))
app.mount(routes, controller=users, on_error=map_error)
