"""Roost — versioned resource routing compiled into an ordered dispatch table.

Declare versions and resources as data; roost compiles them once into a
first-match-wins table and forwards each request to its resource with
the matched prefix stripped.

Basic usage::

    from roost import App, ResourceRouter, resource, version

    router = ResourceRouter([
        version("v1",
            resource("posts", Posts, [
                resource("comments", Comments),
            ]),
            resource("authors", Authors),
        ),
    ])

    app = App(router)
    app.run()

Resources are plugs — ``(conn, opts) -> Conn``, sync or async. Nested
resources find their parent in ``conn.parent_name`` / ``conn.parent_id``.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Conn",
    "Dispatcher",
    "HTTPError",
    "MethodNotAllowed",
    "NestingError",
    "NotFound",
    "Pipeline",
    "ResourceRouter",
    "RoostError",
    "RouteEntry",
    "RouteTable",
    "RouterConfig",
    "build_table",
    "resource",
    "version",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from roost.app import App

        return App

    if name in ("AppConfig", "RouterConfig"):
        from roost import config as _config

        return getattr(_config, name)

    if name == "Conn":
        from roost.http.conn import Conn

        return Conn

    if name == "Pipeline":
        from roost.pipeline import Pipeline

        return Pipeline

    if name == "ResourceRouter":
        from roost.router import ResourceRouter

        return ResourceRouter

    if name in ("Dispatcher", "RouteEntry", "RouteTable", "build_table", "resource", "version"):
        from roost import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NestingError",
        "NotFound",
        "RoostError",
    ):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
