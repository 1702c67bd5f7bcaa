"""ResourceRouter — versioned resources plus the plugs that serve them.

Mutable during setup (version blocks, plain routes). Frozen the first
time it is called or its table is read: declarations are compiled into a
``RouteTable`` and the plug pipeline is assembled.

Example::

    router = ResourceRouter([
        version("v1",
            resource("posts", Posts, [
                resource("comments", Comments),
            ]),
            resource("authors", Authors),
        ),
    ])

    @router.get("/ping")
    def ping(conn, opts):
        return conn.resp(200, "pong")

    app = App(router)

Provided plugs, referenced by name in ``pipeline``:

* ``"route"`` — dispatch to the matching resource.
* ``"match_paths"`` — serve plain routes registered with ``get()`` etc.
* ``"not_found"`` — respond 404 with ``type="route"`` for anything left.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from roost._internal.invoke import invoke
from roost.config import RouterConfig
from roost.http.conn import Conn
from roost.not_found import not_found_responder
from roost.pipeline import Pipeline
from roost.routing.builder import build_table
from roost.routing.declarations import Resource, Version
from roost.routing.declarations import version as declare_version
from roost.routing.dispatcher import Dispatcher
from roost.routing.entry import Plug
from roost.routing.paths import PathRouter
from roost.routing.table import RouteTable

PATH_PARAMS_KEY = "roost_path_params"

DEFAULT_PIPELINE: tuple[str, ...] = ("route", "match_paths", "not_found")


@dataclass(frozen=True, slots=True)
class _Compiled:
    """State produced when a router freezes."""

    dispatcher: Dispatcher
    pipeline: Pipeline


class ResourceRouter:
    """Routes ``/{version}/{resource}/...`` requests to resource targets.

    A router is itself a plug (``router(conn, opts)``), so it can be the
    target of another router's resource and run its own nested dispatch.

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the table even if
        several requests arrive at once.
    """

    __slots__ = (
        "_compiled",
        "_declarations",
        "_freeze_lock",
        "_path_router",
        "_pipeline_spec",
        "config",
    )

    def __init__(
        self,
        routes: Iterable[Version] = (),
        config: RouterConfig | None = None,
        *,
        pipeline: Sequence[str | Plug | tuple[str | Plug, dict[str, Any]]] = DEFAULT_PIPELINE,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._declarations: list[Version] = list(routes)
        self._pipeline_spec = tuple(pipeline)
        self._path_router = PathRouter()
        self._freeze_lock = threading.Lock()

        # Set once by _ensure_frozen()
        self._compiled: _Compiled | None = None

    # -- Declaration --

    def version(self, label: Any, *resources: Resource) -> Version:
        """Declare a version block on this router and return it."""
        self._check_not_frozen()
        declaration = declare_version(label, *resources)
        self._declarations.append(declaration)
        return declaration

    def add_versions(self, *declarations: Version) -> None:
        """Append already-built ``version()`` declarations."""
        self._check_not_frozen()
        self._declarations.extend(declarations)

    # -- Plain routes --

    def route(
        self,
        path: str,
        *,
        methods: Sequence[str] = ("GET",),
    ) -> Callable[[Plug], Plug]:
        """Register a plain route handled by a plug.

        Path parameters are stored in ``conn.private["roost_path_params"]``.
        """

        def decorator(func: Plug) -> Plug:
            self._check_not_frozen()
            self._path_router.add(path, func, methods)
            return func

        return decorator

    def get(self, path: str) -> Callable[[Plug], Plug]:
        return self.route(path, methods=("GET", "HEAD"))

    def post(self, path: str) -> Callable[[Plug], Plug]:
        return self.route(path, methods=("POST",))

    def put(self, path: str) -> Callable[[Plug], Plug]:
        return self.route(path, methods=("PUT",))

    def patch(self, path: str) -> Callable[[Plug], Plug]:
        return self.route(path, methods=("PATCH",))

    def delete(self, path: str) -> Callable[[Plug], Plug]:
        return self.route(path, methods=("DELETE",))

    # -- Provided plugs --

    async def route_plug(self, conn: Conn, opts: dict[str, Any]) -> Conn:
        """Dispatch to the first matching resource; pass through on a miss.

        Targets are called with empty opts; pipeline options stay with the
        router's own plugs. A forwarded conn is halted so later plugs never
        handle the same request a second time.
        """
        result = await self.dispatcher.dispatch(conn, {})
        if result is None:
            return conn
        return result.halt()

    async def match_paths(self, conn: Conn, opts: dict[str, Any]) -> Conn:
        """Serve plain routes; pass through when none matches the path."""
        self._ensure_frozen()
        found = self._path_router.match(conn.method, conn.path_info)
        if found is None:
            return conn
        conn = conn.put_private(PATH_PARAMS_KEY, found.path_params)
        result = await invoke(found.route.handler, conn, opts)
        return result.halt()

    def not_found(self, conn: Conn, opts: dict[str, Any]) -> Conn:
        """Respond 404 with ``type="route"``."""
        return not_found_responder(
            conn,
            {
                "content_type": self.config.not_found_content_type,
                **opts,
                "type": "route",
            },
        )

    # -- Plug contract --

    async def __call__(self, conn: Conn, opts: dict[str, Any] | None = None) -> Conn:
        """Run the router's pipeline on *conn*."""
        return await self._ensure_frozen().pipeline(conn, opts)

    # -- Introspection --

    @property
    def table(self) -> RouteTable:
        """The compiled route table (compiles on first access)."""
        return self.dispatcher.table

    @property
    def dispatcher(self) -> Dispatcher:
        return self._ensure_frozen().dispatcher

    @property
    def path_routes(self) -> PathRouter:
        return self._path_router

    # -- Internal --

    def _ensure_frozen(self) -> _Compiled:
        compiled = self._compiled
        if compiled is not None:
            return compiled
        with self._freeze_lock:
            compiled = self._compiled
            if compiled is None:
                compiled = self._freeze()
                self._compiled = compiled
            return compiled

    def _freeze(self) -> _Compiled:
        """Compile declarations and assemble the pipeline.

        MUST only be called while holding _freeze_lock.
        """
        dispatcher = Dispatcher(build_table(self._declarations, self.config))
        pipeline = Pipeline(self._resolve_step(step) for step in self._pipeline_spec)
        self._path_router.compile()
        return _Compiled(dispatcher=dispatcher, pipeline=pipeline)

    def _resolve_step(
        self,
        step: str | Plug | tuple[str | Plug, dict[str, Any]],
    ) -> Plug | tuple[Plug, dict[str, Any]]:
        if isinstance(step, tuple):
            plug, opts = step
            return (self._resolve_plug(plug), opts)
        return self._resolve_plug(step)

    def _resolve_plug(self, plug: str | Plug) -> Plug:
        if not isinstance(plug, str):
            return plug
        provided: dict[str, Plug] = {
            "route": self.route_plug,
            "match_paths": self.match_paths,
            "not_found": self.not_found,
        }
        try:
            return provided[plug]
        except KeyError:
            msg = f"Unknown router plug {plug!r}; expected one of {sorted(provided)}"
            raise ValueError(msg) from None

    def _check_not_frozen(self) -> None:
        if self._compiled is not None:
            msg = (
                "Cannot modify the router after it has compiled its route table. "
                "Declare versions and routes before serving requests."
            )
            raise RuntimeError(msg)
