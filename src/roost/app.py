"""Roost ASGI application.

Wraps a root plug (usually a ``ResourceRouter``) as an ASGI 3 callable.
Mutable during setup (startup/shutdown hooks); the root plug's route
table is compiled on startup, or on the first request when no lifespan
is run.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost.config import AppConfig
from roost.routing.entry import Plug
from roost.server.handler import handle_request

logger = logging.getLogger("roost.server")


class App:
    """The roost application.

    Usage::

        router = ResourceRouter([version("v1", resource("posts", Posts))])
        app = App(router, AppConfig(debug=True))
        app.run()
    """

    __slots__ = ("_opts", "_shutdown_hooks", "_startup_hooks", "config", "plug")

    def __init__(
        self,
        plug: Plug,
        config: AppConfig | None = None,
        *,
        opts: dict[str, Any] | None = None,
    ) -> None:
        if not callable(plug):
            msg = f"App needs a callable root plug, got {plug!r}"
            raise TypeError(msg)
        self.plug = plug
        self.config: AppConfig = config or AppConfig()
        self._opts: dict[str, Any] = dict(opts or {})
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run when the server starts (sync or async)."""
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run when the server shuts down (sync or async)."""
        self._shutdown_hooks.append(func)
        return func

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Compile routes and start serving requests."""
        self.compile()
        from roost.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    def compile(self) -> None:
        """Compile the root plug's route table now, surfacing build errors early."""
        ensure = getattr(self.plug, "_ensure_frozen", None)
        if ensure is not None:
            ensure()

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(
            scope,
            receive,
            send,
            plug=self.plug,
            opts=self._opts,
            debug=self.config.debug,
            strip_trailing_slash=self.config.strip_trailing_slash,
        )

    async def startup(self) -> None:
        self.compile()
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("Shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return
