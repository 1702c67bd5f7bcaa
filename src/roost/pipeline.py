"""Plug pipeline — run plugs in order until one halts the conn.

A plug is any callable matching::

    def plug(conn: Conn, opts: dict) -> Conn: ...
    async def plug(conn: Conn, opts: dict) -> Conn: ...

No base class required. Each plug receives the conn returned by the
previous one; a plug that calls ``conn.halt()`` ends the pipeline.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from roost._internal.invoke import invoke
from roost.http.conn import Conn
from roost.routing.entry import Plug


class Pipeline:
    """An ordered, immutable sequence of ``(plug, opts)`` steps.

    Usage::

        pipeline = Pipeline([authenticate, (router.route, {}), router.not_found])
        conn = await pipeline(conn, {})
    """

    __slots__ = ("_steps",)

    def __init__(self, plugs: Iterable[Plug | tuple[Plug, Mapping[str, Any]]]) -> None:
        steps: list[tuple[Plug, dict[str, Any]]] = []
        for item in plugs:
            if isinstance(item, tuple):
                plug, opts = item
                steps.append((plug, dict(opts)))
            else:
                steps.append((item, {}))
        for plug, _ in steps:
            if not callable(plug):
                msg = f"Pipeline steps must be callable, got {plug!r}"
                raise TypeError(msg)
        self._steps: tuple[tuple[Plug, dict[str, Any]], ...] = tuple(steps)

    def __len__(self) -> int:
        return len(self._steps)

    async def __call__(self, conn: Conn, opts: dict[str, Any] | None = None) -> Conn:
        """Run every step in order, stopping early when the conn is halted.

        *opts* given to the pipeline are merged under each step's own opts.
        """
        base = opts or {}
        for plug, step_opts in self._steps:
            if conn.halted:
                break
            result = await invoke(plug, conn, {**base, **step_opts})
            if not isinstance(result, Conn):
                name = getattr(plug, "__qualname__", repr(plug))
                msg = f"Plug {name} returned {type(result).__name__}, expected Conn"
                raise TypeError(msg)
            conn = result
        return conn
