"""Helpers for exercising plugs and resource targets without ASGI."""

from __future__ import annotations

from typing import Any

from roost._internal.invoke import invoke
from roost.http.conn import Conn
from roost.routing.entry import Plug


async def call_plug(
    plug: Plug,
    path: str = "/",
    *,
    method: str = "GET",
    opts: dict[str, Any] | None = None,
) -> Conn:
    """Build a fresh conn for *method* / *path* and run *plug* on it."""
    return await invoke(plug, Conn.build(method, path), opts or {})


class RecordingPlug:
    """A resource target that records every conn it receives.

    Responds ``200`` with its own name so tests can tell targets apart::

        posts = recording_plug("posts")
        conn = await call_plug(router, "/v1/posts/7")
        assert posts.calls[0].path_info == ("7",)
    """

    __slots__ = ("calls", "name", "opts")

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[Conn] = []
        self.opts: list[dict[str, Any]] = []

    def __call__(self, conn: Conn, opts: dict[str, Any]) -> Conn:
        self.calls.append(conn)
        self.opts.append(opts)
        return conn.resp(200, self.name)

    @property
    def last(self) -> Conn:
        return self.calls[-1]


def recording_plug(name: str) -> RecordingPlug:
    return RecordingPlug(name)
