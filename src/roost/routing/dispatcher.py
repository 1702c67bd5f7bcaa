"""Dispatcher — first-match-wins lookup over a RouteTable.

Matching is a pure, synchronous function of (path segments, table): no
locks, no I/O, no allocation beyond the ``RouteMatch``. Forwarding
rewrites the conn and calls the target exactly once. Target failures
propagate untouched.
"""

from collections.abc import Sequence
from typing import Any

from roost._internal.invoke import invoke
from roost.http.conn import PARENT_ID_KEY, PARENT_NAME_KEY, Conn
from roost.routing.entry import RouteEntry, RouteMatch
from roost.routing.table import RouteTable


def match_entry(entry: RouteEntry, segments: Sequence[str]) -> RouteMatch | None:
    """Match one entry's literal prefix against *segments*."""
    size = entry.prefix_length
    if len(segments) < size:
        return None

    if entry.nested_in is None:
        if segments[0] != entry.version or segments[1] != entry.name:
            return None
        return RouteMatch(
            entry=entry,
            consumed=tuple(segments[:size]),
            remainder=tuple(segments[size:]),
        )

    if (
        segments[0] != entry.version
        or segments[1] != entry.nested_in
        or segments[3] != entry.name
    ):
        return None
    return RouteMatch(
        entry=entry,
        consumed=tuple(segments[:size]),
        remainder=tuple(segments[size:]),
        parent_id=segments[2],
    )


class Dispatcher:
    """Selects and invokes the target for a request path.

    Usage::

        dispatcher = Dispatcher(build_table(routes))
        match = dispatcher.match(["v1", "posts", "5", "comments"])
        conn = await dispatcher.dispatch(conn)   # None when nothing matched
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    @property
    def table(self) -> RouteTable:
        return self._table

    def match(self, segments: Sequence[str]) -> RouteMatch | None:
        """Return the first entry matching *segments*, or ``None``."""
        for entry in self._table:
            found = match_entry(entry, segments)
            if found is not None:
                return found
        return None

    async def forward(
        self,
        conn: Conn,
        match: RouteMatch,
        opts: dict[str, Any] | None = None,
    ) -> Conn:
        """Rewrite *conn* for *match* and hand it to the entry's target."""
        entry = match.entry
        if entry.nested_in is not None:
            conn = conn.put_private(PARENT_NAME_KEY, entry.nested_in).put_private(
                PARENT_ID_KEY, match.parent_id
            )
        conn = conn.with_path_info(match.remainder, consumed=match.consumed)
        return await invoke(entry.target, conn, opts if opts is not None else {})

    async def dispatch(
        self,
        conn: Conn,
        opts: dict[str, Any] | None = None,
    ) -> Conn | None:
        """Forward *conn* to the first matching target.

        Returns the target's result, or ``None`` when no entry matches.
        """
        match = self.match(conn.path_info)
        if match is None:
            return None
        return await self.forward(conn, match, opts)
