"""Invoke helpers — call sync or async plugs uniformly.

Resource targets and pipeline plugs can be ``def`` or ``async def``. Any
code that calls a user-provided plug must handle both cases. This module
keeps the sync/async check in exactly one place.

Usage::

    from roost._internal.invoke import invoke

    conn = await invoke(target, conn, opts)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def ping(conn, opts):
            return conn.resp(200, "pong")

        async def posts(conn, opts):
            rows = await load_posts()
            return conn.send_json(200, rows)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
