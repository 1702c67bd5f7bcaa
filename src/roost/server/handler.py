"""ASGI handler — translates ASGI scope/messages to a Conn and back.

The only component that touches raw ASGI HTTP messages. Builds a fresh
``Conn`` per request, runs the root plug, and maps errors that escape it
to responses.
"""

import logging
import traceback
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.invoke import invoke
from roost.errors import HTTPError, NotFound
from roost.http.conn import Conn
from roost.not_found import JSON_API, not_found_document
from roost.routing.entry import Plug
from roost.server.sender import send_conn

logger = logging.getLogger("roost.server")


def http_error_conn(exc: HTTPError, conn: Conn) -> Conn:
    """Build the response for an ``HTTPError`` raised by a plug."""
    if isinstance(exc, NotFound):
        error = conn.send_json(404, not_found_document(conn, exc.kind), content_type=JSON_API)
    else:
        document = {
            "errors": [
                {"status": str(exc.status), "title": exc.detail or str(exc.status)},
            ]
        }
        error = conn.send_json(exc.status, document, content_type=JSON_API)
    for name, value in exc.headers:
        error = error.put_resp_header(name, value)
    return error


def internal_error_conn(exc: Exception, conn: Conn, *, debug: bool) -> Conn:
    """Build a 500 response for an unexpected exception, logging the traceback."""
    logger.error(
        "Unhandled error in %s %s",
        conn.method,
        conn.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    detail = (
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if debug
        else "Internal Server Error"
    )
    document = {"errors": [{"status": "500", "title": "Internal Server Error", "detail": detail}]}
    return conn.send_json(500, document, content_type=JSON_API)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    plug: Plug,
    opts: dict[str, Any] | None = None,
    debug: bool = False,
    strip_trailing_slash: bool = True,
) -> None:
    """Process a single HTTP request through the root plug."""
    if scope["type"] != "http":
        return

    conn = Conn.from_asgi(scope, receive, strip_trailing_slash=strip_trailing_slash)

    try:
        result = await invoke(plug, conn, opts or {})
    except HTTPError as exc:
        result = http_error_conn(exc, conn)
    except Exception as exc:
        result = internal_error_conn(exc, conn, debug=debug)

    await send_conn(result, send, head=conn.method == "HEAD")
