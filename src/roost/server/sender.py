"""ASGI response sending — translates a finished Conn into ASGI messages."""

from roost._internal.asgi import Send
from roost.http.conn import Conn


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_conn(conn: Conn, send: Send, *, head: bool = False) -> None:
    """Send *conn*'s response through ASGI ``send()``.

    A conn that no plug answered is sent as an empty 404.
    """
    status = conn.status if conn.status is not None else 404

    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", conn.content_type.encode("latin-1")),
    ]
    for name, value in conn.resp_headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = conn.resp_body if _body_allowed(status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
