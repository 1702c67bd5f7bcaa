"""Terminal "not found" responder.

Writes a JSON:API style error document and halts the conn. The ``type``
option tells routing-level misses (``"route"``) apart from other kinds
of not-found, such as a resource handler failing to load a record.
"""

from typing import Any

from roost.http.conn import Conn

JSON_API = "application/vnd.api+json"


def not_found_document(conn: Conn, kind: str) -> dict[str, Any]:
    if kind == "route":
        detail = f"No route matches {conn.method} {conn.path!r}"
    else:
        detail = f"The requested {kind} could not be found"
    return {
        "errors": [
            {
                "status": "404",
                "title": "Not Found",
                "detail": detail,
                "meta": {"type": kind},
            }
        ]
    }


def not_found_responder(conn: Conn, opts: dict[str, Any]) -> Conn:
    """Respond 404 unless a previous plug already produced a response."""
    if conn.state == "set":
        return conn
    kind = str(opts.get("type", "route"))
    content_type = opts.get("content_type", JSON_API)
    return conn.send_json(404, not_found_document(conn, kind), content_type=content_type)
