"""ASGI type aliases and path helpers.

Users never see these; they interact with ``Conn``.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias
from urllib.parse import unquote

# Raw ASGI types (ASGI 3.0)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


def split_path(path: str, *, strip_trailing_slash: bool = True) -> tuple[str, ...]:
    """Split a request path into decoded segments.

    Examples::

        "/v1/posts/5"  -> ("v1", "posts", "5")
        "/"            -> ()
        "/v1/posts/"   -> ("v1", "posts")        # strip_trailing_slash=True
        "/v1/posts/"   -> ("v1", "posts", "")    # strip_trailing_slash=False
        "/a%2Fb/c"     -> ("a/b", "c")

    Repeated slashes inside the path produce empty segments, which never
    equal a declared version or resource name.
    """
    trimmed = path[1:] if path.startswith("/") else path
    if strip_trailing_slash and trimmed.endswith("/"):
        trimmed = trimmed.rstrip("/")
    if not trimmed:
        return ()
    return tuple(unquote(part) for part in trimmed.split("/"))
