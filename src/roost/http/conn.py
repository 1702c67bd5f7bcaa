"""Per-request connection: request metadata plus response state.

A ``Conn`` is created fresh for every incoming request and threaded
through the plug pipeline. It is frozen; every transformation returns a
new ``Conn`` so a plug can never leak state into another request.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from roost._internal.asgi import Receive, Scope, split_path
from roost.http.headers import Headers

PARENT_NAME_KEY = "roost_parent_name"
PARENT_ID_KEY = "roost_parent_id"


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Conn:
    """An immutable request/response pair built through transformations.

    ``path_info`` holds the segments not yet consumed by routing;
    ``script_name`` holds the ones that were. ``private`` is the
    side-channel plugs use to hand metadata to downstream plugs, such as
    the parent resource captured for nested routes.
    """

    method: str = "GET"
    path_info: tuple[str, ...] = ()
    script_name: tuple[str, ...] = ()
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""
    private: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    # Response state
    status: int | None = None
    resp_body: bytes = b""
    resp_headers: tuple[tuple[str, str], ...] = ()
    content_type: str = "text/plain; charset=utf-8"
    halted: bool = False

    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # -- Path --

    @property
    def path(self) -> str:
        """The full request path, rebuilt from consumed and remaining segments."""
        return "/" + "/".join((*self.script_name, *self.path_info))

    def with_path_info(
        self,
        path_info: tuple[str, ...],
        consumed: tuple[str, ...] = (),
    ) -> Conn:
        """Return a new Conn whose remaining path is *path_info*.

        *consumed* is appended to ``script_name`` so handlers can still
        rebuild the prefix they were mounted under.
        """
        return replace(
            self,
            path_info=tuple(path_info),
            script_name=(*self.script_name, *consumed),
        )

    # -- Private side-channel --

    def put_private(self, key: str, value: Any) -> Conn:
        """Return a new Conn with *key* set in the private channel."""
        return replace(self, private=MappingProxyType({**self.private, key: value}))

    @property
    def parent_name(self) -> str | None:
        """Name of the parent resource, set only by nested routes."""
        return self.private.get(PARENT_NAME_KEY)

    @property
    def parent_id(self) -> str | None:
        """Identifier of the parent resource, set only by nested routes."""
        return self.private.get(PARENT_ID_KEY)

    # -- Response --

    @property
    def state(self) -> str:
        """``"unset"`` until a plug writes a response, then ``"set"``."""
        return "unset" if self.status is None else "set"

    def resp(
        self,
        status: int,
        body: str | bytes = b"",
        *,
        content_type: str | None = None,
    ) -> Conn:
        """Return a new Conn carrying a response."""
        data = body.encode("utf-8") if isinstance(body, str) else body
        return replace(
            self,
            status=status,
            resp_body=data,
            content_type=content_type or self.content_type,
        )

    def send_json(
        self,
        status: int,
        data: Any,
        *,
        content_type: str = "application/json",
    ) -> Conn:
        """Return a new Conn with a JSON response, halted."""
        return self.resp(status, json_module.dumps(data), content_type=content_type).halt()

    def put_resp_header(self, name: str, value: str) -> Conn:
        """Return a new Conn with an additional response header."""
        return replace(self, resp_headers=(*self.resp_headers, (name, value)))

    def halt(self) -> Conn:
        """Return a new Conn that stops the pipeline after this plug."""
        return replace(self, halted=True)

    @property
    def text(self) -> str:
        """Response body as string."""
        return self.resp_body.decode("utf-8")

    # -- Request body --

    async def body(self) -> bytes:
        """Read the full request body from the ASGI receive channel."""
        chunks: list[bytes] = []
        while True:
            message = await self._receive()
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        return b"".join(chunks)

    # -- Factory --

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive | None = None,
        *,
        strip_trailing_slash: bool = True,
    ) -> Conn:
        """Create a Conn from an ASGI HTTP scope."""
        return cls(
            method=scope["method"],
            path_info=split_path(scope["path"], strip_trailing_slash=strip_trailing_slash),
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            _receive=receive or _empty_receive,
        )

    @classmethod
    def build(cls, method: str = "GET", path: str = "/", **kwargs: Any) -> Conn:
        """Create a Conn from a method and a path string.

        Convenience for tests and for plugs that synthesize requests::

            conn = Conn.build("GET", "/v1/posts/5/comments")
        """
        return cls(method=method.upper(), path_info=split_path(path), **kwargs)
