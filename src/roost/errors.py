"""Roost exception hierarchy.

Shared across the builder, dispatcher, router, and ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when route declarations are invalid.

    Typically raised while the route table is compiled, before the first
    request is dispatched.
    """


class NestingError(ConfigurationError):
    """A resource was nested more than one level deep.

    Only ``/{version}/{parent}/{id}/{name}`` is supported; a child resource
    cannot carry children of its own.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by plugs or handlers. The ASGI handler catches these and
    writes a response with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — nothing handled the request path.

    ``kind`` tells routing-level misses (``"route"``) apart from handlers
    reporting a missing record.
    """

    kind: str

    def __init__(self, detail: str = "Not Found", kind: str = "route") -> None:
        super().__init__(status=404, detail=detail)
        object.__setattr__(self, "kind", kind)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — a plain route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
