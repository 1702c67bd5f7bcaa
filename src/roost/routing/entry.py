"""RouteEntry and RouteMatch frozen dataclasses."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from roost.http.conn import Conn

# A resource target: (conn, opts) -> Conn, sync or async
Plug: TypeAlias = Callable[["Conn", dict[str, Any]], "Conn | Awaitable[Conn]"]


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One compiled (pattern, target) pair.

    Top-level:  ``/{version}/{name}/...``
    Nested:     ``/{version}/{nested_in}/{parent_id}/{name}/...``

    ``version``, ``nested_in`` and ``name`` are compared literally; only
    the trailing remainder is left unexamined.
    """

    version: str
    name: str
    target: Plug
    nested_in: str | None = None

    @property
    def is_nested(self) -> bool:
        return self.nested_in is not None

    @property
    def prefix_length(self) -> int:
        """Number of leading path segments this entry consumes."""
        return 4 if self.nested_in is not None else 2

    @property
    def pattern(self) -> str:
        """Human-readable URL pattern, e.g. ``/v1/posts/:id/comments/*``."""
        if self.nested_in is None:
            return f"/{self.version}/{self.name}/*"
        return f"/{self.version}/{self.nested_in}/:id/{self.name}/*"

    @property
    def key(self) -> tuple[str, str | None, str]:
        """Identity of the pattern; two entries with the same key overlap fully."""
        return (self.version, self.nested_in, self.name)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful table lookup."""

    entry: RouteEntry
    consumed: tuple[str, ...]
    remainder: tuple[str, ...]
    parent_id: str | None = None
