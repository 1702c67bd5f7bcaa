"""Ordered, immutable route table."""

from collections.abc import Iterable, Iterator, Sequence

from roost.routing.entry import RouteEntry


class RouteTable(Sequence[RouteEntry]):
    """The ordered set of all route entries for a router.

    Order equals declaration order and is significant: the dispatcher
    stops at the first entry that matches. The table is never mutated
    after construction, so it can be shared freely across threads.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[RouteEntry] = ()) -> None:
        self._entries: tuple[RouteEntry, ...] = tuple(entries)

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._entries)} entries)"

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        return self._entries

    @property
    def versions(self) -> tuple[str, ...]:
        """Distinct versions in first-declared order."""
        return tuple(dict.fromkeys(entry.version for entry in self._entries))

    def describe(self) -> list[tuple[str, str, str]]:
        """Rows of (version, pattern, target name) for introspection and the CLI."""
        rows: list[tuple[str, str, str]] = []
        for entry in self._entries:
            target = entry.target
            target_name = getattr(target, "__qualname__", None) or type(target).__name__
            rows.append((entry.version, entry.pattern, target_name))
        return rows
