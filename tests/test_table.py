"""Tests for RouteEntry and RouteTable."""

import pytest

from roost.routing.entry import RouteEntry
from roost.routing.table import RouteTable
from roost.testing import recording_plug


def posts(conn, opts):
    return conn


class TestRouteEntry:
    def test_top_level_pattern(self) -> None:
        entry = RouteEntry("v1", "posts", posts)
        assert entry.pattern == "/v1/posts/*"
        assert entry.prefix_length == 2
        assert entry.is_nested is False

    def test_nested_pattern(self) -> None:
        entry = RouteEntry("v1", "comments", posts, nested_in="posts")
        assert entry.pattern == "/v1/posts/:id/comments/*"
        assert entry.prefix_length == 4
        assert entry.is_nested is True

    def test_key_distinguishes_parents(self) -> None:
        a = RouteEntry("v1", "comments", posts, nested_in="posts")
        b = RouteEntry("v1", "comments", posts, nested_in="authors")
        assert a.key != b.key

    def test_frozen(self) -> None:
        entry = RouteEntry("v1", "posts", posts)
        with pytest.raises(AttributeError):
            entry.name = "authors"  # type: ignore[misc]


class TestRouteTable:
    def _table(self) -> RouteTable:
        return RouteTable(
            [
                RouteEntry("v1", "posts", posts),
                RouteEntry("v1", "comments", posts, nested_in="posts"),
                RouteEntry("v2", "posts", recording_plug("posts_v2")),
            ]
        )

    def test_sequence_protocol(self) -> None:
        table = self._table()
        assert len(table) == 3
        assert table[0].name == "posts"
        assert [e.version for e in table] == ["v1", "v1", "v2"]

    def test_versions_in_first_declared_order(self) -> None:
        assert self._table().versions == ("v1", "v2")

    def test_equality(self) -> None:
        assert self._table() == self._table()
        assert hash(self._table()) == hash(self._table())

    def test_describe(self) -> None:
        rows = self._table().describe()
        assert rows[0] == ("v1", "/v1/posts/*", "posts")
        assert rows[1] == ("v1", "/v1/posts/:id/comments/*", "posts")
        assert rows[2] == ("v2", "/v2/posts/*", "RecordingPlug")

    def test_repr(self) -> None:
        assert repr(RouteTable()) == "RouteTable(0 entries)"
