"""Tests for roost.http.conn — the per-request connection."""

import json

import pytest

from roost.http.conn import PARENT_ID_KEY, PARENT_NAME_KEY, Conn
from roost.http.headers import Headers


class TestBuild:
    def test_defaults(self) -> None:
        conn = Conn()
        assert conn.method == "GET"
        assert conn.path_info == ()
        assert conn.private == {}
        assert conn.status is None
        assert conn.state == "unset"
        assert conn.halted is False

    def test_build_splits_path(self) -> None:
        conn = Conn.build("post", "/v1/posts/5")
        assert conn.method == "POST"
        assert conn.path_info == ("v1", "posts", "5")

    def test_build_root(self) -> None:
        assert Conn.build("GET", "/").path_info == ()

    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/v1/posts/hello%20world/",
            "query_string": b"page=2",
            "headers": [(b"accept", b"application/json")],
        }
        conn = Conn.from_asgi(scope)
        assert conn.path_info == ("v1", "posts", "hello world")
        assert conn.query_string == b"page=2"
        assert conn.headers["Accept"] == "application/json"

    def test_from_asgi_keeps_trailing_slash_when_asked(self) -> None:
        scope = {"type": "http", "method": "GET", "path": "/v1/posts/"}
        conn = Conn.from_asgi(scope, strip_trailing_slash=False)
        assert conn.path_info == ("v1", "posts", "")


class TestTransforms:
    def test_frozen(self) -> None:
        conn = Conn()
        with pytest.raises(AttributeError):
            conn.method = "POST"  # type: ignore[misc]

    def test_with_path_info(self) -> None:
        conn = Conn.build("GET", "/v1/posts/5")
        moved = conn.with_path_info(("5",), consumed=("v1", "posts"))
        assert moved.path_info == ("5",)
        assert moved.script_name == ("v1", "posts")
        assert moved.path == "/v1/posts/5"
        assert conn.path_info == ("v1", "posts", "5")

    def test_put_private_copies(self) -> None:
        conn = Conn()
        tagged = conn.put_private("user", "alice")
        assert tagged.private == {"user": "alice"}
        assert conn.private == {}

    def test_private_is_read_only(self) -> None:
        conn = Conn().put_private("user", "alice")
        with pytest.raises(TypeError):
            conn.private["user"] = "mallory"  # type: ignore[index]

    def test_parent_accessors(self) -> None:
        conn = Conn().put_private(PARENT_NAME_KEY, "posts").put_private(PARENT_ID_KEY, "5")
        assert conn.parent_name == "posts"
        assert conn.parent_id == "5"

    def test_parent_accessors_absent(self) -> None:
        conn = Conn()
        assert conn.parent_name is None
        assert conn.parent_id is None

    def test_resp(self) -> None:
        conn = Conn().resp(201, "created", content_type="text/html")
        assert conn.status == 201
        assert conn.resp_body == b"created"
        assert conn.content_type == "text/html"
        assert conn.state == "set"
        assert conn.halted is False

    def test_send_json_halts(self) -> None:
        conn = Conn().send_json(200, {"ok": True})
        assert conn.halted is True
        assert conn.content_type == "application/json"
        assert json.loads(conn.resp_body) == {"ok": True}

    def test_put_resp_header(self) -> None:
        conn = Conn().put_resp_header("X-Api", "v1").put_resp_header("X-Api", "v2")
        assert conn.resp_headers == (("X-Api", "v1"), ("X-Api", "v2"))


class TestBody:
    @pytest.mark.anyio
    async def test_reads_chunks(self) -> None:
        messages = [
            {"type": "http.request", "body": b"hel", "more_body": True},
            {"type": "http.request", "body": b"lo", "more_body": False},
        ]

        async def receive():
            return messages.pop(0)

        conn = Conn.from_asgi({"type": "http", "method": "POST", "path": "/"}, receive)
        assert await conn.body() == b"hello"

    @pytest.mark.anyio
    async def test_empty_body(self) -> None:
        assert await Conn().body() == b""


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers.from_dict({"Content-Type": "text/plain"})
        assert headers["content-type"] == "text/plain"
        assert "CONTENT-TYPE" in headers

    def test_get_list(self) -> None:
        headers = Headers(((b"x-tag", b"a"), (b"X-Tag", b"b")))
        assert headers.get_list("x-tag") == ["a", "b"]
        assert len(headers) == 1
        assert list(headers) == ["x-tag"]

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("accept") is None
        with pytest.raises(KeyError):
            headers["accept"]
