"""Tests for roost.cli — argument parsing and ``roost routes``."""

import textwrap
from pathlib import Path

import pytest

from roost.app import App
from roost.cli import main
from roost.cli._resolve import resolve_target, router_of
from roost.cli._routes import format_rows
from roost.router import ResourceRouter

BLOG_MODULE = textwrap.dedent(
    """
    from roost import App, ResourceRouter, resource, version


    def posts(conn, opts):
        return conn


    def comments(conn, opts):
        return conn


    router = ResourceRouter([
        version("v1", resource("posts", posts, [resource("comments", comments)])),
    ])


    @router.get("/ping")
    def ping(conn, opts):
        return conn


    app = App(router)


    def make_router():
        return ResourceRouter([version("v2", resource("posts", posts))])


    broken = ResourceRouter([version("v1", resource("posts", None))])
    not_an_app = 42
    """
)


@pytest.fixture
def blog_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    name = f"blog_api_{tmp_path.name.replace('-', '_')}"
    (tmp_path / f"{name}.py").write_text(BLOG_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out


class TestResolve:
    def test_router(self, blog_module: str) -> None:
        assert isinstance(resolve_target(f"{blog_module}:router"), ResourceRouter)

    def test_default_attribute_is_app(self, blog_module: str) -> None:
        target = resolve_target(blog_module)
        assert isinstance(target, App)
        assert isinstance(router_of(target), ResourceRouter)

    def test_factory(self, blog_module: str) -> None:
        router = resolve_target(f"{blog_module}:make_router")
        assert router.table.versions == ("v2",)

    def test_wrong_type(self, blog_module: str) -> None:
        with pytest.raises(TypeError, match="not a roost App"):
            resolve_target(f"{blog_module}:not_an_app")


class TestRoutesCommand:
    def test_lists_table(self, blog_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{blog_module}:app"])
        out = capsys.readouterr().out.splitlines()
        assert out[0].split() == ["VERSION", "PATTERN", "TARGET"]
        assert "/v1/posts/:id/comments/*" in out[2]
        assert "/v1/posts/*" in out[3]
        assert out[3].split()[-1] == "posts"
        assert "GET,HEAD /ping" in out[4]

    def test_invalid_routes_exit_1(self, blog_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", f"{blog_module}:broken"])
        assert exc_info.value.code == 1
        assert "Invalid routes" in capsys.readouterr().err

    def test_missing_module_exit_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["routes", "no_such_module_for_roost:router"])
        assert "Error" in capsys.readouterr().err


class TestRunCommand:
    def test_serves_app_with_config(
        self, blog_module: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple] = []

        def fake_run_server(app, host, port, **kwargs):
            calls.append((app, host, port, kwargs))

        monkeypatch.setattr("roost.server.dev.run_server", fake_run_server)
        main(["run", f"{blog_module}:router", "--port", "9100"])

        [(app, host, port, kwargs)] = calls
        assert isinstance(app, App)
        assert (host, port) == ("127.0.0.1", 9100)
        assert kwargs["log_level"] == "info"
        assert kwargs["app_path"] is None


class TestFormatRows:
    def test_columns_align(self) -> None:
        lines = format_rows([("v1", "/v1/posts/*", "posts"), ("v10", "/v10/a/*", "a")])
        assert lines[2].index("/v1/posts/*") == lines[3].index("/v10/a/*")
