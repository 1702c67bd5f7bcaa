"""Tests for roost.pipeline — ordered plugs with halting."""

import pytest

from roost.http.conn import Conn
from roost.pipeline import Pipeline


def tag(label):
    def plug(conn, opts):
        trail = conn.private.get("trail", ())
        return conn.put_private("trail", (*trail, label))

    return plug


class TestPipeline:
    @pytest.mark.anyio
    async def test_runs_in_order(self) -> None:
        pipeline = Pipeline([tag("a"), tag("b"), tag("c")])
        conn = await pipeline(Conn())
        assert conn.private["trail"] == ("a", "b", "c")

    @pytest.mark.anyio
    async def test_halt_stops_pipeline(self) -> None:
        def stop(conn, opts):
            return conn.resp(403, "no").halt()

        pipeline = Pipeline([tag("a"), stop, tag("never")])
        conn = await pipeline(Conn())
        assert conn.private["trail"] == ("a",)
        assert conn.status == 403

    @pytest.mark.anyio
    async def test_async_plugs(self) -> None:
        async def slow(conn, opts):
            return conn.put_private("slow", True)

        conn = await Pipeline([slow])(Conn())
        assert conn.private["slow"] is True

    @pytest.mark.anyio
    async def test_step_opts_merge_over_pipeline_opts(self) -> None:
        seen = []

        def record(conn, opts):
            seen.append(opts)
            return conn

        pipeline = Pipeline([record, (record, {"scope": "step"})])
        await pipeline(Conn(), {"scope": "pipeline", "tenant": "acme"})
        assert seen == [
            {"scope": "pipeline", "tenant": "acme"},
            {"scope": "step", "tenant": "acme"},
        ]

    @pytest.mark.anyio
    async def test_plug_must_return_conn(self) -> None:
        def broken(conn, opts):
            return "oops"

        with pytest.raises(TypeError, match="expected Conn"):
            await Pipeline([broken])(Conn())

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="callable"):
            Pipeline(["route"])  # type: ignore[list-item]

    def test_len(self) -> None:
        assert len(Pipeline([tag("a"), tag("b")])) == 2

    @pytest.mark.anyio
    async def test_already_halted_conn_skips_everything(self) -> None:
        conn = await Pipeline([tag("a")])(Conn().halt())
        assert "trail" not in conn.private
