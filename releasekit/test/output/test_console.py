"""Tests for releasekit.output.console."""

from __future__ import annotations

import pytest

from releasekit.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    """Tests for MockConsole."""

    def test_captures_styles(self) -> None:
        console = MockConsole()

        console.success("created")
        console.error("boom")
        console.warning("careful")
        console.header("Title")
        console.print("plain")

        assert [o.style for o in console.outputs] == [
            Style.SUCCESS,
            Style.ERROR,
            Style.WARNING,
            Style.HEADER,
            Style.DEFAULT,
        ]
        assert console.messages == [
            "OK created",
            "error: boom",
            "warning: careful",
            "Title",
            "plain",
        ]
        assert console.has_error()

    def test_table_rows(self) -> None:
        console = MockConsole()

        console.table("octo/kit", ("id", "tag"), [("2", "v2"), ("1", "v1")])

        assert console.text == "octo/kit\nid=2 tag=v2\nid=1 tag=v1"

    def test_table_row_width_must_match(self) -> None:
        console = MockConsole()
        with pytest.raises(ValueError):
            console.table("t", ("id", "tag"), [("1",)])


class TestRichConsole:
    """Smoke tests for RichConsole."""

    def test_prints(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.success("created release 1")
        console.table("octo/kit", ("id", "tag"), [("1", "v1.0")])

        out = capsys.readouterr().out
        assert "created release 1" in out
        assert "v1.0" in out
