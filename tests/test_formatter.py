"""Tests for OutputFormatter and format_datetime (ui/formatter.py)."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console

from tests.conftest import make_todo
from todo_cli.client.api_client import Todo
from todo_cli.ui.formatter import OutputFormatter, format_datetime


def _formatter(output_format: str = "text"):
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, color_system=None)
    return OutputFormatter(console, output_format), buffer


def _todos(*items):
    return [Todo.model_validate(i) for i in items]


# ---------------------------------------------------------------------------
# format_datetime
# ---------------------------------------------------------------------------

class TestFormatDatetime:
    def test_utc(self) -> None:
        assert format_datetime("2024-01-15T10:30:00Z") == "2024-01-15 10:30"

    def test_keeps_own_offset(self) -> None:
        assert format_datetime("2024-01-15T10:30:00+02:00") == "2024-01-15 10:30"

    def test_nanosecond_fraction(self) -> None:
        assert format_datetime("2024-03-01T23:59:59.123456789Z") == "2024-03-01 23:59"

    @pytest.mark.parametrize("raw", [
        "yesterday",
        "",
        "2024-01-15",
        "2024-01-15T10:30:00",
        "2024-13-45T10:30:00Z",
    ])
    def test_unparseable_unchanged(self, raw: str) -> None:
        assert format_datetime(raw) == raw


# ---------------------------------------------------------------------------
# Text mode
# ---------------------------------------------------------------------------

class TestTextList:
    def test_empty(self) -> None:
        formatter, out = _formatter()

        formatter.print_todos([])

        assert out.getvalue() == "No todos found.\n"
        assert "todos:" not in out.getvalue()

    def test_one_line_per_todo_in_order(self) -> None:
        formatter, out = _formatter()
        todos = _todos(make_todo(3, "Third"), make_todo(1, "First", completed=True), make_todo(2, "Second"))

        formatter.print_todos(todos)

        lines = out.getvalue().splitlines()
        assert lines[0] == "📋 3 todos:"
        assert lines[1] == ""
        assert lines[2:] == [
            "  ○ #3 Third",
            "  ✓ #1 First",
            "  ○ #2 Second",
        ]

    def test_title_with_brackets_printed_verbatim(self) -> None:
        formatter, out = _formatter()

        formatter.print_todos(_todos(make_todo(1, "[bold]not markup[/bold]")))

        assert "[bold]not markup[/bold]" in out.getvalue()


class TestTextDetail:
    def test_pending(self) -> None:
        formatter, out = _formatter()

        formatter.print_todo(Todo.model_validate(make_todo(4, "Walk dog")))

        lines = out.getvalue().splitlines()
        assert lines[0] == "─" * 40
        assert lines[-1] == "─" * 40
        assert "  Todo #4" in lines
        assert "  Title: Walk dog" in lines
        assert "  Status: Pending" in lines
        assert "  Created: 2024-01-15 10:30" in lines
        assert "  Updated: 2024-01-16 08:05" in lines

    def test_completed_and_raw_timestamp(self) -> None:
        formatter, out = _formatter()
        todo = Todo.model_validate(make_todo(4, completed=True, updated_at="not a date"))

        formatter.print_todo(todo)

        assert "  Status: Completed" in out.getvalue().splitlines()
        assert "  Updated: not a date" in out.getvalue().splitlines()


# ---------------------------------------------------------------------------
# JSON mode
# ---------------------------------------------------------------------------

class TestJson:
    def test_single_round_trip(self) -> None:
        formatter, out = _formatter("json")
        todo = Todo.model_validate(make_todo(9, "Ünïcode title", completed=True))

        formatter.print_todo(todo)

        assert Todo.model_validate(json.loads(out.getvalue())) == todo

    def test_list_round_trip(self) -> None:
        formatter, out = _formatter("json")
        todos = _todos(make_todo(1), make_todo(2, "[x] brackets", completed=True))

        formatter.print_todos(todos)

        data = json.loads(out.getvalue())
        assert [Todo.model_validate(d) for d in data] == todos

    def test_empty_list_is_json_array(self) -> None:
        formatter, out = _formatter("json")

        formatter.print_todos([])

        assert json.loads(out.getvalue()) == []

    def test_pretty_printed(self) -> None:
        formatter, out = _formatter("json")

        formatter.print_todo(Todo.model_validate(make_todo(1)))

        assert out.getvalue().startswith('{\n  "id": 1,')
