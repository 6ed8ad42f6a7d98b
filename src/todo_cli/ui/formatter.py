"""
Output formatter for todos.

Renders a todo or a list of todos either as styled terminal text or as
pretty-printed JSON with no decoration, so `--format json` output can
be piped into other tools.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, List

from rich.console import Console
from rich.text import Text

from todo_cli.client.api_client import Todo

TEXT_FORMAT = "text"
JSON_FORMAT = "json"
OUTPUT_FORMATS = (TEXT_FORMAT, JSON_FORMAT)

RULE_WIDTH = 40

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def format_datetime(value: str) -> str:
    """
    Reformat an RFC 3339 timestamp as "YYYY-MM-DD HH:MM".

    The time is shown in the timestamp's own offset. Anything that does
    not parse is returned unchanged.
    """
    match = _RFC3339.match(value.strip())
    if not match:
        return value

    date_part, time_part, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat wants exactly 6 fractional digits on older Pythons
    micro = ((fraction or "") + "000000")[:6]

    try:
        parsed = datetime.fromisoformat(f"{date_part}T{time_part}.{micro}{offset}")
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M")


class OutputFormatter:
    """Print todos in the selected output format."""

    def __init__(self, console: Console, output_format: str = TEXT_FORMAT):
        self.console = console
        self.output_format = output_format

    @property
    def is_json(self) -> bool:
        return self.output_format == JSON_FORMAT

    def print_todos(self, todos: List[Todo]) -> None:
        """Print a list of todos, one line each, in the order given."""
        if self.is_json:
            self._print_json([t.model_dump() for t in todos])
            return

        if not todos:
            self.console.print(Text("No todos found.", style="dim"))
            return

        self.console.print(Text(f"📋 {len(todos)} todos:", style="bold"))
        self.console.print()
        for todo in todos:
            self.console.print(self._todo_line(todo))

    def print_todo(self, todo: Todo) -> None:
        """Print a single todo as a bordered detail block."""
        if self.is_json:
            self._print_json(todo.model_dump())
            return

        rule = Text("─" * RULE_WIDTH, style="dim")
        status = (
            Text("Completed", style="green")
            if todo.completed
            else Text("Pending", style="yellow")
        )

        self.console.print(rule)
        self.console.print(Text.assemble("  ", ("Todo", "bold"), f" #{todo.id}"))
        self.console.print(Text.assemble("  ", ("Title", "dim"), ": ", todo.title))
        self.console.print(Text.assemble("  ", ("Status", "dim"), ": ", status))
        self.console.print(
            Text.assemble("  ", ("Created", "dim"), ": ", format_datetime(todo.created_at))
        )
        self.console.print(
            Text.assemble("  ", ("Updated", "dim"), ": ", format_datetime(todo.updated_at))
        )
        self.console.print(rule)

    def _todo_line(self, todo: Todo) -> Text:
        if todo.completed:
            glyph = Text("✓", style="green")
            title = Text(todo.title, style="strike dim")
        else:
            glyph = Text("○", style="yellow")
            title = Text(todo.title)
        return Text.assemble("  ", glyph, " ", (f"#{todo.id}", "dim"), " ", title)

    def _print_json(self, data: Any) -> None:
        self.console.print(
            json.dumps(data, indent=2, ensure_ascii=False),
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
