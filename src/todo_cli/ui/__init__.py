"""todo-cli UI - Rich terminal interface."""

from todo_cli.ui.console import TodoConsole
from todo_cli.ui.formatter import OutputFormatter, format_datetime

__all__ = ["TodoConsole", "OutputFormatter", "format_datetime"]
