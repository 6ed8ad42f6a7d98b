"""Rich console UI for todo-cli."""

from __future__ import annotations

from typing import Optional

import sys

import click
from rich.console import Console
from rich.markup import escape


class TodoConsole:
    """Status messages and prompts. Data output goes through OutputFormatter."""

    def __init__(self):
        self.console = Console()
        self.err_console = Console(stderr=True)

    def print_error(self, error: str, hint: Optional[str] = None):
        """Print an error message on stderr."""
        self.err_console.print(f"[red]✗ {escape(error)}[/red]", highlight=False, soft_wrap=True)
        if hint:
            self.err_console.print(f"  [dim]{escape(hint)}[/dim]", highlight=False, soft_wrap=True)

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✅ {escape(message)}[/green]", highlight=False, soft_wrap=True)

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(message, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def print_warning(self, message: str):
        """Print a warning message."""
        self.err_console.print(f"[yellow]⚠ {escape(message)}[/yellow]", highlight=False, soft_wrap=True)

    def prompt_password(self, message: str = "Password") -> str:
        """Read a password from the terminal without echo."""
        return click.prompt(message, hide_input=True).strip()

    def confirm(self, message: str) -> bool:
        """
        Ask a y/N question and read one line from stdin.

        Only "y" or "Y" counts as yes; anything else, including an empty
        line or EOF, is no.
        """
        self.console.print(f"{message} [y/N]", markup=False, highlight=False, soft_wrap=True)
        answer = sys.stdin.readline()
        return answer.strip().lower() == "y"
