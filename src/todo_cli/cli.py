"""
todo CLI - manage todos on a remote todo API from the terminal.

Usage:
    todo auth login -e me@example.com   # Authenticate (prompts for password)
    todo list --completed false         # Pending todos
    todo create "write report"          # Add a todo
    todo update 3 -t "new title"        # Rename
    todo done 3                         # Mark completed
    todo delete 3                       # Delete (asks first)
    todo -f json get 3                  # Machine-readable output
"""
from __future__ import annotations

import asyncio
import functools
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Coroutine, Optional, TypeVar

import click
from dotenv import load_dotenv

from todo_cli import __version__
from todo_cli.client import TodoAPIClient, TodoAuth
from todo_cli.core import CredentialStore, Settings
from todo_cli.errors import TodoCliError, UserCancelled
from todo_cli.logging_setup import setup_logging
from todo_cli.ui import OutputFormatter, TodoConsole
from todo_cli.ui.formatter import OUTPUT_FORMATS, TEXT_FORMAT

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


@dataclass
class AppContext:
    """
    Everything one invocation needs, built once in the group callback.

    The stored token is read from the keyring at most once, on first use.
    """
    settings: Settings
    store: CredentialStore
    ui: TodoConsole
    output_format: str = TEXT_FORMAT
    url: Optional[str] = None
    _token: Any = field(default=_UNSET, repr=False)

    @property
    def base_url(self) -> str:
        return self.settings.resolve_base_url(self.url)

    @property
    def token(self) -> Optional[str]:
        if self._token is _UNSET:
            self._token = self.store.get_token()
        return self._token

    @property
    def formatter(self) -> OutputFormatter:
        return OutputFormatter(self.ui.console, self.output_format)

    def make_client(self) -> TodoAPIClient:
        return TodoAPIClient(self.base_url, token=self.token)

    def notify(self, message: str) -> None:
        """Print a success line, except in JSON mode where stdout is data only."""
        if self.output_format == TEXT_FORMAT:
            self.ui.print_success(message)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a single client call to completion."""
    return asyncio.run(coro)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn todo-cli errors into a message and an exit code."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        app: AppContext = click.get_current_context().find_object(AppContext)
        try:
            return func(*args, **kwargs)
        except UserCancelled as e:
            app.ui.print_info(e.message)
            sys.exit(e.exit_code)
        except TodoCliError as e:
            logger.debug("Command failed", exc_info=True)
            app.ui.print_error(e.message, e.hint)
            sys.exit(e.exit_code)
        except (KeyboardInterrupt, click.Abort):
            app.ui.print_warning("Interrupted")
            sys.exit(130)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="todo")
@click.option(
    "--url", "-u",
    envvar="TODO_API_URL",
    help="API server URL (default: configured URL or http://localhost:8080)",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=TEXT_FORMAT,
    show_default=True,
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, url: Optional[str], output_format: str, verbose: bool):
    """
    todo - manage your todos from the terminal.

    Quick start:
        todo auth login --email you@example.com
        todo create "buy milk"
        todo list
    """
    setup_logging(verbose)
    ui = TodoConsole()

    try:
        settings = Settings.load()
    except TodoCliError as e:
        ui.print_error(e.message, e.hint)
        sys.exit(e.exit_code)

    ctx.obj = AppContext(
        settings=settings,
        store=CredentialStore(),
        ui=ui,
        output_format=output_format,
        url=url,
    )


# ==========================================
# AUTH
# ==========================================

@cli.group()
def auth():
    """Authentication commands."""


@auth.command()
@click.option("--email", "-e", required=True, help="Email address")
@click.option("--password", "-p", help="Password (will prompt if not provided)")
@click.pass_obj
@handle_errors
def login(app: AppContext, email: str, password: Optional[str]):
    """Log in to the API."""
    if password is None:
        password = app.ui.prompt_password()

    app.ui.print_info(f"🔑 Logging in as {email}...")
    _run(TodoAuth(app.make_client(), app.store).login(email, password))
    app.ui.print_success("Login successful!")
    app.ui.print_info("Token has been securely stored.")


@auth.command()
@click.option("--email", "-e", required=True, help="Email address")
@click.option("--password", "-p", help="Password (will prompt if not provided)")
@click.pass_obj
@handle_errors
def register(app: AppContext, email: str, password: Optional[str]):
    """Register a new account."""
    if password is None:
        password = app.ui.prompt_password()

    app.ui.print_info(f"📝 Registering {email}...")
    _run(TodoAuth(app.make_client(), app.store).register(email, password))
    app.ui.print_success("Registration successful!")
    app.ui.print_info("You are now logged in.")


@auth.command()
@click.pass_obj
@handle_errors
def logout(app: AppContext):
    """Log out (clear stored token)."""
    app.store.clear_token()
    app.ui.print_success("Logged out successfully!")


@auth.command()
@click.pass_obj
@handle_errors
def status(app: AppContext):
    """Show current auth status."""
    if app.token:
        app.ui.print_success("Authenticated")
        app.ui.print_info("You are logged in and can access the API.")
    else:
        app.ui.console.print("[red]❌ Not authenticated[/red]", highlight=False)
        app.ui.print_info("Run 'todo auth login' to authenticate.")


# ==========================================
# TODOS
# ==========================================

@cli.command("list")
@click.option(
    "--completed", "-c",
    type=click.BOOL,
    default=None,
    help="Filter by completion status (true/false)",
)
@click.pass_obj
@handle_errors
def list_todos(app: AppContext, completed: Optional[bool]):
    """List all todos."""
    todos = _run(app.make_client().list_todos(completed))
    app.formatter.print_todos(todos)


@cli.command()
@click.argument("todo_id", metavar="ID", type=int)
@click.pass_obj
@handle_errors
def get(app: AppContext, todo_id: int):
    """Get a specific todo by ID."""
    todo = _run(app.make_client().get_todo(todo_id))
    app.formatter.print_todo(todo)


@cli.command()
@click.argument("title")
@click.pass_obj
@handle_errors
def create(app: AppContext, title: str):
    """Create a new todo."""
    todo = _run(app.make_client().create_todo(title))
    app.formatter.print_todo(todo)
    app.notify("Todo created successfully!")


@cli.command()
@click.argument("todo_id", metavar="ID", type=int)
@click.option("--title", "-t", help="New title")
@click.option("--completed", "-c", type=click.BOOL, default=None, help="Completion status (true/false)")
@click.pass_obj
@handle_errors
def update(app: AppContext, todo_id: int, title: Optional[str], completed: Optional[bool]):
    """Update a todo. Only the given fields change."""
    todo = _run(app.make_client().update_todo(todo_id, title=title, completed=completed))
    app.formatter.print_todo(todo)
    app.notify("Todo updated successfully!")


@cli.command()
@click.argument("todo_id", metavar="ID", type=int)
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_obj
@handle_errors
def delete(app: AppContext, todo_id: int, force: bool):
    """Delete a todo."""
    if not force and not app.ui.confirm(f"Are you sure you want to delete todo #{todo_id}?"):
        raise UserCancelled("Cancelled.")

    _run(app.make_client().delete_todo(todo_id))
    app.notify(f"Todo #{todo_id} deleted successfully!")


@cli.command()
@click.argument("todo_id", metavar="ID", type=int)
@click.pass_obj
@handle_errors
def done(app: AppContext, todo_id: int):
    """Mark a todo as completed."""
    todo = _run(app.make_client().update_todo(todo_id, completed=True))
    app.formatter.print_todo(todo)
    app.notify("Todo marked as completed!")


@cli.command()
@click.argument("todo_id", metavar="ID", type=int)
@click.pass_obj
@handle_errors
def undone(app: AppContext, todo_id: int):
    """Mark a todo as incomplete."""
    todo = _run(app.make_client().update_todo(todo_id, completed=False))
    app.formatter.print_todo(todo)
    app.notify("Todo marked as incomplete!")


# ==========================================
# CONFIG
# ==========================================

@cli.group(invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context):
    """Show or change configuration."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(show)


@config.command()
@click.pass_obj
@handle_errors
def show(app: AppContext):
    """Show current configuration."""
    token_status = "✓ stored" if app.token else "✗ not set"

    app.ui.print_info("Configuration:")
    app.ui.print_info(f"  Config file: {app.settings.path}")
    app.ui.print_info(f"  API URL: {app.settings.api_url or '(default)'}")
    app.ui.print_info(f"  Token: {token_status}")


@config.command("set-url")
@click.argument("url")
@click.pass_obj
@handle_errors
def set_url(app: AppContext, url: str):
    """Set the API URL."""
    app.settings.set_base_url(url)
    app.ui.print_success(f"API URL set to: {url}")


def main():
    """Main entry point."""
    load_dotenv(override=False)
    cli()


if __name__ == "__main__":
    main()
