"""Shared pytest fixtures for the todo-cli test suite.

Guidelines
----------
* No network access: HTTP goes through httpx.MockTransport.
* No real keyring: an in-memory backend is installed per test.
* The settings file lives in tmp_path.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import keyring
import pytest
from click.testing import CliRunner
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

from todo_cli.client.api_client import TodoAPIClient


# ---------------------------------------------------------------------------
# Keyring
# ---------------------------------------------------------------------------

class MemoryKeyring(KeyringBackend):
    """Keyring backend that keeps passwords in a dict."""

    priority = 1

    def __init__(self) -> None:
        super().__init__()
        self.passwords: Dict[Tuple[str, str], str] = {}

    def get_password(self, service: str, username: str) -> Optional[str]:
        return self.passwords.get((service, username))

    def set_password(self, service: str, username: str, password: str) -> None:
        self.passwords[(service, username)] = password

    def delete_password(self, service: str, username: str) -> None:
        try:
            del self.passwords[(service, username)]
        except KeyError:
            raise PasswordDeleteError("not found")


@pytest.fixture
def memory_keyring():
    previous = keyring.get_keyring()
    backend = MemoryKeyring()
    keyring.set_keyring(backend)
    yield backend
    keyring.set_keyring(previous)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    monkeypatch.setenv("TODO_CONFIG_DIR", str(path))
    monkeypatch.delenv("TODO_API_URL", raising=False)
    return path


# ---------------------------------------------------------------------------
# Fake API server
# ---------------------------------------------------------------------------

def make_todo(
    todo_id: int = 1,
    title: str = "Buy milk",
    completed: bool = False,
    **overrides: Any,
) -> Dict[str, Any]:
    todo = {
        "id": todo_id,
        "user_id": 7,
        "title": title,
        "completed": completed,
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-16T08:05:00Z",
    }
    todo.update(overrides)
    return todo


Route = Callable[[httpx.Request], httpx.Response]


class FakeTodoServer:
    """Routes requests by (method, path) and records everything it sees."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None, content: Optional[bytes] = None) -> None:
        def route(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        self.routes[(method, path)] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)

    def client(self, token: Optional[str] = None, base_url: str = "http://api.test") -> TodoAPIClient:
        return TodoAPIClient(base_url, token=token, transport=self.transport)


@pytest.fixture
def server() -> FakeTodoServer:
    return FakeTodoServer()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_env(server, memory_keyring, config_dir, monkeypatch):
    """Point the CLI at the fake server, keyring and config dir."""
    transport = server.transport

    def client_factory(base_url: str, token: Optional[str] = None) -> TodoAPIClient:
        return TodoAPIClient(base_url, token=token, transport=transport)

    monkeypatch.setattr("todo_cli.cli.TodoAPIClient", client_factory)
    return server
