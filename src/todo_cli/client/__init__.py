"""todo API client - thin client for the todo service."""

from todo_cli.client.api_client import (
    TodoAPIClient,
    Todo,
    TodoListResponse,
    AuthResponse,
)
from todo_cli.client.auth import TodoAuth

__all__ = [
    "TodoAPIClient",
    "Todo",
    "TodoListResponse",
    "AuthResponse",
    "TodoAuth",
]
