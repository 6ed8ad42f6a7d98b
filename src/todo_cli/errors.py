"""
Error hierarchy for todo-cli.

Every failure that reaches the command layer is a subclass of
TodoCliError, so cli.py can print one clean line and pick an exit code.

    TodoCliError
    ├── TransportError
    ├── ApiError
    │   ├── AuthenticationError
    │   └── NotFoundOrRequestError
    ├── ParseError
    ├── StoreAccessError
    ├── ConfigIoError
    └── UserCancelled
"""
from __future__ import annotations

from typing import Optional


class TodoCliError(Exception):
    """Base class for all todo-cli errors."""

    exit_code = 1

    def __init__(self, message: str, *, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class TransportError(TodoCliError):
    """Request never got an HTTP response (DNS, refused, timeout)."""


class ApiError(TodoCliError):
    """Server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message, hint=hint)
        self.status_code = status_code


class AuthenticationError(ApiError):
    """Login or registration was rejected."""


class NotFoundOrRequestError(ApiError):
    """A single todo could not be fetched."""


class ParseError(TodoCliError):
    """Response body was not the JSON we expected."""


class StoreAccessError(TodoCliError):
    """System keyring could not be reached or written."""


class ConfigIoError(TodoCliError):
    """Settings file could not be read or written."""


class UserCancelled(TodoCliError):
    """User declined a confirmation prompt."""

    exit_code = 0
