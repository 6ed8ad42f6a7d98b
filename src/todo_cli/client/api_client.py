"""
todo API client - HTTP client for the todo service.

One async method per remote operation. Each call opens its own
httpx.AsyncClient, sends exactly one request and either returns a
parsed model or raises a TodoCliError subclass.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from todo_cli.errors import (
    ApiError,
    AuthenticationError,
    NotFoundOrRequestError,
    ParseError,
    TransportError,
)

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class Todo(BaseModel):
    """A todo item as returned by the server.

    Timestamps are kept as the raw RFC 3339 strings the server sends.
    """
    id: int
    user_id: int
    title: str
    completed: bool
    created_at: str
    updated_at: str


class TodoListResponse(BaseModel):
    """Body of GET /api/v1/todos."""
    todos: List[Todo] = []
    total: int = 0


class AuthResponse(BaseModel):
    """Body of a successful login or registration."""
    token: str
    user_id: Optional[int] = None
    expires_at: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body: {"error": "..."}."""
    error: str


class TodoAPIClient:
    """
    Thin client for the todo REST API.

    Attaches the bearer token when one is set and translates transport
    and HTTP failures into the errors defined in todo_cli.errors.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        """Build request headers."""
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        send_error: str,
        fail_prefix: str,
        error_cls: Type[ApiError] = ApiError,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request and check the status.

        Args:
            method: HTTP method
            path: Path below the base URL
            send_error: Message used when the request cannot be sent
            fail_prefix: Prefix for non-2xx errors ("Failed to get todo")
            error_cls: ApiError subclass raised on non-2xx
            json: Optional JSON body

        Returns:
            The 2xx response
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    json=json,
                    headers=self._build_headers(),
                )
            except httpx.TransportError as e:
                raise TransportError(
                    f"{send_error}: {e}",
                    hint=f"Is the server running at {self.base_url}?",
                ) from e

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not response.is_success:
            message = _error_message(response)
            raise error_cls(
                f"{fail_prefix}: {message}",
                status_code=response.status_code,
            )

        return response

    # ==========================================
    # AUTH
    # ==========================================

    async def login(self, email: str, password: str) -> AuthResponse:
        """Exchange credentials for a session token."""
        response = await self._request(
            "POST",
            "/api/v1/auth/login",
            json={"email": email, "password": password},
            send_error="Failed to send login request",
            fail_prefix="Login failed",
            error_cls=AuthenticationError,
        )
        return _parse(response, AuthResponse, "Failed to parse login response")

    async def register(self, email: str, password: str) -> AuthResponse:
        """Create an account and return its session token."""
        response = await self._request(
            "POST",
            "/api/v1/users",
            json={"email": email, "password": password},
            send_error="Failed to send register request",
            fail_prefix="Registration failed",
            error_cls=AuthenticationError,
        )
        return _parse(response, AuthResponse, "Failed to parse register response")

    # ==========================================
    # TODOS
    # ==========================================

    async def list_todos(self, completed: Optional[bool] = None) -> List[Todo]:
        """
        List the caller's todos.

        The server has no filter parameter, so `completed` is applied
        here after the fetch. Server order is preserved.
        """
        response = await self._request(
            "GET",
            "/api/v1/todos",
            send_error="Failed to fetch todos",
            fail_prefix="Failed to list todos",
        )
        todos = _parse(response, TodoListResponse, "Failed to parse todos").todos
        if completed is None:
            return todos
        return [t for t in todos if t.completed == completed]

    async def get_todo(self, todo_id: int) -> Todo:
        response = await self._request(
            "GET",
            f"/api/v1/todos/{todo_id}",
            send_error="Failed to fetch todo",
            fail_prefix="Failed to get todo",
            error_cls=NotFoundOrRequestError,
        )
        return _parse(response, Todo, "Failed to parse todo")

    async def create_todo(self, title: str) -> Todo:
        response = await self._request(
            "POST",
            "/api/v1/todos",
            json={"title": title},
            send_error="Failed to create todo",
            fail_prefix="Failed to create todo",
        )
        return _parse(response, Todo, "Failed to parse created todo")

    async def update_todo(
        self,
        todo_id: int,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Todo:
        """
        Update a todo. Only the supplied fields are sent so the server
        keeps the others.
        """
        payload: Dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if completed is not None:
            payload["completed"] = completed

        response = await self._request(
            "PUT",
            f"/api/v1/todos/{todo_id}",
            json=payload,
            send_error="Failed to update todo",
            fail_prefix="Failed to update todo",
        )
        return _parse(response, Todo, "Failed to parse updated todo")

    async def delete_todo(self, todo_id: int) -> None:
        await self._request(
            "DELETE",
            f"/api/v1/todos/{todo_id}",
            send_error="Failed to delete todo",
            fail_prefix="Failed to delete todo",
        )


def _error_message(response: httpx.Response) -> str:
    """Pull the server's error message out of a failed response."""
    try:
        return ErrorResponse.model_validate(response.json()).error
    except (ValueError, ValidationError):
        return UNKNOWN_ERROR


def _parse(response: httpx.Response, model: Type[BaseModel], context: str) -> Any:
    """Validate a 2xx body against a model."""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise ParseError(f"{context}: {e}") from e
