"""
todo-cli authentication - login, registration and token management.

Tokens come from the API and are kept in the system keyring.
"""
from __future__ import annotations

import logging

from todo_cli.client.api_client import TodoAPIClient
from todo_cli.core.credentials import CredentialStore

logger = logging.getLogger(__name__)


class TodoAuth:
    """
    Ties the API client to the credential store.

    A successful login or registration stores the returned token and
    attaches it to the client for the rest of the invocation.
    """

    def __init__(self, client: TodoAPIClient, store: CredentialStore):
        self.client = client
        self.store = store

    async def login(self, email: str, password: str) -> str:
        """
        Log in and store the session token.

        Returns:
            The auth token
        """
        response = await self.client.login(email, password)
        self._remember(response.token)
        logger.info("Logged in as %s", email)
        return response.token

    async def register(self, email: str, password: str) -> str:
        """
        Register a new account and store its session token.

        Returns:
            The auth token
        """
        response = await self.client.register(email, password)
        self._remember(response.token)
        logger.info("Registered %s", email)
        return response.token

    def _remember(self, token: str) -> None:
        self.store.set_token(token)
        self.client.token = token
