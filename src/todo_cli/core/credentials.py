"""Bearer token storage in the system keyring."""
from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from todo_cli.core.config import APP_NAME
from todo_cli.errors import StoreAccessError

logger = logging.getLogger(__name__)

TOKEN_ACCOUNT = "api_token"


class CredentialStore:
    """
    Keeps exactly one session token under (service, account).

    Reads and deletes are lenient: a missing entry or an unavailable
    backend means "not logged in". Writes must succeed.
    """

    def __init__(self, service: str = APP_NAME, account: str = TOKEN_ACCOUNT):
        self.service = service
        self.account = account

    def get_token(self) -> Optional[str]:
        """Get the stored token, or None."""
        try:
            return keyring.get_password(self.service, self.account)
        except KeyringError as e:
            logger.debug("Keyring read failed: %s", e)
            return None

    def set_token(self, token: str) -> None:
        """Store the token, replacing any previous one.

        Raises:
            StoreAccessError: the keyring backend refused the write
        """
        try:
            keyring.set_password(self.service, self.account, token)
        except KeyringError as e:
            raise StoreAccessError(
                f"Failed to save token to keyring: {e}",
                hint="Check that a system keyring (Secret Service, Keychain, "
                "Credential Manager) is available.",
            ) from e
        logger.debug("Token stored in keyring (%s/%s)", self.service, self.account)

    def clear_token(self) -> None:
        """Delete the token. Missing entries are fine."""
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError:
            logger.debug("No token to delete")
        except KeyringError as e:
            logger.debug("Keyring delete failed: %s", e)

    def has_token(self) -> bool:
        return bool(self.get_token())
