"""todo-cli core modules."""

from todo_cli.core.config import Settings, get_config_path, DEFAULT_API_URL
from todo_cli.core.credentials import CredentialStore

__all__ = ["Settings", "get_config_path", "DEFAULT_API_URL", "CredentialStore"]
