"""Configuration management for todo-cli."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from todo_cli.errors import ConfigIoError

logger = logging.getLogger(__name__)

APP_NAME = "todo-cli"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_API_URL = "http://localhost:8080"

# Overrides the platform config directory
CONFIG_DIR_ENV = "TODO_CONFIG_DIR"


def get_config_dir() -> Path:
    """Get the directory holding the settings file."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME))


def get_config_path() -> Path:
    """Get the path to the settings file."""
    return get_config_dir() / CONFIG_FILE_NAME


@dataclass
class Settings:
    """
    Non-secret preferences persisted as YAML.

    The bearer token is never stored here, see core/credentials.py.
    """
    api_url: Optional[str] = None
    path: Path = field(default_factory=get_config_path)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        """Load settings, falling back to defaults when the file is corrupt.

        Raises:
            ConfigIoError: the file exists but cannot be read
        """
        path = path or get_config_path()
        if not path.exists():
            return cls(path=path)

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Ignoring undecodable config file %s: %s", path, e)
            return cls(path=path)
        except OSError as e:
            raise ConfigIoError(f"Failed to read config file {path}: {e}") from e

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            logger.warning("Ignoring unparseable config file %s: %s", path, e)
            return cls(path=path)

        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a mapping", path)
            return cls(path=path)

        api_url = data.get("api_url")
        if api_url is not None and not isinstance(api_url, str):
            logger.warning("Ignoring non-string api_url in %s", path)
            api_url = None

        return cls(api_url=api_url, path=path)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.api_url:
            data["api_url"] = self.api_url
        return data

    def save(self) -> None:
        """Write the full settings document, creating directories as needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigIoError(f"Failed to write config file {self.path}: {e}") from e
        logger.debug("Saved settings to %s", self.path)

    def set_base_url(self, url: str) -> None:
        """Set the API URL and persist immediately."""
        self.api_url = url
        self.save()

    def resolve_base_url(self, cli_url: Optional[str] = None) -> str:
        """Pick the base URL: --url / TODO_API_URL, then settings, then default."""
        return cli_url or self.api_url or DEFAULT_API_URL
