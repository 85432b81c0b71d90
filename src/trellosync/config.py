"""Configuration loading for trellosync.

All settings come from the environment of the workflow step. The config is
assembled once at startup and passed to the handlers.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

# Environment variable for each config field. The first name found wins.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "api_key": ("TRELLO_API_KEY",),
    "api_token": ("TRELLO_API_TOKEN",),
    "board_id": ("TRELLO_BOARD_ID",),
    "todo_list_id": ("TRELLO_TODO_LIST_ID",),
    "in_progress_list_id": ("TRELLO_IN_PROGRESS_LIST_ID",),
    "debugging_list_id": ("TRELLO_DEBUGING_LIST_ID", "TRELLO_DEBUGGING_LIST_ID"),
    "done_list_id": ("TRELLO_DONE_LIST_ID",),
    "departure_list_id": ("TRELLO_DEPARTURE_LIST_ID",),
    "destination_list_id": ("TRELLO_DESTINATION_LIST_ID",),
}

REQUIRED_FIELDS = ("api_key", "api_token", "board_id")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class Config:
    """Trello credentials, board and workflow list IDs."""

    api_key: str
    api_token: str
    board_id: str
    todo_list_id: str | None = None
    in_progress_list_id: str | None = None
    debugging_list_id: str | None = None
    done_list_id: str | None = None
    departure_list_id: str | None = None
    destination_list_id: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build the config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Parsed configuration.

        Raises:
            ConfigError: If a credential or the board ID is missing.
        """
        if environ is None:
            environ = os.environ

        values: dict[str, str | None] = {}
        for name, env_names in ENV_VARS.items():
            values[name] = next(
                (environ[env].strip() for env in env_names if environ.get(env, "").strip()),
                None,
            )

        missing = [name for name in REQUIRED_FIELDS if not values[name]]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(_env_names(missing))}")

        return cls(**values)  # type: ignore[arg-type]

    def require(self, *names: str) -> None:
        """Check that the named optional fields are set.

        Raises:
            ConfigError: Naming every missing field's environment variable.
        """
        known = {f.name for f in fields(self)}
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

        missing = [name for name in names if not getattr(self, name)]
        if missing:
            raise ConfigError(f"Missing required settings: {', '.join(_env_names(missing))}")

    def list_id(self, name: str) -> str:
        """Return the list ID stored in field ``name``.

        Raises:
            ConfigError: If the field is not set.
        """
        self.require(name)
        value: str = getattr(self, name)
        return value


def _env_names(names: list[str]) -> list[str]:
    return [ENV_VARS[name][0] for name in names]
