"""Launcher errors. The CLI turns these into a red message and exit code 1."""

from __future__ import annotations


class LauncherError(Exception):
    """Base class for failures that abort a run before the client starts."""


class ConfigError(LauncherError):
    """dbconfig.json is missing or malformed, or a selection has no config entry."""


class MissingSecretsError(LauncherError):
    """Required read-proxy variables are absent after loading the secret file."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Missing required environment variables: " + ", ".join(missing)
        )


class LaunchError(LauncherError):
    """The client process could not be spawned."""
