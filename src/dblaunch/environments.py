"""Environment discovery and per-environment secrets (.env.<name> files)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from dblaunch.errors import MissingSecretsError

SECRET_PREFIX = ".env."
TEMPLATE_SUFFIX = ".example"

HOST_VAR = "DB_READ_PROXY_HOST"
USER_VAR = "DB_READ_PROXY_USER"
PASSWORD_VAR = "DB_READ_PROXY_PASSWORD"


def secret_file(root: Path, name: str) -> Path:
    return root / f"{SECRET_PREFIX}{name}"


def discover_environments(root: Path) -> list[str]:
    """Return environment names from .env.<name> files in root, sorted.

    Template files (.env.<name>.example) are skipped. A missing root yields [].
    """
    if not root.is_dir():
        return []

    names: list[str] = []
    for entry in root.iterdir():
        filename = entry.name
        if not filename.startswith(SECRET_PREFIX) or filename.endswith(TEMPLATE_SUFFIX):
            continue
        name = filename[len(SECRET_PREFIX):]
        if name and entry.is_file():
            names.append(name)
    return sorted(names)


@dataclass(frozen=True)
class LaunchEnvironment:
    """Variables visible to the launched client, built once per run.

    Secret-file values are overlaid by the parent process environment: a
    variable already set in the shell wins over the file.
    """

    variables: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.variables.get(key)

    def as_dict(self) -> dict[str, str]:
        return dict(self.variables)


def load_launch_environment(
    root: Path, name: str, base: Mapping[str, str] | None = None
) -> LaunchEnvironment:
    """Parse .env.<name> and merge it under ``base`` (defaults to os.environ)."""
    if base is None:
        base = os.environ

    # Values are taken literally: no ${VAR} expansion. Keys declared without
    # a value come back as None.
    values = dotenv_values(secret_file(root, name), interpolate=False)
    file_values = {k: v for k, v in values.items() if v is not None}
    merged = {**file_values, **base}
    return LaunchEnvironment(variables=merged)


@dataclass(frozen=True)
class ProxyCredentials:
    host: str
    user: str
    password: str

    @classmethod
    def from_environment(cls, env: LaunchEnvironment) -> ProxyCredentials:
        """Extract read-proxy credentials. Raises MissingSecretsError if any is unset."""
        values = {var: env.get(var) for var in (HOST_VAR, USER_VAR, PASSWORD_VAR)}
        missing = [var for var, v in values.items() if not v]
        if missing:
            raise MissingSecretsError(missing)
        return cls(host=values[HOST_VAR], user=values[USER_VAR], password=values[PASSWORD_VAR])

    def __repr__(self) -> str:
        return f"ProxyCredentials(host={self.host!r}, user={self.user!r}, password='****')"
