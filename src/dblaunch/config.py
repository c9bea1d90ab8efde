"""Launcher configuration — dbconfig.json in the launcher home."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dblaunch.errors import ConfigError

CONFIG_FILENAME = "dbconfig.json"
HOME_ENV_VAR = "DBLAUNCH_HOME"

_DEFAULT_HOME = Path.home() / ".dblaunch"
_REQUIRED_KEYS = ("defaults", "prompts", "availableTools", "environments")


def launcher_home() -> Path:
    """Return the directory holding dbconfig.json and the .env.* secret files."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return _DEFAULT_HOME


@dataclass(frozen=True)
class Defaults:
    environment: str | None = None
    tool: str | None = None
    port_alias: str | None = None
    database: str | None = None


@dataclass(frozen=True)
class PromptFlags:
    """Which prompts are shown. A disabled prompt uses its default unchecked."""

    environment: bool = True
    tool: bool = True
    port: bool = True
    database: bool = True


@dataclass(frozen=True)
class EnvironmentConfig:
    port_aliases: dict[str, int] = field(default_factory=dict)
    databases: list[str] = field(default_factory=list)

    def port_for(self, alias: str) -> int | None:
        return self.port_aliases.get(alias)


@dataclass(frozen=True)
class LauncherConfig:
    defaults: Defaults
    prompts: PromptFlags
    available_tools: list[str]
    environments: dict[str, EnvironmentConfig]

    def environment(self, name: str) -> EnvironmentConfig | None:
        """Look up an environment's config. Returns None if not configured."""
        return self.environments.get(name)


def load_config(path: Path) -> LauncherConfig:
    """Read and validate dbconfig.json. Raises ConfigError on any problem."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    return parse_config(raw)


def parse_config(raw: object) -> LauncherConfig:
    """Validate a decoded config document and build the typed model."""
    if not isinstance(raw, dict):
        raise ConfigError("Config must be a JSON object.")

    missing = [k for k in _REQUIRED_KEYS if k not in raw]
    if missing:
        raise ConfigError(f"Config is missing required keys: {', '.join(missing)}")

    return LauncherConfig(
        defaults=_parse_defaults(raw["defaults"]),
        prompts=_parse_prompts(raw["prompts"]),
        available_tools=_parse_tools(raw["availableTools"]),
        environments=_parse_environments(raw["environments"]),
    )


def _parse_defaults(value: object) -> Defaults:
    if not isinstance(value, dict):
        raise ConfigError("'defaults' must be an object.")

    fields: dict[str, str | None] = {}
    for key, attr in (
        ("environment", "environment"),
        ("tool", "tool"),
        ("portAlias", "port_alias"),
        ("database", "database"),
    ):
        v = value.get(key)
        if v is not None and not isinstance(v, str):
            raise ConfigError(f"'defaults.{key}' must be a string.")
        fields[attr] = v
    return Defaults(**fields)


def _parse_prompts(value: object) -> PromptFlags:
    if not isinstance(value, dict):
        raise ConfigError("'prompts' must be an object.")

    flags: dict[str, bool] = {}
    for key in ("environment", "tool", "port", "database"):
        v = value.get(key, True)
        if not isinstance(v, bool):
            raise ConfigError(f"'prompts.{key}' must be true or false.")
        flags[key] = v
    return PromptFlags(**flags)


def _parse_tools(value: object) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise ConfigError("'availableTools' must be a list of strings.")
    return list(value)


def _parse_port(env_name: str, alias: str, value: object) -> int:
    # bool is an int subclass; true/false is never a port.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ConfigError(
        f"Port for alias '{alias}' in environment '{env_name}' must be a number, "
        f"got {value!r}."
    )


def _parse_environments(value: object) -> dict[str, EnvironmentConfig]:
    if not isinstance(value, dict):
        raise ConfigError("'environments' must be an object.")

    environments: dict[str, EnvironmentConfig] = {}
    for name, entry in value.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"Environment '{name}' must be an object.")

        aliases = entry.get("portAliases", {})
        if not isinstance(aliases, dict):
            raise ConfigError(f"'environments.{name}.portAliases' must be an object.")

        databases = entry.get("databases", [])
        if not isinstance(databases, list) or not all(isinstance(d, str) for d in databases):
            raise ConfigError(f"'environments.{name}.databases' must be a list of strings.")

        environments[name] = EnvironmentConfig(
            port_aliases={alias: _parse_port(name, alias, p) for alias, p in aliases.items()},
            databases=list(databases),
        )
    return environments
