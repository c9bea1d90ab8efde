"""The `dblaunch` command: config → environment → prompts → client handoff.

Every failure before the client starts exits 1. Once the client runs, its
exit code becomes ours.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click

from dblaunch.banner import print_banner
from dblaunch.cli import _output
from dblaunch.config import (
    CONFIG_FILENAME,
    EnvironmentConfig,
    LauncherConfig,
    launcher_home,
    load_config,
)
from dblaunch.environments import (
    LaunchEnvironment,
    ProxyCredentials,
    discover_environments,
    load_launch_environment,
)
from dblaunch.errors import ConfigError, LauncherError
from dblaunch.launcher import build_command, child_environment, run_client
from dblaunch.prompts import choose
from dblaunch.tools import available_tools


@dataclass(frozen=True)
class Selection:
    environment: str
    tool: str
    port_alias: str
    port: int
    database: str


def _select_environment(config: LauncherConfig, names: list[str]) -> str:
    if len(names) == 1:
        return names[0]
    return choose(
        "Select environment",
        names,
        config.defaults.environment,
        enabled=config.prompts.environment,
    )


def _select_target(
    config: LauncherConfig, environment: str, env_config: EnvironmentConfig, tools: list[str]
) -> Selection:
    """Run the tool, port alias, and database prompts for one environment."""
    defaults, prompts = config.defaults, config.prompts
    tool = choose("Select DB Tool", tools, defaults.tool, enabled=prompts.tool)
    alias = choose(
        "Select port alias",
        list(env_config.port_aliases),
        defaults.port_alias,
        enabled=prompts.port,
    )
    port = env_config.port_for(alias)
    if port is None:
        raise ConfigError(f'No port configured for alias "{alias}" in environment "{environment}"')

    database = choose(
        "Select database", env_config.databases, defaults.database, enabled=prompts.database
    )
    return Selection(
        environment=environment, tool=tool, port_alias=alias, port=port, database=database
    )


def _connect(selection: Selection, env: LaunchEnvironment) -> int:
    creds = ProxyCredentials.from_environment(env)

    print_banner(selection.database, selection.port_alias)
    _output.info(
        f"🔌 Connecting using {click.style(selection.tool, bold=True)} "
        f"to {click.style(selection.database, bold=True)} "
        f"@ {click.style(creds.host, bold=True)}:{click.style(str(selection.port), bold=True)}\n"
    )

    argv = build_command(
        selection.tool, creds.host, selection.port, creds.user, selection.database
    )
    exit_code = run_client(argv, child_environment(env.as_dict(), creds.password))

    if exit_code == 0:
        _output.success(f"{selection.tool} session ended successfully.")
    else:
        _output.error(f"{selection.tool} exited with code {exit_code}")
    return exit_code


def run(home: Path) -> int:
    """Run the whole interactive flow against a launcher home. Returns the exit code."""
    config = load_config(home / CONFIG_FILENAME)

    names = discover_environments(home)
    if not names:
        _output.error("No .env.[environment] files found.")
        return 1

    environment = _select_environment(config, names)
    env_config = config.environment(environment)
    if env_config is None:
        raise ConfigError(f'No config found for environment "{environment}"')
    env = load_launch_environment(home, environment)

    tools = available_tools(config.available_tools, on_missing=_output.missing_tool)
    if not tools:
        _output.error("No supported DB tools found.")
        return 1

    selection = _select_target(config, environment, env_config, tools)
    return _connect(selection, env)


@click.command()
@click.version_option(package_name="dblaunch")
def main() -> None:
    """Pick an environment, client, port alias, and database, then connect."""
    home = launcher_home()

    try:
        exit_code = run(home)
    except LauncherError as e:
        _output.error(str(e))
        raise SystemExit(1) from e

    raise SystemExit(exit_code)
