"""Colored status lines for the launch flow."""

from __future__ import annotations

import click


def error(message: str) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)


def warn(message: str) -> None:
    click.secho(f"⚠️  {message}", fg="yellow")


def hint(message: str) -> None:
    click.secho(f"   {message}\n", fg="cyan")


def info(message: str) -> None:
    click.secho(message, fg="cyan")


def success(message: str) -> None:
    click.secho(f"✅ {message}", fg="green")


def missing_tool(tool: str, install: str) -> None:
    warn(f'"{tool}" not found. Install with:')
    hint(install)
