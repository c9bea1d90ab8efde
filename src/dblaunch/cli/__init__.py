"""CLI entry point. `dblaunch` resolves here."""

from __future__ import annotations

from dblaunch.cli.launch import main

__all__ = ["main"]
