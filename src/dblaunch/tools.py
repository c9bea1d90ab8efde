"""Client tool discovery — which database CLIs are on PATH, and how to get the rest."""

from __future__ import annotations

import platform
import shutil
from collections.abc import Callable, Iterable

MANUAL_INSTALL = "Please install this tool manually."

_OS_NAMES = {
    "Darwin": "macOS",
    "Linux": "Linux",
    "Windows": "Windows",
}

_INSTALL_HINTS: dict[str, dict[str, str]] = {
    "pgcli": {
        "macOS": "brew install pgcli or pip3 install pgcli",
        "Linux": "pip3 install pgcli (or install pip first)",
        "Windows": "pip3 install pgcli (install Python from python.org if needed)",
    },
    "psql": {
        "macOS": "brew install postgresql",
        "Linux": "sudo apt install postgresql-client",
        "Windows": "Download from https://www.postgresql.org/download/windows/",
    },
}


def command_exists(name: str) -> bool:
    """True if ``name`` resolves to an executable on PATH. Probe errors count as absent."""
    try:
        return shutil.which(name) is not None
    except Exception:
        return False


def _pip_install_command(package: str) -> str | None:
    for pip in ("pip", "pip3"):
        if command_exists(pip):
            return f"{pip} install {package}"
    return None


def install_hint(tool: str, system: str | None = None) -> str:
    """Suggest how to install ``tool`` on this (or the given) platform.

    pgcli is a Python package, so an available pip wins over the OS table.
    """
    if tool == "pgcli":
        pip_cmd = _pip_install_command("pgcli")
        if pip_cmd:
            return pip_cmd

    hints = _INSTALL_HINTS.get(tool)
    if hints is None:
        return MANUAL_INSTALL

    system = system or platform.system()
    os_name = _OS_NAMES.get(system, system)
    return hints.get(os_name, MANUAL_INSTALL)


def available_tools(
    candidates: Iterable[str],
    on_missing: Callable[[str, str], None] | None = None,
) -> list[str]:
    """Filter candidates to those on PATH, reporting each miss with an install hint."""
    found: list[str] = []
    for tool in candidates:
        if command_exists(tool):
            found.append(tool)
        elif on_missing is not None:
            on_missing(tool, install_hint(tool))
    return found
