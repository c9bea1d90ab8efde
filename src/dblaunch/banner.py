"""Session banner shown right before the client takes over the terminal."""

from __future__ import annotations

import colorsys

import click
import pyfiglet
from rich.console import Console
from rich.text import Text

FONT = "standard"


def banner_text(database: str, alias: str) -> str:
    return f"{database.upper()} @ {alias.upper()}"


def _rainbow(position: float) -> str:
    # Red through violet; stop short of wrapping back to red.
    r, g, b = colorsys.hsv_to_rgb(position * 0.83, 0.85, 1.0)
    return f"#{int(r * 255):02x}{int(g * 255):02x}{int(b * 255):02x}"


def render_banner(database: str, alias: str) -> Text:
    """ASCII-art title, shaded left to right along a rainbow.

    Every line shares the same gradient, so a column keeps one color.
    """
    art = pyfiglet.figlet_format(banner_text(database, alias), font=FONT, width=200)
    lines = art.rstrip("\n").split("\n")
    span = max(max(len(line) for line in lines) - 1, 1)

    text = Text(no_wrap=True)
    for row, line in enumerate(lines):
        if row:
            text.append("\n")
        for col, char in enumerate(line):
            text.append(char, style=f"bold {_rainbow(col / span)}")
    return text


def print_banner(database: str, alias: str, console: Console | None = None) -> None:
    """Clear the screen and print the banner."""
    click.clear()
    (console or Console()).print(render_banner(database, alias))
