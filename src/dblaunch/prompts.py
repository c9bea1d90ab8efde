"""Single-choice terminal prompts with prefix auto-completion."""

from __future__ import annotations

from collections.abc import Sequence

import click

from dblaunch.errors import ConfigError


def initial_index(choices: Sequence[str], default: str | None) -> int | None:
    """Index of the pre-selected choice, or None when the default isn't offered."""
    if default is None:
        return None
    try:
        return list(choices).index(default)
    except ValueError:
        return None


class AutoCompleteChoice(click.ParamType):
    """Resolve typed input to one of ``choices``.

    Accepts a 1-based number, the exact choice, or an unambiguous
    case-insensitive prefix (then substring) of one choice.
    """

    name = "choice"

    def __init__(self, choices: Sequence[str]) -> None:
        self.choices = list(choices)

    def complete(self, text: str) -> list[str]:
        needle = text.lower()
        prefixed = [c for c in self.choices if c.lower().startswith(needle)]
        if prefixed:
            return prefixed
        return [c for c in self.choices if needle in c.lower()]

    def convert(self, value, param, ctx) -> str:
        text = str(value).strip()
        if text in self.choices:
            return text

        if text.isdigit():
            index = int(text)
            if 1 <= index <= len(self.choices):
                return self.choices[index - 1]
            self.fail(f"{index} is out of range (1-{len(self.choices)}).", param, ctx)

        matches = self.complete(text)
        if len(matches) == 1:
            return matches[0]
        if not matches:
            self.fail(f"'{text}' matches none of: {', '.join(self.choices)}", param, ctx)
        self.fail(f"'{text}' is ambiguous: {', '.join(matches)}", param, ctx)


def select(message: str, choices: Sequence[str], default: str | None = None) -> str:
    """Show ``choices`` and read one selection from the terminal.

    Raises click.Abort on Ctrl-C / EOF.
    """
    choices = list(choices)
    if not choices:
        raise ConfigError(f"Nothing to choose from for '{message}'.")

    focused = initial_index(choices, default)
    click.echo(click.style(f"? {message}", bold=True))
    for i, choice in enumerate(choices):
        marker = ">" if i == focused else " "
        click.echo(f"{marker} {i + 1:>2}) {choice}")

    return click.prompt(
        "  choice",
        type=AutoCompleteChoice(choices),
        default=choices[focused] if focused is not None else None,
        show_default=focused is not None,
    )


def choose(
    message: str,
    choices: Sequence[str],
    default: str | None,
    *,
    enabled: bool = True,
) -> str:
    """Prompt when enabled; otherwise return the configured default unchecked."""
    if enabled:
        return select(message, choices, default)
    if default is None:
        raise ConfigError(f"Prompt '{message}' is disabled but no default is configured.")
    return default
