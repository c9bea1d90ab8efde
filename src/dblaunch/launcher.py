"""Hand off to the database client: argv, environment, spawn, exit code."""

from __future__ import annotations

import contextlib
import signal
import subprocess
from collections.abc import Iterator, Mapping

from dblaunch.errors import LaunchError

PASSWORD_ENV_VAR = "PGPASSWORD"

# pgcli takes the database via -d; psql and anything else take it positionally.
_DATABASE_FLAG_TOOLS = frozenset({"pgcli"})


def build_command(tool: str, host: str, port: int | str, user: str, database: str) -> list[str]:
    argv = [tool, "-h", host, "-p", str(port), "-U", user]
    if tool in _DATABASE_FLAG_TOOLS:
        argv += ["-d", database]
    else:
        argv.append(database)
    return argv


def child_environment(env: Mapping[str, str], password: str) -> dict[str, str]:
    return {**env, PASSWORD_ENV_VAR: password}


def _ignore_interrupt(signum, frame) -> None:
    pass


@contextlib.contextmanager
def _interrupts_go_to_child() -> Iterator[None]:
    """Keep Ctrl-C from killing the launcher while the client owns the terminal.

    A handler (not SIG_IGN) is installed so the child still gets default
    SIGINT handling after exec.
    """
    try:
        previous = signal.signal(signal.SIGINT, _ignore_interrupt)
    except ValueError:
        # signal.signal only works in the main thread.
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def run_client(argv: list[str], env: Mapping[str, str]) -> int:
    """Run the client attached to this terminal and return its exit code.

    A client killed by signal N reports 128 + N, as a shell would.
    Raises LaunchError if the process cannot be started.
    """
    with _interrupts_go_to_child():
        try:
            process = subprocess.Popen(argv, env=dict(env))
        except OSError as e:
            raise LaunchError(f"Failed to start {argv[0]}: {e}") from e
        code = process.wait()

    if code < 0:
        return 128 - code
    return code
