"""Test client argv construction and process handoff."""

import signal
from unittest.mock import MagicMock, patch

import pytest

from dblaunch.errors import LaunchError
from dblaunch.launcher import build_command, child_environment, run_client


def test_pgcli_passes_database_with_flag():
    argv = build_command("pgcli", "proxy.local", 5433, "reader", "orders")
    assert argv == ["pgcli", "-h", "proxy.local", "-p", "5433", "-U", "reader", "-d", "orders"]


@pytest.mark.parametrize("tool", ["psql", "other-client"])
def test_other_tools_take_database_positionally(tool):
    argv = build_command(tool, "proxy.local", 5433, "reader", "orders")
    assert argv == [tool, "-h", "proxy.local", "-p", "5433", "-U", "reader", "orders"]
    assert "-d" not in argv


def test_child_environment_adds_password():
    base = {"PATH": "/usr/bin"}
    env = child_environment(base, "s3cret")
    assert env == {"PATH": "/usr/bin", "PGPASSWORD": "s3cret"}
    assert base == {"PATH": "/usr/bin"}


def _popen(returncode):
    process = MagicMock()
    process.wait.return_value = returncode
    return process


@pytest.mark.parametrize("code", [0, 3])
def test_run_client_returns_exit_code(code):
    with patch("dblaunch.launcher.subprocess.Popen", return_value=_popen(code)) as popen:
        assert run_client(["psql", "db"], {"PGPASSWORD": "x"}) == code

    popen.assert_called_once_with(["psql", "db"], env={"PGPASSWORD": "x"})


def test_run_client_killed_by_signal():
    with patch("dblaunch.launcher.subprocess.Popen", return_value=_popen(-signal.SIGTERM)):
        assert run_client(["psql"], {}) == 128 + signal.SIGTERM


def test_run_client_spawn_failure():
    with patch(
        "dblaunch.launcher.subprocess.Popen",
        side_effect=FileNotFoundError(2, "No such file or directory"),
    ):
        with pytest.raises(LaunchError, match="No such file or directory"):
            run_client(["pgcli"], {})


def test_sigint_handler_restored_after_wait():
    before = signal.getsignal(signal.SIGINT)
    seen = []

    def wait():
        seen.append(signal.getsignal(signal.SIGINT))
        return 0

    process = MagicMock()
    process.wait.side_effect = wait
    with patch("dblaunch.launcher.subprocess.Popen", return_value=process):
        run_client(["psql"], {})

    assert seen and seen[0] is not before
    assert signal.getsignal(signal.SIGINT) is before


def test_sigint_handled_before_spawn():
    before = signal.getsignal(signal.SIGINT)
    seen = []

    def spawn(argv, env):
        seen.append(signal.getsignal(signal.SIGINT))
        return _popen(0)

    with patch("dblaunch.launcher.subprocess.Popen", side_effect=spawn):
        run_client(["psql"], {})

    assert seen and seen[0] is not before
    assert signal.getsignal(signal.SIGINT) is before


def test_sigint_handler_restored_after_spawn_failure():
    before = signal.getsignal(signal.SIGINT)
    with patch("dblaunch.launcher.subprocess.Popen", side_effect=OSError("boom")):
        with pytest.raises(LaunchError):
            run_client(["psql"], {})
    assert signal.getsignal(signal.SIGINT) is before
