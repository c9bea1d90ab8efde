"""Root conftest — launcher homes (dbconfig.json plus .env.<name> files)."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

SAMPLE_CONFIG = {
    "defaults": {
        "environment": "staging",
        "tool": "pgcli",
        "portAlias": "replica",
        "database": "orders",
    },
    "prompts": {"environment": True, "tool": True, "port": True, "database": True},
    "availableTools": ["pgcli", "psql"],
    "environments": {
        "production": {
            "portAliases": {"primary": 5432, "replica": 5433},
            "databases": ["orders", "billing"],
        },
        "staging": {
            "portAliases": {"primary": 6432, "replica": 6433},
            "databases": ["orders", "analytics"],
        },
    },
}

SECRETS = {
    "production": (
        "DB_READ_PROXY_HOST=proxy.prod.internal\n"
        "DB_READ_PROXY_USER=reader\n"
        "DB_READ_PROXY_PASSWORD=prod-secret\n"
    ),
    "staging": (
        "DB_READ_PROXY_HOST=proxy.staging.internal\n"
        "DB_READ_PROXY_USER=reader\n"
        "DB_READ_PROXY_PASSWORD=staging-secret\n"
    ),
}


def write_home(
    root: Path,
    config: dict | None = None,
    secrets: dict[str, str] | None = None,
) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "dbconfig.json").write_text(json.dumps(SAMPLE_CONFIG if config is None else config))
    for name, body in (SECRETS if secrets is None else secrets).items():
        (root / f".env.{name}").write_text(body)
    return root


@pytest.fixture(autouse=True)
def _clean_proxy_env(monkeypatch):
    for var in ("DB_READ_PROXY_HOST", "DB_READ_PROXY_USER", "DB_READ_PROXY_PASSWORD"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    root = write_home(tmp_path / "home")
    # Template files are never offered as environments.
    (root / ".env.staging.example").write_text("DB_READ_PROXY_HOST=example\n")
    monkeypatch.setenv("DBLAUNCH_HOME", str(root))
    return root


@pytest.fixture
def make_home(tmp_path, monkeypatch):
    """Build a launcher home with custom config/secrets and point DBLAUNCH_HOME at it."""

    def _make(config: dict | None = None, secrets: dict[str, str] | None = None) -> Path:
        root = write_home(tmp_path / "custom", config, secrets)
        monkeypatch.setenv("DBLAUNCH_HOME", str(root))
        return root

    return _make


@pytest.fixture
def sample_config() -> dict:
    return copy.deepcopy(SAMPLE_CONFIG)
