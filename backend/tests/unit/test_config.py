"""Settings.from_env: defaults and WINNERS_LIMIT parsing."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from core.config import DEFAULT_WINNERS_LIMIT, Settings


def test_defaults(monkeypatch):
    for name in ("APP_NAME", "ENV", "DATABASE_URL", "LOG_LEVEL", "WINNERS_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.database_url == "sqlite+aiosqlite:///./app.db"
    assert s.log_level == "INFO"
    assert s.winners_limit == DEFAULT_WINNERS_LIMIT == 3


def test_winners_limit_from_env(monkeypatch):
    monkeypatch.setenv("WINNERS_LIMIT", "5")
    assert Settings.from_env().winners_limit == 5


def test_invalid_winners_limit_falls_back(monkeypatch):
    for raw in ("0", "-2", "three", " "):
        monkeypatch.setenv("WINNERS_LIMIT", raw)
        assert Settings.from_env().winners_limit == DEFAULT_WINNERS_LIMIT


def test_database_url_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    assert Settings.from_env().database_url == "sqlite+aiosqlite:///:memory:"
