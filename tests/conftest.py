"""Test session configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from brili.config import CONFIG_ENV, ENGINE_ENV, LOG_LEVEL_ENV
from tests.helpers.engines import FakeEngine
from tests.helpers.programs import ADD_PROGRAM


@pytest.fixture(autouse=True)
def _clean_brili_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests must not pick up a developer's brili settings."""
    for name in (CONFIG_ENV, ENGINE_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Provide a fresh recording engine."""
    return FakeEngine()


@pytest.fixture
def program_file(tmp_path: Path) -> Path:
    """Write a small JSON Bril program and return its path."""
    path = tmp_path / "add.json"
    path.write_text(json.dumps(ADD_PROGRAM))
    return path
