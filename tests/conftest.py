"""Shared fixtures for the interaction store tests."""

from __future__ import annotations

from typing import Any

import pytest

from agent_interactions.config.settings import get_settings
from agent_interactions.database.engine import get_engine
from agent_interactions.kv_context import MemoryKeyValueContext
from agent_interactions.store import InteractionStore

START_MS = 1_700_000_000_000


class FakeClock:
    """Deterministic millisecond clock; advances by ``step`` on every read."""

    def __init__(self, start: int = START_MS, step: int = 1) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


class RecordingContext(MemoryKeyValueContext):
    """Memory context that counts writes."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        super().__init__(initial)
        self.set_calls = 0

    def set(self, key: str, value: Any) -> None:
        self.set_calls += 1
        super().set(key, value)


class FailingContext(MemoryKeyValueContext):
    """Memory context whose writes always fail, like an unavailable disk."""

    def set(self, key: str, value: Any) -> None:
        raise OSError("storage unavailable")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every setting at the test's temporary directory."""
    monkeypatch.setenv("WORKSPACE_DIR", str(tmp_path / "workspace"))
    monkeypatch.setenv("GLOBAL_STORAGE_DIR", str(tmp_path / "global"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{(tmp_path / 'interactions.db').as_posix()}")
    for name in ("STORAGE_CONTEXT", "KV_BACKEND", "WORKSPACE_STORAGE_DIRNAME", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def context() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def store(context, clock) -> InteractionStore:
    return InteractionStore(context, clock=clock)
