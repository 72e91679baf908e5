"""Shared pytest fixtures for Tresor tests."""

from pathlib import Path
from typing import Iterator

import pytest


class ScriptedPrompt:
    """Password prompt that answers from a fixed script and records questions."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.messages: list[str] = []

    def __call__(self, message: str) -> str:
        self.messages.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


class TickingClock:
    """Clock advancing one second per call, starting at ``start``."""

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def __call__(self) -> float:
        current = self.now
        self.now += 1
        return float(current)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch) -> Iterator[None]:
    """Keep tests away from the real ~/.tresor settings and database."""
    from tresor.config import configure

    monkeypatch.setenv("TRESOR_CONFIG", str(tmp_path / "no-config.yaml"))
    for name in ("TRESOR_DB_PATH", "TRESOR_MASKED_VALUE", "TRESOR_LOG_LEVEL", "TRESOR_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    configure(None)
    yield
    configure(None)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a fresh database file."""
    return tmp_path / "vault" / "tresor.db"


@pytest.fixture
def sqlite_storage(db_path: Path):
    """Initialized SqliteStorage in a temporary directory."""
    from tresor.storage import SqliteStorage

    storage = SqliteStorage(db_path)
    storage.create_schema()
    yield storage
    storage.close()


@pytest.fixture
def memory_storage():
    """Empty InMemoryStorage."""
    from tresor.storage import InMemoryStorage

    return InMemoryStorage()


@pytest.fixture(params=["sqlite", "memory"])
def storage(request):
    """Each storage backend in turn."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def scripted_prompt():
    """The ScriptedPrompt class, for tests building their own VaultManager."""
    return ScriptedPrompt


@pytest.fixture
def make_vault(memory_storage, clock):
    """Factory building a VaultManager over in-memory storage with scripted passwords."""
    from tresor.vault import VaultManager

    def _make(*answers: str, storage=None) -> tuple:
        prompt = ScriptedPrompt(*answers)
        vault = VaultManager(
            storage if storage is not None else memory_storage,
            prompt=prompt,
            clock=clock,
        )
        return vault, prompt

    return _make
