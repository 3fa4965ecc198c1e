from __future__ import annotations

import random
from typing import Any

import pytest

from src.memory_match.domain import GameSession, Scheduler
from src.memory_match.services.config_loader import set_runtime_config


class FakeTime:
    """テスト用の手動で進める時計。"""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DictSessionStore:
    """dict 実装の SessionStore。"""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value


def pairs_by_value(session: GameSession) -> dict[str, list[int]]:
    out: dict[str, list[int]] = {}
    for card in session.cards:
        out.setdefault(card.value, []).append(card.id)
    return out


@pytest.fixture(autouse=True)
def _clear_runtime_config():
    set_runtime_config(None)
    yield
    set_runtime_config(None)


@pytest.fixture()
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture()
def scheduler(fake_time: FakeTime) -> Scheduler:
    return Scheduler(fake_time)


@pytest.fixture()
def make_session(scheduler: Scheduler):
    def _make(pair_count: int = 12, minutes: int = 5) -> GameSession:
        return GameSession(pair_count, minutes=minutes, scheduler=scheduler, rng=random.Random(7))

    return _make


@pytest.fixture()
def store() -> DictSessionStore:
    return DictSessionStore()
