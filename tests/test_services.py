import random

import pytest

from src.memory_match.app.state import Settings, load_settings
from src.memory_match.domain import (
    MATCH_SETTLE_DELAY,
    PALETTE,
    CardState,
    EndReason,
    GameSession,
    InsufficientPalette,
    Phase,
)
from src.memory_match.services import app_state, gameplay
from src.memory_match.services.config_loader import (
    get_app_title,
    load_default_settings_values,
    set_runtime_toml_bytes,
)

from .conftest import pairs_by_value


@pytest.fixture()
def seeded_store(store, scheduler):
    """時計を差し替えたセッションを事前に置いたストア。"""
    app_state.install_session(store, GameSession(2, minutes=1, scheduler=scheduler, rng=random.Random(3)))
    app_state.initialize_state(store)
    return store


class TestInitializeState:
    def test_creates_session_with_default_settings(self, store):
        app_state.initialize_state(store)

        session = store.get("session")
        assert isinstance(session, GameSession)
        assert session.total_pairs == 12
        assert session.remaining_seconds == 300
        assert store.get("settings") == {"pair_count": 12, "minutes": 5, "cols": 6}
        assert store.get("last_result") is None

    def test_does_not_overwrite_existing_session(self, seeded_store):
        existing = seeded_store.get("session")

        app_state.initialize_state(seeded_store)

        assert seeded_store.get("session") is existing

    def test_uses_runtime_config(self, store):
        set_runtime_toml_bytes(b"[settings]\npairs = 4\nminutes = 2\n")

        app_state.initialize_state(store)

        session = store.get("session")
        assert session.total_pairs == 4
        assert session.remaining_seconds == 120


class TestResetGame:
    def test_reset_reuses_session_with_new_pair_count(self, seeded_store):
        session = seeded_store.get("session")

        returned = app_state.reset_game(seeded_store, pair_count=3)

        assert returned is session
        assert session.total_pairs == 3
        assert session.phase is Phase.NOT_STARTED

    def test_reset_defaults_to_settings(self, seeded_store):
        seeded_store.set("settings", {"pair_count": 5, "minutes": 3, "cols": 6})

        session = app_state.reset_game(seeded_store)

        assert session.total_pairs == 5
        assert session.remaining_seconds == 180

    def test_reset_clears_last_result(self, seeded_store):
        gameplay.submit_game(seeded_store)
        assert gameplay.get_result(seeded_store) is not None

        app_state.reset_game(seeded_store)

        assert gameplay.get_result(seeded_store) is None

    def test_reset_creates_session_when_missing(self, store):
        session = app_state.reset_game(store, pair_count=2, minutes=1)

        assert store.get("session") is session
        assert session.total_pairs == 2

    def test_reset_propagates_insufficient_palette(self, seeded_store):
        with pytest.raises(InsufficientPalette):
            app_state.reset_game(seeded_store, pair_count=len(PALETTE) + 1)


class TestGameplay:
    def test_click_flow_records_result(self, seeded_store, fake_time):
        session = gameplay.get_session(seeded_store)
        for first, second in pairs_by_value(session).values():
            assert gameplay.handle_card_click(seeded_store, first)
            assert gameplay.handle_card_click(seeded_store, second)
            fake_time.advance(MATCH_SETTLE_DELAY)
            # 次のクリック前に判定が反映される
            gameplay.advance_time(seeded_store)

        result = gameplay.get_result(seeded_store)
        assert result is not None
        assert result.reason is EndReason.COMPLETED
        assert result.moves_count == 2
        assert not gameplay.is_running(seeded_store)

    def test_click_applies_due_settle_first(self, seeded_store, fake_time):
        session = gameplay.get_session(seeded_store)
        groups = list(pairs_by_value(session).values())
        gameplay.handle_card_click(seeded_store, groups[0][0])
        gameplay.handle_card_click(seeded_store, groups[1][0])
        fake_time.advance(1.0)

        assert gameplay.handle_card_click(seeded_store, groups[0][1]) is True
        assert session.cards[groups[0][0]].state is CardState.HIDDEN

    def test_advance_time_reports_activity(self, seeded_store, fake_time):
        assert gameplay.advance_time(seeded_store) is False
        gameplay.handle_card_click(seeded_store, 0)
        assert gameplay.is_running(seeded_store)

        fake_time.advance(1.0)

        assert gameplay.advance_time(seeded_store) is True
        assert gameplay.get_session(seeded_store).remaining_seconds == 59

    def test_timeout_records_result(self, seeded_store, fake_time):
        gameplay.handle_card_click(seeded_store, 0)
        fake_time.advance(61.0)
        gameplay.advance_time(seeded_store)

        result = gameplay.get_result(seeded_store)
        assert result.reason is EndReason.TIMED_OUT
        assert result.elapsed_seconds == 60

    def test_submit_game_returns_result(self, seeded_store):
        result = gameplay.submit_game(seeded_store)

        assert result is not None
        assert result.reason is EndReason.SUBMITTED
        assert gameplay.submit_game(seeded_store) == result

    def test_get_session_requires_initialization(self, store):
        with pytest.raises(RuntimeError):
            gameplay.get_session(store)


class TestConfig:
    def test_title_and_settings_from_toml(self):
        ok = set_runtime_toml_bytes('title = "果物あわせ"\n[settings]\npairs = 8\nminutes = 3\ncols = 4\n'.encode())

        assert ok is True
        assert get_app_title() == "果物あわせ"
        settings = load_settings()
        assert (settings.pair_count, settings.minutes, settings.cols) == (8, 3, 4)

    def test_invalid_toml_clears_runtime_config(self):
        set_runtime_toml_bytes(b'title = "x"\n')

        assert set_runtime_toml_bytes(b"title = = broken") is False
        assert get_app_title("default") == "default"

    def test_wrong_types_fall_back(self):
        set_runtime_toml_bytes(b'[settings]\npairs = "8"\nminutes = true\ncols = 0\n')

        assert load_default_settings_values() == {}
        assert load_settings() == Settings()

    def test_settings_clamp_pair_count_to_palette(self):
        assert Settings(pair_count=100).pair_count == len(PALETTE)
        assert Settings(pair_count=1).pair_count == 2
