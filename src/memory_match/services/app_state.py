from __future__ import annotations

import logging

from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.app.state import load_settings
from src.memory_match.domain import GameResult, GameSession

logger = logging.getLogger(__name__)


def install_session(store: SessionStore, session: GameSession) -> None:
    """セッションをストアに保持し、終了時の結果を "last_result" に記録する購読を登録する。"""

    def _record(result: GameResult) -> None:
        store.set("last_result", result)

    session.on_ended(_record)
    store.set("session", session)


def initialize_state(store: SessionStore) -> None:
    """アプリ起動時に必要なセッション状態を初期化する。

    既に存在するキーは上書きせず、未定義のときのみ初期値を設定する。
    """
    if store.get("settings") is None:
        store.set("settings", load_settings().as_dict())
    if store.get("session") is None:
        settings = store.get("settings", {})
        session = GameSession(int(settings["pair_count"]), minutes=int(settings["minutes"]))
        install_session(store, session)
        store.set("last_result", None)
        logger.info("session created: pairs=%d", session.total_pairs)


def reset_game(store: SessionStore, pair_count: int | None = None, minutes: int | None = None) -> GameSession:
    """ゲーム状態をリセットし、新しい山で始め直す。

    引数が指定されればそれを優先し、未指定のときは現在の設定値を用いる。
    ペア数が多すぎる場合は InsufficientPalette をそのまま送出する（状態は変わらない）。
    """
    settings = store.get("settings") or load_settings().as_dict()
    pairs_val = int(pair_count) if pair_count is not None else int(settings["pair_count"])
    minutes_val = int(minutes) if minutes is not None else int(settings["minutes"])
    session: GameSession | None = store.get("session")
    if session is None:
        session = GameSession(pairs_val, minutes=minutes_val)
        install_session(store, session)
    else:
        session.reset(pairs_val, minutes=minutes_val)
    store.set("last_result", None)
    return session
