from __future__ import annotations

from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.domain import GameResult, GameSession, Phase

# UI コンポーネントからのイベント（カードクリック、提出、リセット、時間経過）を受け取り、
# セッションへの操作を一箇所に集約する。
# 本モジュールは UI フレームワークに依存しない。状態アクセスは SessionStore 経由で行う。


def get_session(store: SessionStore) -> GameSession:
    session: GameSession | None = store.get("session")
    if session is None:
        raise RuntimeError("session is not initialized; call initialize_state() first")
    return session


def advance_time(store: SessionStore) -> bool:
    """期限の来た遅延処理（判定反映・カウントダウン）を実行する。

    Returns:
        何か実行されたか（再描画が必要か）。
    """
    return get_session(store).scheduler.run_due() > 0


def handle_card_click(store: SessionStore, card_id: int) -> bool:
    """カードクリック時の処理を行う。

    振る舞い:
    - 先に期限の来た判定を反映してから選択する（判定済みなら次の選択を受け付ける）。
    - 受け付けたら True、無視されたら False。
    """
    advance_time(store)
    return get_session(store).select_card(card_id)


def submit_game(store: SessionStore) -> GameResult | None:
    """提出ボタン: その場で終了し、結果を返す。終了済みなら既存の結果を返す。"""
    session = get_session(store)
    advance_time(store)
    session.submit()
    return session.result()


def get_result(store: SessionStore) -> GameResult | None:
    return store.get("last_result")


def is_running(store: SessionStore) -> bool:
    """カウントダウン中（自動再描画が必要）かどうか。"""
    return get_session(store).phase is Phase.IN_PROGRESS
