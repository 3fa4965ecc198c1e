import logging

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.domain import InsufficientPalette
from src.memory_match.services import app_state, gameplay
from src.memory_match.services.config_loader import get_app_title
from src.memory_match.ui.board import render_board
from src.memory_match.ui.header import render_header
from src.memory_match.ui.sidebar import render_sidebar
from src.memory_match.ui.status import render_result, render_status

logger = logging.getLogger(__name__)


@st.fragment(run_every=1)
def _live_area(store: StSessionStore) -> None:
    """ステータスと盤面。1 秒ごとに再実行し、遅延処理（判定・カウントダウン）を進める。"""
    was_ended = gameplay.get_session(store).ended
    gameplay.advance_time(store)
    session = gameplay.get_session(store)
    if session.ended and not was_ended:
        # 時間切れ/クリアで結果表示へ切り替えるため全体を再実行
        st.rerun()
    render_status(session)
    st.divider()
    render_board(
        session.cards,
        int(store.get("settings", {}).get("cols", 6)),
        lambda card_id: gameplay.handle_card_click(store, card_id),
        disabled=session.ended,
    )


def _reset(store: StSessionStore) -> None:
    try:
        app_state.reset_game(store)
    except InsufficientPalette as e:
        st.error(str(e))


def main():
    default_title = "絵文字神経衰弱"
    st.set_page_config(page_title=default_title, layout="wide")
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        store = StSessionStore()
        app_state.initialize_state(store)
    except ValueError as e:
        logger.exception("initialization failed")
        st.error(f"ゲームの初期化に失敗しました: {e}")
        return

    st.title(get_app_title(default_title))

    # サイドバー: 設定 UI
    render_sidebar(store)

    session = gameplay.get_session(store)
    render_header(
        on_submit=lambda: gameplay.submit_game(store),
        on_reset=lambda: _reset(store),
        ended=session.ended,
    )

    result = gameplay.get_result(store)
    if result is not None:
        render_result(result, on_play_again=lambda: _reset(store))
        st.divider()

    _live_area(store)
