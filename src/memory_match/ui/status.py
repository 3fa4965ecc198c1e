from __future__ import annotations

from collections.abc import Callable

import streamlit as st

from src.memory_match.domain import EndReason, GameResult, GameSession, format_time, stars_to_string

REASON_LABELS: dict[EndReason, str] = {
    EndReason.COMPLETED: "クリア！",
    EndReason.SUBMITTED: "提出しました",
    EndReason.TIMED_OUT: "時間切れ",
}


def render_status(session: GameSession) -> None:
    """ステータス（手数・評価・残り時間・ペア）を描画する。"""
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("手数", session.moves_count)
    with c2:
        st.metric("評価", stars_to_string(session.stars))
    with c3:
        st.metric("残り時間", format_time(session.remaining_seconds))
    with c4:
        st.metric("ペア", f"{session.pairs_found}/{session.total_pairs}")


def render_result(result: GameResult, on_play_again: Callable[[], None]) -> None:
    """終了時の結果を描画する。"""
    label = REASON_LABELS.get(result.reason, result.reason.value)
    if result.reason is EndReason.COMPLETED:
        st.success(f"{label} すべてのペアをそろえました。")
    else:
        st.info(label)
    st.subheader("結果")
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("評価", stars_to_string(result.stars))
    with c2:
        st.metric("手数", result.moves_count)
    with c3:
        st.metric("ペア", f"{result.pairs_found}/{result.total_pairs}")
    with c4:
        st.metric("経過時間", format_time(result.elapsed_seconds))
    if st.button("もう一度", key="play-again"):
        on_play_again()
        st.rerun()
