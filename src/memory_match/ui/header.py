from __future__ import annotations

from collections.abc import Callable

import streamlit as st


def render_header(
    on_submit: Callable[[], None],
    on_reset: Callable[[], None],
    *,
    ended: bool,
) -> None:
    """メインヘッダー（提出 + リセット）を描画する。

    Args:
        on_submit: その場でゲームを終了するコールバック。
        on_reset: 新しい山で始め直すコールバック。
        ended: 終了済みなら提出を無効化する。
    """
    c1, c2, _ = st.columns([1, 1, 8])
    with c1:
        if st.button("提出", disabled=ended):
            on_submit()
            st.rerun()
    with c2:
        if st.button("リセット"):
            on_reset()
            st.rerun()
