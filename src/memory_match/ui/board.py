from __future__ import annotations

from collections.abc import Callable, Sequence

import streamlit as st

from src.memory_match.domain import Card, CardState

HIDDEN_LABEL = "❓"


def card_label(card: Card) -> str:
    """伏せ札は ❓、めくり済み/一致済みは絵文字を表示する。"""
    return HIDDEN_LABEL if card.state is CardState.HIDDEN else card.value


def render_board(
    cards: Sequence[Card],
    cols: int,
    on_click: Callable[[int], None],
    *,
    disabled: bool = False,
) -> None:
    """盤面を描画し、クリックで on_click(card_id) を呼び出す。

    - 伏せ札のみ押下可能（めくり済み・一致済みは無効化）。
    - disabled=True のときは全カードを無効化する（終了後）。
    """
    cols_dim = max(1, int(cols))
    for start in range(0, len(cards), cols_dim):
        row = cards[start : start + cols_dim]
        columns = st.columns(cols_dim)
        for c, card in enumerate(row):
            if columns[c].button(
                card_label(card),
                key=f"card-{card.id}",
                use_container_width=True,
                type="primary" if card.state is CardState.MATCHED else "secondary",
                disabled=disabled or card.state is not CardState.HIDDEN,
            ):
                on_click(card.id)
                st.rerun(scope="fragment")
