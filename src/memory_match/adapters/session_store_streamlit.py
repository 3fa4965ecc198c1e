"""Streamlit セッション状態アダプタ。

目的:
- `st.session_state` を扱うのはこのアダプタと UI 層だけにする。
- GameSession は再実行（rerun）をまたいで `st.session_state` 上に生き続ける。
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from src.memory_match.app.ports.session_store import SessionStore


class StSessionStore(SessionStore):
    """Streamlit 実装の SessionStore。"""

    def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401 - UI 橋渡しのため Any 許容
        return st.session_state.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: ANN401 - UI 橋渡しのため Any 許容
        st.session_state[key] = value
