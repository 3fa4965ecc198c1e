from __future__ import annotations

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.app.state import load_settings
from src.memory_match.domain import PALETTE
from src.memory_match.services.config_loader import set_runtime_toml_bytes


def render_sidebar(store: StSessionStore) -> None:
    """サイドバーの設定 UI を描画する。

    - ペア数の変更は次のリセットから反映する。
    - config.toml をアップロードすると既定値（タイトル・ペア数・制限時間・列数）を差し替える。
    """
    with st.sidebar:
        st.subheader("ゲーム設定")
        settings: dict[str, int] = store.get("settings", {}) or {}
        pairs = st.number_input(
            "ペア数",
            min_value=2,
            max_value=len(PALETTE),
            value=int(settings.get("pair_count", 12)),
            step=1,
            help="リセット後の新しいゲームから反映されます。",
        )
        settings["pair_count"] = int(pairs)
        store.set("settings", settings)
        st.caption(f"制限時間: {int(settings.get('minutes', 5))} 分")

        st.divider()
        uploaded = st.file_uploader("設定ファイル (config.toml)", type=["toml"])
        if uploaded is not None and store.get("config_name") != uploaded.name:
            if set_runtime_toml_bytes(uploaded.getvalue()):
                store.set("settings", load_settings().as_dict())
                st.success("設定を読み込みました。リセットで反映されます。")
            else:
                st.error("config.toml を解釈できませんでした。")
            store.set("config_name", uploaded.name)
