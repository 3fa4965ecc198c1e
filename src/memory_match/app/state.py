"""アプリケーションの設定モデル定義。

目的:
- UI（サイドバー）とサービス層の境界で用いる明示的な設定構造を提供する。

使い方:
- `load_default_settings()` で TOML 由来の既定値を反映した Settings を得る。
- サービス層は `Settings.as_dict()` をセッションストアの "settings" に保存する。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from src.memory_match.domain import DEFAULT_PAIR_COUNT, GRID_COLS, PALETTE, TOTAL_MINUTES


@dataclass
class Settings:
    """ゲームの設定。

    現状の契約:
    - pair_count は 2..len(PALETTE) に丸める。
    - minutes は制限時間（分）。
    - cols は盤面の列数。
    """

    pair_count: int = DEFAULT_PAIR_COUNT
    minutes: int = TOTAL_MINUTES
    cols: int = GRID_COLS

    def __post_init__(self) -> None:
        self.pair_count = max(2, min(len(PALETTE), int(self.pair_count)))
        self.minutes = max(1, int(self.minutes))
        self.cols = max(1, int(self.cols))

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def load_settings() -> Settings:
    """外部設定から Settings を読み込む（フォールバックあり）。"""
    try:
        from src.memory_match.services.config_loader import load_default_settings

        return load_default_settings()
    except (TypeError, ValueError):
        # 何らかの読み込み失敗時はコード既定値
        return Settings()
