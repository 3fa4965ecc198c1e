"""
共通定数
- コメントは現状の目的・契約・使い方のみを記載する。
"""

# カードに使う絵文字（先頭から必要なペア数だけ使う）
PALETTE: tuple[str, ...] = (
    "🍎", "🍌", "🍇", "🍓", "🍒", "🍑", "🥝", "🍍",
    "🍋", "🍉", "🥥", "🍐", "🫐", "🥭", "🥕", "🌽",
    "🍔", "🍟", "🍕", "🌭", "🍗", "🍣", "🍙", "🍤",
)  # fmt: skip

# 既定のペア数（12 ペア = 24 枚）
DEFAULT_PAIR_COUNT: int = 12

# 制限時間（分）
TOTAL_MINUTES: int = 5

# 2 枚目をめくってから結果を反映するまでの遅延秒（一致 / 不一致）
MATCH_SETTLE_DELAY: float = 0.35
MISMATCH_SETTLE_DELAY: float = 0.7

# カウントダウンの刻み（秒）
TICK_INTERVAL: float = 1.0

# 盤面の列数（行数はカード枚数から決まる）
GRID_COLS: int = 6
