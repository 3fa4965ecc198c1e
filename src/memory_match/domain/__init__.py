"""ドメイン層（純粋ロジック/データモデル）。

提供物:
- 山札の生成 (deck)
- 星評価 (scoring)
- 遅延実行とカウントダウン (timing)
- ゲームセッションの状態機械 (session)
"""

from src.memory_match.domain.constants import (
    DEFAULT_PAIR_COUNT,
    GRID_COLS,
    MATCH_SETTLE_DELAY,
    MISMATCH_SETTLE_DELAY,
    PALETTE,
    TICK_INTERVAL,
    TOTAL_MINUTES,
)
from src.memory_match.domain.deck import Card, CardState, InsufficientPalette, build_deck, shuffle
from src.memory_match.domain.scoring import calculate_stars, format_time, minimal_moves, stars_to_string
from src.memory_match.domain.session import (
    EndReason,
    GameResult,
    GameSession,
    Phase,
    SessionSnapshot,
)
from src.memory_match.domain.timing import CountdownClock, ScheduledTask, Scheduler

__all__ = [
    # deck
    "Card",
    "CardState",
    "InsufficientPalette",
    "build_deck",
    "shuffle",
    # scoring
    "calculate_stars",
    "minimal_moves",
    "stars_to_string",
    "format_time",
    # timing
    "Scheduler",
    "ScheduledTask",
    "CountdownClock",
    # session
    "GameSession",
    "GameResult",
    "SessionSnapshot",
    "Phase",
    "EndReason",
    # constants
    "PALETTE",
    "DEFAULT_PAIR_COUNT",
    "TOTAL_MINUTES",
    "MATCH_SETTLE_DELAY",
    "MISMATCH_SETTLE_DELAY",
    "TICK_INTERVAL",
    "GRID_COLS",
]
