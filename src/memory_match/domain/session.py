"""
ゲームセッション（めくり/一致判定の状態機械・手数・制限時間）。

使い方:
- `GameSession(pair_count)` で生成し、`select_card(card_id)` / `submit()` / `reset(pair_count)` を呼ぶ。
- 時間の進行はホスト側が `session.scheduler.run_due()` を呼んで反映する。
- 描画側は `on_state_change` と `on_ended` でスナップショット/結果を受け取る。

現状の契約:
- 終了 (ENDED) 後は状態を変更しない。
- 判定待ち (locked) の間、不正な選択（めくり済み・一致済み・終了後）は例外にせず無視する。
- 判定待ちのコールバックが終了後に発火しても何もしない。
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from src.memory_match.domain.constants import (
    DEFAULT_PAIR_COUNT,
    MATCH_SETTLE_DELAY,
    MISMATCH_SETTLE_DELAY,
    PALETTE,
    TOTAL_MINUTES,
)
from src.memory_match.domain.deck import Card, CardState, build_deck
from src.memory_match.domain.scoring import calculate_stars
from src.memory_match.domain.timing import CountdownClock, ScheduledTask, Scheduler

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


class EndReason(str, Enum):
    COMPLETED = "completed"
    SUBMITTED = "submitted"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class SessionSnapshot:
    """描画用のセッション状態のコピー。"""

    cards: tuple[Card, ...]
    selection: tuple[int, ...]
    moves_count: int
    pairs_found: int
    total_pairs: int
    remaining_seconds: int
    started: bool
    locked: bool
    phase: Phase
    end_reason: EndReason | None


@dataclass(frozen=True)
class GameResult:
    reason: EndReason
    stars: int
    moves_count: int
    pairs_found: int
    total_pairs: int
    elapsed_seconds: int


StateListener = Callable[[SessionSnapshot], None]
EndedListener = Callable[[GameResult], None]


class GameSession:
    def __init__(
        self,
        pair_count: int = DEFAULT_PAIR_COUNT,
        *,
        minutes: int = TOTAL_MINUTES,
        palette: Sequence[str] = PALETTE,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        match_delay: float = MATCH_SETTLE_DELAY,
        mismatch_delay: float = MISMATCH_SETTLE_DELAY,
    ) -> None:
        self.scheduler = scheduler or Scheduler()
        self._palette = tuple(palette)
        self._rng = rng
        self._match_delay = match_delay
        self._mismatch_delay = mismatch_delay
        self._state_listeners: list[StateListener] = []
        self._ended_listeners: list[EndedListener] = []
        self._settle_task: ScheduledTask | None = None
        self._clock = CountdownClock(
            self.scheduler,
            int(minutes) * 60,
            on_timeout=self._on_timeout,
            on_tick=lambda _remaining: self._notify(),
        )
        self._install(build_deck(pair_count, self._palette, self._rng))

    # ---- 状態 ----

    def _install(self, deck: list[Card]) -> None:
        self._cards: list[Card] = deck
        self._selection: list[int] = []
        self._moves_count = 0
        self._pairs_found = 0
        self._total_pairs = len(deck) // 2
        self._locked = False
        self._phase = Phase.NOT_STARTED
        self._end_reason: EndReason | None = None

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def selection(self) -> tuple[int, ...]:
        return tuple(self._selection)

    @property
    def moves_count(self) -> int:
        return self._moves_count

    @property
    def pairs_found(self) -> int:
        return self._pairs_found

    @property
    def total_pairs(self) -> int:
        return self._total_pairs

    @property
    def remaining_seconds(self) -> int:
        return self._clock.remaining_seconds

    @property
    def total_seconds(self) -> int:
        return self._clock.total_seconds

    @property
    def elapsed_seconds(self) -> int:
        return self._clock.total_seconds - self._clock.remaining_seconds

    @property
    def started(self) -> bool:
        return self._phase is not Phase.NOT_STARTED

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def end_reason(self) -> EndReason | None:
        return self._end_reason

    @property
    def ended(self) -> bool:
        return self._phase is Phase.ENDED

    @property
    def stars(self) -> int:
        """現在の手数での星（表示用に毎手再計算する）。"""
        return calculate_stars(self._moves_count, self._total_pairs)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            cards=tuple(self._cards),
            selection=tuple(self._selection),
            moves_count=self._moves_count,
            pairs_found=self._pairs_found,
            total_pairs=self._total_pairs,
            remaining_seconds=self._clock.remaining_seconds,
            started=self.started,
            locked=self._locked,
            phase=self._phase,
            end_reason=self._end_reason,
        )

    def result(self) -> GameResult | None:
        """終了していれば結果を返す。未終了なら None。"""
        if self._end_reason is None:
            return None
        return GameResult(
            reason=self._end_reason,
            stars=self.stars,
            moves_count=self._moves_count,
            pairs_found=self._pairs_found,
            total_pairs=self._total_pairs,
            elapsed_seconds=self.elapsed_seconds,
        )

    # ---- 通知 ----

    def on_state_change(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def on_ended(self, listener: EndedListener) -> None:
        self._ended_listeners.append(listener)

    def _notify(self) -> None:
        if not self._state_listeners:
            return
        snap = self.snapshot()
        for listener in list(self._state_listeners):
            listener(snap)

    # ---- 操作 ----

    def select_card(self, card_id: int) -> bool:
        """カードをめくる。受け付けた場合 True、無視した場合 False を返す。"""
        if self._phase is Phase.ENDED or self._locked:
            logger.debug("select_card(%s) ignored: phase=%s locked=%s", card_id, self._phase.value, self._locked)
            return False
        if not 0 <= card_id < len(self._cards):
            logger.debug("select_card(%s) ignored: unknown card", card_id)
            return False
        card = self._cards[card_id]
        if card.state is not CardState.HIDDEN:
            logger.debug("select_card(%s) ignored: state=%s", card_id, card.state.value)
            return False

        if self._phase is Phase.NOT_STARTED:
            self._phase = Phase.IN_PROGRESS
            self._clock.start()
            logger.info("session started: pairs=%d seconds=%d", self._total_pairs, self._clock.total_seconds)

        self._cards[card_id] = replace(card, state=CardState.REVEALED)
        self._selection.append(card_id)

        if len(self._selection) == 1:
            self._notify()
            return True

        # 2 枚目: 判定が終わるまで入力を止める
        self._locked = True
        self._moves_count += 1
        first_id, second_id = self._selection
        if self._cards[first_id].value == self._cards[second_id].value:
            self._settle_task = self.scheduler.call_later(
                self._match_delay, lambda: self._settle_match(first_id, second_id)
            )
        else:
            self._settle_task = self.scheduler.call_later(
                self._mismatch_delay, lambda: self._settle_mismatch(first_id, second_id)
            )
        self._notify()
        return True

    def _settle_match(self, first_id: int, second_id: int) -> None:
        self._settle_task = None
        if self._phase is Phase.ENDED:
            return
        for cid in (first_id, second_id):
            self._cards[cid] = replace(self._cards[cid], state=CardState.MATCHED)
        self._pairs_found += 1
        self._clear_selection()
        logger.debug("match: %s/%s (%d/%d)", first_id, second_id, self._pairs_found, self._total_pairs)
        if self._pairs_found == self._total_pairs:
            self._end(EndReason.COMPLETED)
            return
        self._notify()

    def _settle_mismatch(self, first_id: int, second_id: int) -> None:
        self._settle_task = None
        if self._phase is Phase.ENDED:
            return
        for cid in (first_id, second_id):
            self._cards[cid] = replace(self._cards[cid], state=CardState.HIDDEN)
        self._clear_selection()
        logger.debug("mismatch: %s/%s", first_id, second_id)
        self._notify()

    def _clear_selection(self) -> None:
        self._selection.clear()
        self._locked = False

    def _on_timeout(self) -> None:
        if self._phase is Phase.ENDED:
            return
        self._end(EndReason.TIMED_OUT)

    def submit(self) -> bool:
        """その場で終了する。全ペア取得済みなら COMPLETED、それ以外は SUBMITTED。

        判定待ちのコールバックは取り消す（途中の判定は反映しない）。
        """
        if self._phase is Phase.ENDED:
            return False
        reason = EndReason.COMPLETED if self._pairs_found == self._total_pairs else EndReason.SUBMITTED
        self._end(reason)
        return True

    def _end(self, reason: EndReason) -> None:
        self._phase = Phase.ENDED
        self._end_reason = reason
        self._clock.stop()
        self._cancel_settle()
        result = self.result()
        assert result is not None
        logger.info(
            "session ended: reason=%s moves=%d pairs=%d/%d stars=%d elapsed=%ds",
            reason.value,
            result.moves_count,
            result.pairs_found,
            result.total_pairs,
            result.stars,
            result.elapsed_seconds,
        )
        self._notify()
        for listener in list(self._ended_listeners):
            listener(result)

    def _cancel_settle(self) -> None:
        if self._settle_task is not None:
            self._settle_task.cancel()
            self._settle_task = None

    def reset(self, pair_count: int | None = None, *, minutes: int | None = None) -> None:
        """新しい山でゲームを初期状態に戻す。

        ペア数の検証（InsufficientPalette）は現在の状態を破棄する前に行う。
        """
        count = self._total_pairs if pair_count is None else pair_count
        deck = build_deck(count, self._palette, self._rng)
        self._cancel_settle()
        self.scheduler.cancel_all()
        self._clock.reset(None if minutes is None else int(minutes) * 60)
        self._install(deck)
        logger.info("session reset: pairs=%d seconds=%d", self._total_pairs, self._clock.total_seconds)
        self._notify()

    def close(self) -> None:
        """予約済みの処理と購読者をすべて破棄する（以後このインスタンスは使わない）。"""
        self._cancel_settle()
        self._clock.stop()
        self.scheduler.cancel_all()
        self._state_listeners.clear()
        self._ended_listeners.clear()
