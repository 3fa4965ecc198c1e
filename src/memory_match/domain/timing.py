"""
遅延実行とカウントダウン。

目的:
- 時刻の進行を呼び出し側（UI の再描画や テストの疑似時計）に委ねる非ブロッキングなスケジューラを提供する。
- time.sleep やスレッドは使わない。`Scheduler.run_due()` が呼ばれた時点で期限の来たコールバックを実行する。

契約:
- コールバックは期限順、同時刻なら登録順に実行する。
- 取り消し済みのタスクは実行しない。
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from src.memory_match.domain.constants import TICK_INTERVAL

TimeSource = Callable[[], float]


@dataclass(order=True)
class ScheduledTask:
    """登録済みの遅延コールバック。`cancel()` で取り消す。"""

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    def __init__(self, now: TimeSource = time.monotonic) -> None:
        self._now = now
        self._queue: list[ScheduledTask] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now()

    def call_at(self, when: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(due=when, seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, task)
        return task

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        return self.call_at(self._now() + max(0.0, delay), callback)

    def pending(self) -> int:
        """未実行かつ未取り消しのタスク数。"""
        return sum(1 for t in self._queue if not t.cancelled)

    def cancel_all(self) -> None:
        for task in self._queue:
            task.cancel()
        self._queue.clear()

    def run_due(self) -> int:
        """現在時刻までに期限の来たタスクを実行し、実行数を返す。

        実行中に登録されたタスクも、期限が現在時刻以前なら同じ呼び出しで実行する
        （再描画の間隔が空いた場合の追いつき）。
        """
        now = self._now()
        ran = 0
        while self._queue and self._queue[0].due <= now:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        return ran


class CountdownClock:
    """1 秒刻みのカウントダウン。

    - start() は既存の刻みを取り消してから登録し直す（刻みが二重にならない）。
    - 残りが 0 以下になったら 0 に丸めて停止し、on_timeout を 1 度だけ呼ぶ。
    - 次の刻みは前回の期限 + interval に登録する（実時間とずれない）。
    """

    def __init__(
        self,
        scheduler: Scheduler,
        total_seconds: int,
        on_timeout: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
        interval: float = TICK_INTERVAL,
    ) -> None:
        self._scheduler = scheduler
        self._total_seconds = int(total_seconds)
        self._remaining = int(total_seconds)
        self._on_timeout = on_timeout
        self._on_tick = on_tick
        self._interval = interval
        self._task: ScheduledTask | None = None
        self._next_due: float | None = None

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        self.stop()
        self._next_due = self._scheduler.now() + self._interval
        self._task = self._scheduler.call_at(self._next_due, self._tick)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
        self._task = None
        self._next_due = None

    def reset(self, total_seconds: int | None = None) -> None:
        self.stop()
        if total_seconds is not None:
            self._total_seconds = int(total_seconds)
        self._remaining = self._total_seconds

    def _tick(self) -> None:
        self._task = None
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self.stop()
            self._on_timeout()
            return
        assert self._next_due is not None
        self._next_due += self._interval
        self._task = self._scheduler.call_at(self._next_due, self._tick)
        if self._on_tick is not None:
            self._on_tick(self._remaining)
