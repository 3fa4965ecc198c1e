from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from src.memory_match.domain.constants import PALETTE

T = TypeVar("T")


class CardState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


@dataclass(frozen=True)
class Card:
    """盤面上の 1 枚。

    現状の契約:
    - id: 0 始まりの連番（盤面の並び順 = 行優先）
    - value: 絵文字
    - state: 状態の更新は GameSession のみが行う（置き換えで表現する）
    """

    id: int
    value: str
    state: CardState = CardState.HIDDEN


class InsufficientPalette(ValueError):
    """要求ペア数が絵文字の種類数を超えている。"""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"ペア数 {requested} に対して絵文字が {available} 種類しかありません。")
        self.requested = requested
        self.available = available


def shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """Fisher–Yates でその場シャッフルし、同じシーケンスを返す。"""
    r = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = r.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def build_deck(
    pair_count: int,
    palette: Sequence[str] = PALETTE,
    rng: random.Random | None = None,
) -> list[Card]:
    """pair_count 種類の絵文字を 2 枚ずつ並べたシャッフル済みの山を返す。

    契約:
    - pair_count < 1 は ValueError
    - pair_count が palette の種類数を超える場合は InsufficientPalette（山は作らない）
    - 使う絵文字の並びと最終配置はそれぞれ独立にシャッフルする
    """
    if pair_count < 1:
        raise ValueError(f"ペア数は 1 以上が必要です: {pair_count}")
    if pair_count > len(palette):
        raise InsufficientPalette(pair_count, len(palette))
    unique = shuffle(list(palette[:pair_count]), rng)
    values = shuffle(unique + unique, rng)
    return [Card(id=idx, value=v) for idx, v in enumerate(values)]
