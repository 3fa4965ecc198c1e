from __future__ import annotations

# 最少手数からの超過手数（以下）→ 星の数。該当しなければ 1。
STAR_THRESHOLDS: tuple[tuple[int, int], ...] = ((0, 5), (2, 4), (4, 3), (6, 2))
MAX_STARS = 5


def minimal_moves(pair_count: int) -> int:
    """ミスなしで揃えた場合の手数（1 ペア 1 手）。"""
    return pair_count


def calculate_stars(moves_used: int, pair_count: int) -> int:
    """使った手数とペア数から星 (1..5) を返す。手数に対して単調非増加。"""
    if moves_used < 0:
        raise ValueError(f"moves_used must be >= 0: {moves_used}")
    if pair_count < 1:
        raise ValueError(f"pair_count must be >= 1: {pair_count}")
    over = moves_used - minimal_moves(pair_count)
    for limit, stars in STAR_THRESHOLDS:
        if over <= limit:
            return stars
    return 1


def stars_to_string(star_count: int) -> str:
    star_count = max(0, min(MAX_STARS, star_count))
    return "★" * star_count + "☆" * (MAX_STARS - star_count)


def format_time(total_seconds: int) -> str:
    """秒数を MM:SS に整形する（負数は 0 扱い）。"""
    total_seconds = max(0, int(total_seconds))
    mm, ss = divmod(total_seconds, 60)
    return f"{mm:02d}:{ss:02d}"
