import pytest

from src.memory_match.domain import calculate_stars, format_time, minimal_moves, stars_to_string


@pytest.mark.parametrize(
    ("moves", "expected"),
    [(12, 5), (11, 5), (13, 4), (14, 4), (15, 3), (16, 3), (17, 2), (18, 2), (19, 1), (100, 1)],
)
def test_stars_for_twelve_pairs(moves, expected):
    assert calculate_stars(moves, 12) == expected


def test_minimal_moves_is_pair_count():
    assert minimal_moves(12) == 12


@pytest.mark.parametrize("pair_count", [1, 2, 8, 12, 24])
def test_stars_are_bounded_and_non_increasing(pair_count):
    previous = 5
    for moves in range(0, pair_count + 20):
        stars = calculate_stars(moves, pair_count)
        assert 1 <= stars <= 5
        assert stars <= previous
        previous = stars


def test_invalid_inputs_raise():
    with pytest.raises(ValueError):
        calculate_stars(-1, 12)
    with pytest.raises(ValueError):
        calculate_stars(3, 0)


def test_stars_to_string():
    assert stars_to_string(5) == "★★★★★"
    assert stars_to_string(3) == "★★★☆☆"
    assert stars_to_string(1) == "★☆☆☆☆"


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (60, "01:00"), (300, "05:00"), (-3, "00:00")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected
