import pytest

from hnradar.tui.windowing import window


@pytest.mark.parametrize(
    "cursor, expected",
    [
        (0, (0, 9)),
        (19, (11, 20)),
        (10, (5, 14)),
    ],
)
def test_window_centres_on_cursor(cursor, expected):
    assert window(20, cursor, 1, 9) == expected


@pytest.mark.parametrize("cursor", [0, 2, 4])
def test_window_never_exceeds_total(cursor):
    assert window(5, cursor, 1, 9) == (0, 5)


def test_window_always_contains_cursor():
    """Bounds hold for every list length, cursor and height combination."""
    for total in range(1, 30):
        for rows in range(1, 25):
            for cursor in range(total):
                start, end = window(total, cursor, 1, rows)
                assert 0 <= start <= cursor < end <= total
                assert end - start == min(rows, total)


def test_window_keeps_full_size_near_tail():
    # Clamping only the end would give (14, 20) here.
    assert window(20, 18, 1, 8) == (12, 20)


def test_window_empty_list():
    assert window(0, 0, 1, 10) == (0, 0)
    assert window(0, 0, 3, 0) == (0, 0)


def test_window_unknown_height_shows_everything():
    assert window(20, 7, 3, 0) == (0, 20)
    assert window(20, 7, 3, -4) == (0, 20)


def test_window_multi_row_items():
    # 10 rows fit three 3-row items
    assert window(20, 0, 3, 10) == (0, 3)
    assert window(20, 10, 3, 10) == (8, 11)


def test_window_too_small_for_one_item_shows_cursor():
    assert window(20, 7, 3, 2) == (7, 8)


def test_window_clamps_cursor_past_end():
    assert window(5, 9, 1, 3) == (2, 5)


def test_window_rejects_negative_input():
    with pytest.raises(AssertionError):
        window(-1, 0, 1, 5)
