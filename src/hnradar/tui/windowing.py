from typing import Tuple


def window(total: int, cursor: int, rows_per_item: int, available_rows: int) -> Tuple[int, int]:
    """
    Computes the slice [start, end) of a list that fits into the viewport,
    keeping the cursor item centred where possible.

    Centring alone would cut the window short near the tail of the list, so
    the end is clamped first and the start re-derived from it.
    Non-positive `available_rows` means the height is unknown: everything is
    shown. When not even one item fits, the cursor item is shown alone.
    """
    assert total >= 0 and cursor >= 0, "total and cursor must be non-negative"

    if total == 0:
        return 0, 0

    cursor = min(cursor, total - 1)

    if available_rows <= 0:
        return 0, total

    max_visible = available_rows // max(rows_per_item, 1)
    if max_visible >= total:
        return 0, total
    if max_visible < 1:
        return cursor, cursor + 1

    # Half the window (rounded up) sits above the cursor.
    if max_visible > 1:
        start = max(cursor - (max_visible + 1) // 2, 0)
    else:
        start = cursor
    end = start + max_visible
    if end > total:
        end = total
        start = max(end - max_visible, 0)

    return start, end
