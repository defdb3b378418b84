from __future__ import annotations

import math
from dataclasses import dataclass

MAX_CARD_SIZE = 120
CARD_GAP = 12


@dataclass(frozen=True)
class GridLayout:
    columns: int
    rows: int
    card_size: int
    gap: int
    left: int
    top: int

    def cell(self, index: int) -> tuple[int, int, int, int]:
        """(x, y, w, h) of the square holding card `index`."""
        row, col = divmod(index, self.columns)
        step = self.card_size + self.gap
        return (self.left + col * step, self.top + row * step, self.card_size, self.card_size)

    @property
    def bottom(self) -> int:
        return self.top + self.rows * self.card_size + max(0, self.rows - 1) * self.gap


def grid_layout(
    count: int,
    width: int,
    top: int,
    bottom: int,
    max_card: int = MAX_CARD_SIZE,
    gap: int = CARD_GAP,
) -> GridLayout:
    """Square cards as large as the area allows.

    Every column count is tried; the winner is the largest card size, then the
    fewest empty cells, then the fewest rows.
    """
    avail_w = width - 2 * gap
    avail_h = bottom - top
    if count <= 0:
        return GridLayout(columns=1, rows=0, card_size=max_card, gap=gap, left=width // 2, top=top)

    best: tuple[int, int, int] | None = None  # (size, -empty, -rows)
    best_cols = 1
    for cols in range(1, count + 1):
        rows = math.ceil(count / cols)
        size = min(
            (avail_w - (cols - 1) * gap) // cols,
            (avail_h - (rows - 1) * gap) // rows,
            max_card,
        )
        key = (size, -(cols * rows - count), -rows)
        if best is None or key > best:
            best = key
            best_cols = cols

    assert best is not None
    size = max(1, best[0])
    rows = math.ceil(count / best_cols)
    grid_w = best_cols * size + (best_cols - 1) * gap
    return GridLayout(
        columns=best_cols,
        rows=rows,
        card_size=size,
        gap=gap,
        left=(width - grid_w) // 2,
        top=top,
    )
