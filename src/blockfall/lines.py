"""Full-row detection and collapse."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .board import Board


def find_full_rows(board: Board) -> List[int]:
    """Return the indices of rows with every column occupied, top to bottom."""

    full = np.all(board.grid != 0, axis=1)
    return [int(row) for row in np.flatnonzero(full)]


def clear_and_collapse(board: Board, rows: Sequence[int]) -> int:
    """Remove ``rows`` and drop everything above them.

    ``rows`` is taken as given, from a scan made before any collapsing.
    Removing row ``r`` moves each row above it down by one, so a row above
    several cleared rows ends up lower by the number of cleared rows beneath
    it.  Rows that fill up through compaction are left for the next scan.

    Raises:
        IndexError: If a row index is outside the board.
    """

    if not len(rows):
        return 0
    for row in rows:
        if not 0 <= row < board.height:
            raise IndexError(f"Row {row} out of bounds")

    cleared = np.zeros(board.height, dtype=bool)
    cleared[list(rows)] = True
    count = int(np.count_nonzero(cleared))
    remaining = board.grid[~cleared]
    new_rows = np.zeros((count, board.width), dtype=board.grid.dtype)
    board.grid = np.vstack((new_rows, remaining))
    return count


def clear_full_rows(board: Board) -> int:
    """Clear completed rows and return how many were removed."""

    return clear_and_collapse(board, find_full_rows(board))


__all__ = ["find_full_rows", "clear_and_collapse", "clear_full_rows"]
