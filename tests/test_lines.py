import numpy as np
import pytest

from blockfall.board import Board
from blockfall.lines import clear_and_collapse, clear_full_rows, find_full_rows


def _fill_row(board: Board, row: int, skip=()) -> None:
    for col in range(board.width):
        if col not in skip:
            board.set(col, row, 1)


def test_find_full_rows_is_ordered_top_to_bottom():
    board = Board()
    _fill_row(board, 19)
    _fill_row(board, 12)
    _fill_row(board, 15, skip=(4,))
    assert find_full_rows(board) == [12, 19]


def test_nothing_to_clear():
    board = Board()
    _fill_row(board, 19, skip=(11,))
    before = board.grid.copy()
    assert clear_full_rows(board) == 0
    assert np.array_equal(board.grid, before)


def test_single_row_clear_shifts_rows_above():
    board = Board()
    _fill_row(board, 19)
    board.set(0, 18, 2)
    board.set(5, 10, 3)
    assert clear_and_collapse(board, find_full_rows(board)) == 1
    assert board.get(0, 19) == 2
    assert board.get(5, 11) == 3
    assert board.occupied_count() == 2


def test_rows_above_drop_by_cleared_rows_beneath_them():
    board = Board()
    _fill_row(board, 19)
    _fill_row(board, 17)
    board.set(0, 18, 2)  # between the cleared rows
    board.set(3, 16, 3)  # above both
    before = board.occupied_count()
    rows = find_full_rows(board)
    assert clear_and_collapse(board, rows) == 2
    assert board.occupied_count() == before - 2 * board.width
    assert board.get(0, 19) == 2
    assert board.get(3, 18) == 3


def test_uses_rows_given_not_a_fresh_scan():
    board = Board()
    _fill_row(board, 19)
    _fill_row(board, 18)
    assert clear_and_collapse(board, [19]) == 1
    # The other full row moved down but was not part of this pass.
    assert find_full_rows(board) == [19]


def test_row_out_of_range_raises():
    with pytest.raises(IndexError):
        clear_and_collapse(Board(), [20])


def test_no_block_moves_up():
    board = Board()
    rng = np.random.default_rng(3)
    board.grid[8:, :] = rng.integers(0, 2, size=(12, board.width), dtype=np.uint8)
    _fill_row(board, 14)
    _fill_row(board, 17)
    before = board.grid.copy()
    rows = find_full_rows(board)
    kept = [row for row in range(board.height) if row not in rows]

    clear_and_collapse(board, rows)

    for index, old_row in enumerate(kept):
        new_row = index + len(rows)
        assert new_row >= old_row
        assert np.array_equal(board.grid[new_row], before[old_row])
    assert not board.grid[: len(rows)].any()
