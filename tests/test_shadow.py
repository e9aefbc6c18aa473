from blockfall.board import Board
from blockfall.shadow import compute_shadow, drop_distance
from blockfall.tetromino import Piece, TetrominoType


def test_shadow_on_empty_board_reaches_floor():
    board = Board()
    piece = Piece(TetrominoType.O, x=6, y=2)
    assert drop_distance(piece, board) == 16
    assert compute_shadow(piece, board) == {(6, 18), (6, 19), (7, 18), (7, 19)}


def test_shadow_rests_on_settled_blocks():
    board = Board()
    board.set(6, 10, 1)
    piece = Piece(TetrominoType.O, x=6, y=2)
    assert compute_shadow(piece, board) == {(6, 8), (6, 9), (7, 8), (7, 9)}


def test_no_shadow_when_piece_cannot_fall():
    board = Board()
    piece = Piece(TetrominoType.O, x=6, y=18)
    assert compute_shadow(piece, board) == frozenset()


def test_shadow_skips_cells_covered_by_the_piece():
    board = Board()
    piece = Piece(TetrominoType.I, x=3, y=16)  # covers rows 15..18
    assert compute_shadow(piece, board) == {(3, 19)}


def test_shadow_lies_below_piece_and_off_settled_cells():
    board = Board()
    for x, y in [(4, 15), (5, 12), (6, 17), (7, 19)]:
        board.set(x, y, 2)
    for kind in TetrominoType:
        piece = Piece(kind, x=5, y=3)
        shadow = compute_shadow(piece, board)
        columns = {x: y for x, y in piece.cells()}
        for x, y in shadow:
            assert x in columns
            assert y > min(py for px, py in piece.cells() if px == x)
            assert not board.is_occupied(x, y)


def test_exclude_ignores_painted_footprint():
    board = Board()
    piece = Piece(TetrominoType.O, x=6, y=2)
    for x, y in piece.cells():
        board.set(x, y, 1)
    assert compute_shadow(piece, board) == frozenset()
    shadow = compute_shadow(piece, board, exclude=piece.cells())
    assert shadow == {(6, 18), (6, 19), (7, 18), (7, 19)}
