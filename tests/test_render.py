import numpy as np

from blockfall.board import Board
from blockfall.config import BACKGROUND, EMPTY, PREVIEW, SHADOW, STANDARD
from blockfall.game_state import Game
from blockfall.render import (
    CellKind,
    ascii_grid,
    cell_kind,
    compose_board,
    compose_frame,
    frame_to_rgb,
    rasterize,
)
from blockfall.tetromino import Piece, TetrominoType


def test_overlays_never_touch_the_board():
    game = Game(seed=2)
    before = game.board.grid.copy()
    frame = compose_frame(game)
    assert np.array_equal(game.board.grid, before)
    for x, y in game.active.cells():
        assert frame.values[y, x] == game.active.color
    assert frame.shadow.any()
    assert frame.preview.any()


def test_cell_kinds():
    board = Board()
    board.set(0, 19, 1)
    active = Piece(TetrominoType.O, x=6, y=2, color=2)
    upcoming = Piece(TetrominoType.O)
    frame = compose_board(board, active, upcoming, preview_offset=(1, 2))

    assert cell_kind(frame, 0, 19) is CellKind.SETTLED
    assert cell_kind(frame, 6, 2) is CellKind.SETTLED
    assert cell_kind(frame, 6, 19) is CellKind.SHADOW
    assert cell_kind(frame, 1, 2) is CellKind.PREVIEW
    assert cell_kind(frame, 5, 5) is CellKind.EMPTY
    assert cell_kind(frame, -1, 0) is CellKind.BACKGROUND
    assert cell_kind(frame, 12, 0) is CellKind.BACKGROUND


def test_preview_is_clipped_to_grid():
    board = Board()
    frame = compose_board(board, None, Piece(TetrominoType.I), preview_offset=(0, 0))
    assert frame.preview.sum() == 3


def test_rgb_uses_palette():
    palette = STANDARD.palette
    board = Board()
    board.set(1, 2, 3)
    frame = compose_board(board)
    rgb = frame_to_rgb(frame, palette)
    assert tuple(rgb[2, 1]) == palette[3]
    assert tuple(rgb[0, 0]) == palette[EMPTY]


def test_rasterize_maps_pixels_by_tile():
    palette = STANDARD.palette
    board = Board()
    board.set(1, 2, 3)
    frame = compose_board(board)
    image = rasterize(frame, palette, tile_size=32)
    assert image.shape == (640, 384, 3)
    assert tuple(image[65, 33]) == palette[3]
    assert tuple(image[95, 63]) == palette[3]
    assert tuple(image[96, 63]) == palette[EMPTY]


def test_rasterize_pads_with_background():
    palette = STANDARD.palette
    frame = compose_board(Board(2, 2))
    image = rasterize(frame, palette, tile_size=4, size=(10, 9))
    assert image.shape == (9, 10, 3)
    assert tuple(image[0, 0]) == palette[EMPTY]
    assert tuple(image[8, 9]) == palette[BACKGROUND]


def test_shadow_and_preview_colors():
    palette = dict(STANDARD.palette)
    palette[SHADOW] = (1, 1, 1)
    palette[PREVIEW] = (2, 2, 2)
    board = Board()
    frame = compose_board(
        board, Piece(TetrominoType.O, x=6, y=2), Piece(TetrominoType.O), preview_offset=(1, 2)
    )
    rgb = frame_to_rgb(frame, palette)
    assert tuple(rgb[19, 6]) == (1, 1, 1)
    assert tuple(rgb[2, 1]) == (2, 2, 2)


def test_ascii_grid():
    board = Board(4, 3)
    board.set(0, 2, 1)
    text = ascii_grid(compose_board(board, Piece(TetrominoType.O, x=2, y=0)))
    assert text.split("\n") == ["  ##", "  ##", "# .."]
