"""Frame composition for renderers.

The board only knows about settled blocks.  A :class:`Frame` layers the
falling piece on top of a copy of the board and carries the shadow and
next-piece preview as separate boolean masks, so none of these transient
markers can leak into the board itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .board import Board, Grid
from .config import BACKGROUND, EMPTY, PREVIEW, SHADOW, RGB
from .shadow import compute_shadow
from .tetromino import Piece

if TYPE_CHECKING:  # pragma: no cover
    from .game_state import Game

Mask = NDArray[np.bool_]


class CellKind(str, Enum):
    BACKGROUND = "background"
    EMPTY = "empty"
    SETTLED = "settled"
    PREVIEW = "preview"
    SHADOW = "shadow"


@dataclass
class Frame:
    """Everything a renderer needs to draw one frame.

    ``values`` holds settled blocks plus the falling piece as color indices.
    ``shadow`` and ``preview`` are only set on cells that are empty in
    ``values``.
    """

    values: Grid
    shadow: Mask
    preview: Mask

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])


def _mask(board: Board, cells: Iterable[Tuple[int, int]], values: Grid) -> Mask:
    mask = np.zeros((board.height, board.width), dtype=bool)
    for x, y in cells:
        if 0 <= x < board.width and 0 <= y < board.height and values[y, x] == 0:
            mask[y, x] = True
    return mask


def compose_board(
    board: Board,
    active: Optional[Piece] = None,
    upcoming: Optional[Piece] = None,
    preview_offset: Tuple[int, int] = (1, 2),
) -> Frame:
    """Return a frame of ``board`` with the pieces overlaid.

    The upcoming piece is drawn with its offsets relative to
    ``preview_offset``; cells falling outside the board are clipped.
    """

    values = board.grid.copy()
    shadow_cells: Iterable[Tuple[int, int]] = ()
    if active is not None:
        shadow_cells = compute_shadow(active, board)
        for x, y in active.cells():
            if 0 <= x < board.width and 0 <= y < board.height:
                values[y, x] = active.color
    preview_cells: List[Tuple[int, int]] = []
    if upcoming is not None:
        ox, oy = preview_offset
        preview_cells = [(ox + dx, oy + dy) for dx, dy in upcoming.offsets]
    return Frame(
        values=values,
        shadow=_mask(board, shadow_cells, values),
        preview=_mask(board, preview_cells, values),
    )


def compose_frame(game: "Game") -> Frame:
    """Compose the current frame of ``game``."""

    active = None if game.game_over else game.active
    return compose_board(game.board, active, game.upcoming, game.config.preview_offset)


def cell_kind(frame: Frame, x: int, y: int) -> CellKind:
    """Classify ``(x, y)``; anything outside the grid is background."""

    if not (0 <= x < frame.width and 0 <= y < frame.height):
        return CellKind.BACKGROUND
    if frame.values[y, x] > 0:
        return CellKind.SETTLED
    if frame.preview[y, x]:
        return CellKind.PREVIEW
    if frame.shadow[y, x]:
        return CellKind.SHADOW
    return CellKind.EMPTY


def frame_to_rgb(frame: Frame, palette: Dict[object, RGB]) -> NDArray[np.uint8]:
    """Return an ``(height, width, 3)`` color array for ``frame``."""

    lookup = np.zeros((256, 3), dtype=np.uint8)
    lookup[0] = palette[EMPTY]
    for value in np.unique(frame.values):
        value = int(value)
        if value and value not in palette:
            raise ValueError(f"Invalid color value {value} in frame")
        if value:
            lookup[value] = palette[value]
    rgb = lookup[frame.values]
    rgb[frame.shadow] = palette[SHADOW]
    rgb[frame.preview] = palette[PREVIEW]
    return rgb


def rasterize(
    frame: Frame,
    palette: Dict[object, RGB],
    tile_size: int,
    size: Optional[Tuple[int, int]] = None,
) -> NDArray[np.uint8]:
    """Return a ``(pixel_height, pixel_width, 3)`` image of ``frame``.

    Each pixel maps to the cell at ``(px // tile_size, py // tile_size)``.
    ``size`` gives the ``(width, height)`` in pixels; pixels that map outside
    the grid are painted with the background color.
    """

    width, height = size or (frame.width * tile_size, frame.height * tile_size)
    cells = frame_to_rgb(frame, palette)
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:] = palette[BACKGROUND]
    cols = np.arange(width) // tile_size
    rows = np.arange(height) // tile_size
    inside_cols = cols < frame.width
    inside_rows = rows < frame.height
    image[np.ix_(inside_rows, inside_cols)] = cells[
        np.ix_(rows[inside_rows], cols[inside_cols])
    ]
    return image


def ascii_grid(frame: Frame) -> str:
    """Render ``frame`` as text, one line per row."""

    symbols = {
        CellKind.SETTLED: "#",
        CellKind.PREVIEW: "+",
        CellKind.SHADOW: ".",
        CellKind.EMPTY: " ",
    }
    return "\n".join(
        "".join(symbols[cell_kind(frame, x, y)] for x in range(frame.width))
        for y in range(frame.height)
    )


__all__ = [
    "CellKind",
    "Frame",
    "compose_board",
    "compose_frame",
    "cell_kind",
    "frame_to_rgb",
    "rasterize",
    "ascii_grid",
]
