"""Board holding the settled blocks of the playfield."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:  # pragma: no cover
    from .tetromino import Piece


# Dimensions of the standard board.
WIDTH = 12
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty grid of shape ``(height, width)``."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Settled cells of the playfield.

    The grid is indexed ``[y, x]`` with row ``0`` at the top.  ``0`` is an
    empty cell and any positive value is the color index of a settled block.
    The falling piece is never stored here; it only becomes part of the board
    through :meth:`lock_piece`.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Board dimensions must be positive")
        self._width = width
        self._height = height
        self.grid: Grid = create_empty_grid(width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Cell {(x, y)} out of bounds")

    def get(self, x: int, y: int) -> int:
        """Return the value at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        self._check(x, y)
        return int(self.grid[y, x])

    def is_occupied(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` holds a settled block.

        Raises:
            IndexError: If the coordinates are outside the board.  Negative
                indices are rejected rather than wrapped.
        """

        self._check(x, y)
        return bool(self.grid[y, x] > 0)

    def set(self, x: int, y: int, value: int) -> None:
        """Write ``value`` at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
            ValueError: If ``value`` does not fit a cell.
        """

        self._check(x, y)
        if not 0 <= value <= 255:
            raise ValueError(f"Cell value {value} out of range")
        self.grid[y, x] = np.uint8(value)

    def clear(self, x: int, y: int) -> None:
        self.set(x, y, 0)

    def lock_piece(self, piece: "Piece") -> None:
        """Settle the piece's blocks into the grid."""

        coordinates = np.asarray(piece.cells(), dtype=np.int16)
        xs, ys = coordinates.T
        if (
            np.any(xs < 0)
            or np.any(xs >= self._width)
            or np.any(ys < 0)
            or np.any(ys >= self._height)
        ):
            raise IndexError("Block out of bounds")
        self.grid[ys, xs] = np.uint8(piece.color)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def copy(self) -> "Board":
        other = Board(self._width, self._height)
        other.grid = self.grid.copy()
        return other

    def reset(self) -> None:
        self.grid = create_empty_grid(self._width, self._height)

    @classmethod
    def from_rows(cls, rows) -> "Board":
        """Build a board from a list of rows, top row first.

        Handy for tests and debugging; any non-zero value is kept as is.
        """

        grid = np.asarray(rows, dtype=np.uint8)
        if grid.ndim != 2:
            raise ValueError("Rows must form a 2-D grid")
        board = cls(grid.shape[1], grid.shape[0])
        board.grid = grid.copy()
        return board


__all__ = ["Board", "Grid", "WIDTH", "HEIGHT", "create_empty_grid"]
