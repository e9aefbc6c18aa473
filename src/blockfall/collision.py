"""Boundary and overlap checks for pieces against the board."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board
    from .tetromino import Piece

Cell = Tuple[int, int]


def in_boundaries(cells: Iterable[Cell], board: "Board") -> bool:
    """Return ``True`` if every cell lies inside ``board``."""

    return all(0 <= x < board.width and 0 <= y < board.height for x, y in cells)


def overlaps_settled(
    cells: Iterable[Cell], board: "Board", exclude: Iterable[Cell] = ()
) -> bool:
    """Return ``True`` if any cell not in ``exclude`` is occupied on ``board``.

    Cells must already be known to be inside the board; out-of-range
    coordinates raise :class:`IndexError` from :meth:`Board.is_occupied`.
    """

    skip = frozenset(exclude)
    return any(board.is_occupied(x, y) for x, y in cells if (x, y) not in skip)


def is_valid_placement(
    piece: "Piece", board: "Board", exclude: Iterable[Cell] = ()
) -> bool:
    """Return ``True`` if ``piece`` fits on ``board`` where it currently is.

    ``exclude`` lists cells that belong to the piece's own footprint when the
    caller has painted it into the board; those are never treated as
    collisions.
    """

    cells = piece.cells()
    return in_boundaries(cells, board) and not overlaps_settled(cells, board, exclude)


__all__ = ["in_boundaries", "overlaps_settled", "is_valid_placement"]
