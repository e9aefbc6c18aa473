"""Landing preview for the falling piece."""

from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, Iterable, Tuple

from .collision import in_boundaries, overlaps_settled

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board
    from .tetromino import Piece

Cell = Tuple[int, int]


def drop_distance(piece: "Piece", board: "Board", exclude: Iterable[Cell] = ()) -> int:
    """Return how many rows ``piece`` could fall from where it is."""

    skip = frozenset(exclude)
    cells = piece.cells()
    distance = 0
    while distance < board.height:
        below = [(x, y + distance + 1) for x, y in cells]
        if not in_boundaries(below, board) or overlaps_settled(below, board, skip):
            break
        distance += 1
    return distance


def compute_shadow(
    piece: "Piece", board: "Board", exclude: Iterable[Cell] = ()
) -> FrozenSet[Cell]:
    """Return the cells the piece would occupy after a hard drop.

    Cells the piece already covers are left out, and a piece that cannot
    fall at all has no shadow.
    """

    distance = drop_distance(piece, board, exclude)
    if distance == 0:
        return frozenset()
    current = set(piece.cells())
    return frozenset((x, y + distance) for x, y in current if (x, y + distance) not in current)


__all__ = ["compute_shadow", "drop_distance"]
