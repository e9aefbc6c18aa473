"""Tetromino catalog and the falling piece.

Shapes are stored as four ``(dx, dy)`` offsets relative to the piece's
anchor.  Rotation turns every offset by 90 degrees about the anchor; there is
no wall-kick table, so a rotation either fits where it is or is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Tuple
import random

from . import collision

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board
    from .config import GameConfig

Offset = Tuple[int, int]
Cell = Tuple[int, int]


class TetrominoType(str, Enum):
    """Enumeration of the seven catalog shapes."""

    I = "I"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"
    T = "T"
    O = "O"


# Spawn orientation of each shape, anchor at ``(0, 0)``.
SHAPE_OFFSETS: Dict[TetrominoType, Tuple[Offset, ...]] = {
    TetrominoType.I: ((0, 2), (0, -1), (0, 1), (0, 0)),
    TetrominoType.L: ((0, 0), (0, -1), (0, 1), (1, 1)),
    TetrominoType.J: ((0, 0), (0, -1), (0, 1), (-1, 1)),
    TetrominoType.S: ((-1, 0), (0, 0), (0, 1), (1, 1)),
    TetrominoType.Z: ((-1, 1), (0, 0), (0, 1), (1, 0)),
    TetrominoType.T: ((0, -1), (0, 0), (0, 1), (1, 0)),
    TetrominoType.O: ((0, 0), (0, 1), (1, 1), (1, 0)),
}


def shape_offsets(kind: TetrominoType | str) -> List[Offset]:
    """Return the spawn offsets for ``kind``.

    Raises:
        ValueError: If ``kind`` does not name a catalog shape.
    """

    try:
        return list(SHAPE_OFFSETS[TetrominoType(kind)])
    except (KeyError, ValueError):
        raise ValueError(f"Unknown tetromino shape: {kind!r}") from None


def rotate_offsets(offsets: Iterable[Offset], clockwise: bool) -> List[Offset]:
    """Return ``offsets`` turned a quarter about the anchor."""

    if clockwise:
        return [(dy, -dx) for dx, dy in offsets]
    return [(-dy, dx) for dx, dy in offsets]


@dataclass
class Piece:
    """The falling piece.

    ``previous_cells`` holds the absolute cells the piece covered before its
    last accepted move.  Callers that paint the piece into a grid pass those
    cells as ``exclude`` so the piece does not collide with its own
    footprint.
    """

    kind: TetrominoType
    x: int = 0
    y: int = 0
    color: int = 1
    orientation: int = 0
    offsets: List[Offset] = field(default_factory=list)
    previous_cells: FrozenSet[Cell] = frozenset()

    def __post_init__(self) -> None:
        if not self.offsets:
            self.offsets = shape_offsets(self.kind)
        else:
            self.offsets = [tuple(o) for o in self.offsets]
        if len(self.offsets) != 4:
            raise ValueError("A piece has exactly four blocks")

    @classmethod
    def spawn(cls, kind: TetrominoType | str, color: int, config: "GameConfig") -> "Piece":
        """Create a piece of ``kind`` at the configured spawn anchor."""

        if not 1 <= color <= config.colors:
            raise ValueError(f"Color index {color} outside 1..{config.colors}")
        x, y = config.spawn
        return cls(TetrominoType(kind), x=x, y=y, color=color)

    @classmethod
    def random_spawn(cls, rng: random.Random, config: "GameConfig") -> "Piece":
        """Pick a shape and a color uniformly and spawn the piece."""

        kind = rng.choice(list(TetrominoType))
        color = rng.randint(1, config.colors)
        return cls.spawn(kind, color, config)

    def cells(self) -> List[Cell]:
        """Return the absolute ``(x, y)`` cells of the piece."""

        return [(self.x + dx, self.y + dy) for dx, dy in self.offsets]

    def copy(self) -> "Piece":
        return replace(self, offsets=list(self.offsets))

    def is_valid(self, board: "Board", exclude: Iterable[Cell] = ()) -> bool:
        return collision.is_valid_placement(self, board, exclude)

    def attempt_translate(
        self, dx: int, dy: int, board: "Board", exclude: Iterable[Cell] = ()
    ) -> bool:
        """Move by ``(dx, dy)`` if the destination is valid.

        On failure the piece is left exactly as it was and ``False`` is
        returned.
        """

        before = frozenset(self.cells())
        self.x += dx
        self.y += dy
        if not collision.is_valid_placement(self, board, exclude):
            self.x -= dx
            self.y -= dy
            return False
        self.previous_cells = before
        return True

    def attempt_rotate(
        self, clockwise: bool, board: "Board", exclude: Iterable[Cell] = ()
    ) -> bool:
        """Rotate a quarter turn about the anchor if the result is valid."""

        before = frozenset(self.cells())
        original = self.offsets
        self.offsets = rotate_offsets(original, clockwise)
        if not collision.is_valid_placement(self, board, exclude):
            self.offsets = original
            return False
        self.orientation = (self.orientation + (1 if clockwise else -1)) % 4
        self.previous_cells = before
        return True

    def hard_drop(self, board: "Board", exclude: Iterable[Cell] = ()) -> int:
        """Move down until blocked and return the number of rows descended."""

        exclude = frozenset(exclude)
        rows = 0
        # A piece can never fall further than the grid is tall.
        while rows < board.height and self.attempt_translate(0, 1, board, exclude):
            rows += 1
        return rows


__all__ = [
    "TetrominoType",
    "SHAPE_OFFSETS",
    "Piece",
    "shape_offsets",
    "rotate_offsets",
]
