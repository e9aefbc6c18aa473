"""Falling-block puzzle game engine."""

from .board import Board
from .config import BIG, STANDARD, GameConfig
from .tetromino import Piece, TetrominoType, shape_offsets
from .collision import in_boundaries, is_valid_placement, overlaps_settled
from .shadow import compute_shadow
from .lines import clear_and_collapse, find_full_rows
from .game_state import Action, Game, GamePhase, StepResult
from .render import CellKind, Frame, ascii_grid, compose_frame

__all__ = [
    "Board",
    "GameConfig",
    "STANDARD",
    "BIG",
    "Piece",
    "TetrominoType",
    "shape_offsets",
    "in_boundaries",
    "overlaps_settled",
    "is_valid_placement",
    "compute_shadow",
    "find_full_rows",
    "clear_and_collapse",
    "Action",
    "Game",
    "GamePhase",
    "StepResult",
    "CellKind",
    "Frame",
    "ascii_grid",
    "compose_frame",
]
