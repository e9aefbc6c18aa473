"""Game loop state machine.

:class:`Game` owns the board, the falling and upcoming pieces, the score and
the timers.  It is driven one input cycle at a time through :meth:`Game.step`
by a front-end that supplies the pressed actions and the elapsed time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple
import logging
import random

from .board import Board
from .config import STANDARD, GameConfig
from .lines import clear_and_collapse, find_full_rows
from .render import ascii_grid, compose_frame
from .shadow import compute_shadow
from .tetromino import Piece

LOGGER = logging.getLogger(__name__)


class Action(str, Enum):
    """Discrete, edge-triggered player actions."""

    ROTATE = "rotate"
    ROTATE_CCW = "rotate_ccw"
    DROP = "drop"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    QUIT = "quit"


class GamePhase(str, Enum):
    FALLING = "falling"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one input cycle."""

    landed: bool = False
    lines_cleared: int = 0
    game_over: bool = False


@dataclass
class Game:
    """Mutable state for a game session."""

    config: GameConfig = STANDARD
    seed: Optional[int] = None
    board: Board = field(init=False)
    active: Optional[Piece] = field(init=False, default=None)
    upcoming: Optional[Piece] = field(init=False, default=None)
    score: int = field(init=False, default=0)
    lines_cleared: int = field(init=False, default=0)
    pieces_locked: int = field(init=False, default=0)
    paused: bool = field(init=False, default=False)
    phase: GamePhase = field(init=False, default=GamePhase.FALLING)
    tick_ms: int = field(init=False, default=0)
    drop_accum: float = field(init=False, default=0.0)
    speedup_accum: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        self.reset()

    @property
    def game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset the entire game state for a new game."""

        if seed is not None:
            self.seed = seed
            self.rng.seed(seed)
        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared = 0
        self.pieces_locked = 0
        self.paused = False
        self.phase = GamePhase.FALLING
        self.tick_ms = self.config.tick_ms
        self.drop_accum = 0.0
        self.speedup_accum = 0.0
        self.active = None
        self.upcoming = None
        self.spawn()
        LOGGER.info("Game started (%dx%d)", self.config.width, self.config.height)

    def _random_piece(self) -> Piece:
        return Piece.random_spawn(self.rng, self.config)

    def spawn(self) -> Piece:
        """Make the upcoming piece active and pick a new upcoming one.

        If the new piece already overlaps settled blocks the game is over.
        """

        self.active = self.upcoming or self._random_piece()
        self.upcoming = self._random_piece()
        if not self.active.is_valid(self.board):
            self.phase = GamePhase.GAME_OVER
            LOGGER.warning("Game over! Score: %d", self.score)
        return self.active

    def shadow(self) -> FrozenSet[Tuple[int, int]]:
        """Return the landing preview cells of the active piece."""

        if self.active is None or self.game_over:
            return frozenset()
        return compute_shadow(self.active, self.board)

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        LOGGER.info("Paused" if self.paused else "Resumed")

    def land(self) -> int:
        """Settle the active piece, clear rows and spawn the next piece.

        Returns the number of rows cleared.
        """

        if self.active is None:
            return 0
        self.board.lock_piece(self.active)
        self.pieces_locked += 1
        rows = find_full_rows(self.board)
        cleared = clear_and_collapse(self.board, rows)
        if cleared:
            self.score += cleared
            self.lines_cleared += cleared
            LOGGER.debug("Cleared rows %s. Score: %d", rows, self.score)
        self.spawn()
        return cleared

    def step(self, actions: Iterable[Action] = (), elapsed_ms: float = 0.0) -> StepResult:
        """Run one input cycle.

        Actions are applied in a fixed order regardless of how they were
        supplied: rotate, drop to bottom, left, right, then the gravity tick.
        Each one sees the piece as left by the previous one.
        """

        pressed = set(actions)
        if self.game_over:
            return StepResult(game_over=True)
        if Action.PAUSE in pressed:
            self.toggle_pause()
        if self.paused or self.active is None:
            return StepResult()

        piece = self.active
        landed = False
        if Action.ROTATE in pressed:
            piece.attempt_rotate(True, self.board)
        if Action.ROTATE_CCW in pressed:
            piece.attempt_rotate(False, self.board)
        if Action.DROP in pressed:
            piece.hard_drop(self.board)
            landed = True
        if Action.LEFT in pressed:
            piece.attempt_translate(-1, 0, self.board)
        if Action.RIGHT in pressed:
            piece.attempt_translate(1, 0, self.board)

        self.drop_accum += elapsed_ms
        if self.drop_accum >= self.tick_ms:
            self.drop_accum = 0.0
            landed = not piece.attempt_translate(0, 1, self.board)
            if self.config.debug_dump:
                LOGGER.debug("\n%s", ascii_grid(compose_frame(self)))

        cleared = self.land() if landed else 0
        self._advance_speed(elapsed_ms)
        return StepResult(landed=landed, lines_cleared=cleared, game_over=self.game_over)

    def _advance_speed(self, elapsed_ms: float) -> None:
        self.speedup_accum += elapsed_ms
        period_ms = self.config.speedup_every_s * 1000.0
        while self.speedup_accum > period_ms:
            self.speedup_accum -= period_ms
            faster = max(self.config.min_tick_ms, self.tick_ms - self.config.tick_speedup_ms)
            if faster != self.tick_ms:
                self.tick_ms = faster
                LOGGER.info("Tick interval now %d ms", self.tick_ms)


__all__ = ["Action", "Game", "GamePhase", "StepResult"]
