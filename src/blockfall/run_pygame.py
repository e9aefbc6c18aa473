"""pygame front-end for the game engine.

This module only does plumbing: it opens a window, turns key presses into
:class:`~blockfall.game_state.Action` values, feeds them to
:class:`~blockfall.game_state.Game` together with the elapsed frame time and
blits the rasterised frame to the screen.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Set

import pygame

from .config import STANDARD, GameConfig
from .game_state import Action, Game
from .render import compose_frame, rasterize

LOGGER = logging.getLogger(__name__)

KEY_ACTIONS = {
    pygame.K_UP: Action.ROTATE,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.DROP,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_p: Action.PAUSE,
    pygame.K_ESCAPE: Action.QUIT,
}


def actions_from_events(events: Iterable[pygame.event.Event]) -> Set[Action]:
    """Collect the actions pressed during one frame.

    Only ``KEYDOWN`` events count, so a held key triggers its action once.
    Closing the window maps to :attr:`Action.QUIT`.
    """

    actions: Set[Action] = set()
    for event in events:
        if event.type == pygame.QUIT:
            actions.add(Action.QUIT)
        elif event.type == pygame.KEYDOWN and event.key in KEY_ACTIONS:
            actions.add(KEY_ACTIONS[event.key])
    return actions


def draw(screen: pygame.Surface, game: Game) -> None:
    """Blit the current frame of ``game`` onto ``screen``."""

    image = rasterize(
        compose_frame(game),
        game.config.palette,
        game.config.tile_size,
        size=screen.get_size(),
    )
    # surfarray expects (width, height, 3).
    pygame.surfarray.blit_array(screen, image.swapaxes(0, 1))


def caption(game: Game) -> str:
    if game.game_over:
        return f"Blockfall - Game over! Score: {game.score}"
    return f"Blockfall - {'Paused - ' if game.paused else ''}Score: {game.score}"


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, config: GameConfig = STANDARD, seed: Optional[int] = None) -> None:
        self.config = config
        self.seed = seed
        self._running = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._state: Game | None = None
        self._clock: pygame.time.Clock | None = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return bool(self._state and self._state.paused)

    @property
    def state(self) -> Game | None:
        return self._state

    def process(self, actions: Set[Action], dt: float) -> None:
        """Advance the game by one frame."""

        if Action.QUIT in actions:
            self._running = False
            return
        if self._state is None:
            return
        was_over = self._state.game_over
        self._state.step(actions, dt)
        if self._state.game_over and not was_over:
            # Nothing but quitting is accepted once the game is over.
            LOGGER.info("Press Escape to quit")

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(self.config.screen_size)
        pygame.display.set_caption("Blockfall")
        self._clock = pygame.time.Clock()

        self._state = Game(self.config, seed=self.seed)
        self._running = True
        while self._running:
            dt = self._clock.tick(self.config.fps)
            self.process(actions_from_events(pygame.event.get()), dt)

            # Rendering continues while paused.
            draw(self._screen, self._state)
            pygame.display.set_caption(caption(self._state))
            pygame.display.flip()

            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped. Final score: %d", self._state.score)

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (plain Python); run synchronously
            asyncio.run(self._run_loop())
            return
        self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running or self._state is None:
            LOGGER.info("Pause ignored: game not running")
            return
        if not self._state.paused:
            self._state.toggle_pause()

    def resume(self) -> None:
        if not self._running or self._state is None:
            LOGGER.info("Resume ignored: game not running")
            return
        if self._state.paused:
            self._state.toggle_pause()

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main(config: GameConfig = STANDARD, seed: Optional[int] = None) -> None:
    """Run the game in a window until the player quits."""

    GameRunner(config, seed=seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
