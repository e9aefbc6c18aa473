from blockfall.config import GameConfig
from blockfall.game_state import Action, Game
from blockfall.tetromino import Piece, TetrominoType


def test_piece_falls_once_tick_elapses():
    game = Game(seed=1)
    y = game.active.y
    game.step((), elapsed_ms=399)
    assert game.active.y == y
    game.step((), elapsed_ms=1)
    assert game.active.y == y + 1
    assert game.drop_accum == 0


def test_blocked_descent_lands_piece():
    game = Game(seed=1)
    game.active = Piece(TetrominoType.O, x=0, y=18, color=2)
    result = game.step((), elapsed_ms=game.tick_ms)
    assert result.landed
    assert game.board.get(0, 19) == 2
    assert game.active is not None and game.active.y == game.config.spawn[1]


def test_pause_freezes_ticks_and_movement():
    game = Game(seed=1)
    piece = game.active.copy()
    game.step([Action.PAUSE], elapsed_ms=1000)
    assert game.paused
    game.step([Action.LEFT, Action.DROP], elapsed_ms=60_000)
    assert game.active == piece
    assert game.tick_ms == game.config.tick_ms
    game.step([Action.PAUSE], elapsed_ms=game.tick_ms)
    assert not game.paused
    assert game.active.y == piece.y + 1


def test_speed_schedule_steps_down():
    game = Game(seed=1)
    game.step((), elapsed_ms=25_000)
    assert game.tick_ms == 400
    game.step((), elapsed_ms=1)
    assert game.tick_ms == 385


def test_speed_never_drops_below_floor():
    config = GameConfig(tick_ms=230, min_tick_ms=220, tick_speedup_ms=15)
    game = Game(config, seed=1)
    for _ in range(4):
        game.step((), elapsed_ms=25_001)
    assert game.tick_ms == 220


def test_intents_apply_in_fixed_order():
    game = Game(seed=1)
    game.active = Piece(TetrominoType.I, x=1, y=10)
    # Rotation comes first and makes the piece horizontal, leaving no room
    # to the left.
    game.step([Action.LEFT, Action.ROTATE])
    assert game.active.x == 1
    assert game.active.orientation == 1


def test_sideways_move_after_drop_in_same_cycle():
    game = Game(seed=1)
    game.active = Piece(TetrominoType.O, x=6, y=2, color=3)
    result = game.step([Action.RIGHT, Action.DROP])
    assert result.landed
    for cell in [(7, 18), (7, 19), (8, 18), (8, 19)]:
        assert game.board.get(*cell) == 3
    assert game.board.occupied_count() == 4


def test_quit_is_ignored_by_the_engine():
    game = Game(seed=1)
    piece = game.active.copy()
    result = game.step([Action.QUIT])
    assert not result.landed
    assert game.active == piece
