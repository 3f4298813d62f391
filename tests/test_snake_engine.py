from __future__ import annotations

import numpy as np
import pytest

from brickgame.body import Cell, Direction, SnakeBody
from brickgame.grid import EMPTY, MARKER, OCCUPIED
from brickgame.highscore import MemoryHighScoreStore
from brickgame.session import GameStatus, Intent, SnakeSession, State
from brickgame.snake import WIN_SCORE, SnakeEngine
from brickgame.tetris import TetrisEngine
from brickgame.utils import BASE_TIMEOUT


def start(seed: int = 0, store=None) -> tuple[SnakeEngine, SnakeSession]:
    engine = SnakeEngine(high_scores=store or MemoryHighScoreStore())
    session = engine.new_session(seed=seed)
    session.submit_intent(Intent.START)
    engine.tick(session)
    return engine, session


def shift(engine: SnakeEngine, session: SnakeSession) -> None:
    session.state = State.SHIFTING
    engine.tick(session)


def reshape(session: SnakeSession, cells, direction: Direction) -> None:
    """Replace the body with ``cells`` listed from tail to head."""

    session.grid.clear()
    session.body = SnakeBody(cells)
    for x, y in cells:
        session.grid.set_cell(y, x, OCCUPIED)
    session.direction = direction


def test_start_spawns_vertical_body():
    engine, session = start()
    grid = session.grid
    assert session.state is State.SPAWN
    assert session.status is GameStatus.PLAYING
    for row in (9, 10, 11, 12):
        assert grid.get_cell(row, 5) == OCCUPIED
    assert int(grid.cells.sum()) == 4
    assert len(session.body) == 4
    assert session.body.head == Cell(5, 9)
    assert session.direction is Direction.UP
    assert (session.score, session.level, session.speed) == (0, 1, 1)
    assert engine.snapshot(session).preview is None


def test_spawn_places_apple_on_free_cell():
    engine, session = start()
    engine.tick(session)
    assert session.state is State.MOVING
    apple = session.apple
    assert apple is not None
    assert apple not in session.body
    assert session.grid.get_cell(apple.y, apple.x) == MARKER


def test_shifting_moves_head_and_frees_tail():
    engine, session = start()
    shift(engine, session)
    assert session.state is State.MOVING
    assert session.grid.get_cell(12, 5) == EMPTY
    assert session.grid.get_cell(8, 5) == OCCUPIED
    assert session.body.head == Cell(5, 8)
    assert len(session.body) == 4


def test_turns_change_the_next_step():
    engine, session = start()
    session.state = State.MOVING
    session.submit_intent(Intent.LEFT)
    engine.tick(session)
    assert session.direction is Direction.LEFT
    shift(engine, session)
    assert session.grid.get_cell(9, 4) == OCCUPIED

    session.state = State.MOVING
    session.submit_intent(Intent.RIGHT)
    engine.tick(session)
    assert session.direction is Direction.UP
    shift(engine, session)
    assert session.grid.get_cell(8, 4) == OCCUPIED


def test_two_turns_before_a_step_reverse_into_the_neck():
    engine, session = start()
    session.state = State.MOVING
    for _ in range(2):
        session.submit_intent(Intent.LEFT)
        engine.tick(session)
    assert session.direction is Direction.DOWN
    before = session.grid.cells.copy()

    shift(engine, session)

    assert session.state is State.GAME_OVER
    assert np.array_equal(session.grid.cells, before)


def test_action_shifts_immediately():
    engine, session = start()
    engine.tick(session)
    session.ticks = 12
    session.submit_intent(Intent.ACTION)
    engine.tick(session)
    assert session.state is State.SHIFTING
    assert session.ticks == 0


def test_idle_ticks_reach_threshold_twice_as_fast():
    snake = SnakeEngine()
    assert snake.pacing_threshold(1) == pytest.approx(TetrisEngine().pacing_threshold(1) * 0.5)
    assert snake.pacing_threshold(1) == pytest.approx(BASE_TIMEOUT * 0.5 / 0.1)
    assert snake.pacing_threshold(3) == pytest.approx(BASE_TIMEOUT * 0.5 / 0.3)

    engine, session = start()
    engine.tick(session)
    session.ticks = int(np.ceil(engine.pacing_threshold(session.speed))) - 1
    engine.tick(session)
    assert session.state is State.SHIFTING
    assert session.ticks == 0


def test_down_counts_as_idle_tick():
    engine, session = start()
    engine.tick(session)
    session.submit_intent(Intent.DOWN)
    engine.tick(session)
    assert session.ticks == 1
    assert session.direction is Direction.UP


def test_eating_the_apple_grows_by_one():
    engine, session = start()
    session.apple = Cell(5, 8)
    session.grid.set_cell(8, 5, MARKER)
    shift(engine, session)

    assert session.state is State.SPAWN
    assert len(session.body) == 5
    assert session.body.head == Cell(5, 8)
    assert session.body.tail == Cell(5, 12)
    assert session.grid.get_cell(12, 5) == OCCUPIED
    assert session.grid.get_cell(8, 5) == OCCUPIED
    assert session.apple is None
    assert session.score == 1
    assert session.high_score == 1


def test_fifth_apple_raises_level():
    engine, session = start()
    session.score = 4
    session.apple = Cell(5, 8)
    shift(engine, session)
    assert session.level == 2
    assert session.speed == 2


def test_wall_collision_ends_game_and_restores_body():
    engine, session = start()
    cells = [(5, 3), (5, 2), (5, 1), (5, 0)]
    reshape(session, cells, Direction.UP)
    before = session.grid.cells.copy()

    shift(engine, session)

    assert session.state is State.GAME_OVER
    assert list(session.body) == [Cell(*c) for c in cells]
    assert np.array_equal(session.grid.cells, before)

    engine.tick(session)
    assert session.state is State.START
    assert session.status is GameStatus.LOST


def test_self_collision_ends_game():
    engine, session = start()
    cells = [(7, 5), (6, 5), (5, 5), (4, 5), (4, 4), (5, 4)]
    reshape(session, cells, Direction.DOWN)
    before = session.grid.cells.copy()

    shift(engine, session)

    assert session.state is State.GAME_OVER
    assert list(session.body) == [Cell(*c) for c in cells]
    assert np.array_equal(session.grid.cells, before)


def test_head_may_enter_the_cell_the_tail_just_left():
    engine, session = start()
    reshape(session, [(5, 5), (6, 5), (6, 4), (5, 4)], Direction.DOWN)

    shift(engine, session)

    assert session.state is State.MOVING
    assert session.body.head == Cell(5, 5)
    assert len(session.body) == 4
    assert int(session.grid.cells.sum()) == 4


def test_reaching_win_score_wins():
    store = MemoryHighScoreStore()
    engine, session = start(store=store)
    session.score = WIN_SCORE - 1
    session.apple = Cell(5, 8)
    shift(engine, session)
    assert session.state is State.GAME_OVER_WON

    engine.tick(session)
    assert session.state is State.START
    assert session.status is GameStatus.WON
    assert store.score == WIN_SCORE


def test_full_board_wins_at_spawn():
    engine, session = start()
    session.grid.cells[:] = OCCUPIED
    engine.tick(session)
    assert session.state is State.GAME_OVER_WON


def test_restart_after_win_resets_field():
    store = MemoryHighScoreStore()
    engine, session = start(store=store)
    engine.tick(session)
    session.state = State.GAME_OVER_WON
    engine.tick(session)

    session.submit_intent(Intent.START)
    engine.tick(session)

    assert session.state is State.SPAWN
    assert session.status is GameStatus.PLAYING
    assert session.apple is None
    assert int(session.grid.cells.sum()) == 4
    assert not np.any(session.grid.cells == MARKER)
    assert len(session.body) == 4


def test_pause_from_moving():
    engine, session = start()
    engine.tick(session)
    session.submit_intent(Intent.PAUSE)
    snapshot = engine.tick(session)
    assert session.state is State.PAUSE
    assert snapshot.status is GameStatus.PAUSED


def test_terminate_releases_field():
    engine, session = start()
    engine.tick(session)
    session.submit_intent(Intent.TERMINATE)
    engine.tick(session)
    assert session.state is State.EXIT

    snapshot = engine.tick(session)
    assert snapshot.grid is None
    assert snapshot.status is GameStatus.EXITED
    assert len(session.body) == 0
    assert session.apple is None
