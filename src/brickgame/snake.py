"""Snake game rules."""

from __future__ import annotations

import logging
from typing import Dict

from .body import SPAWN_BODY, SPAWN_DIRECTION, Cell
from .engine import Engine, Handler, Transition
from .grid import EMPTY, MARKER, OCCUPIED
from .session import GameStatus, Intent, SnakeSession, State

LOGGER = logging.getLogger(__name__)

POINTS_PER_LEVEL = 5
WIN_SCORE = 200


class SnakeEngine(Engine):
    """Engine for the snake game.

    The body is spawned when a game starts; the spawn state only places a new
    apple, so it is revisited every time an apple is eaten.
    """

    name = "snake"
    session_class = SnakeSession
    points_per_level = POINTS_PER_LEVEL
    pacing_scale = 0.5

    def _game_handlers(self) -> Dict[State, Handler]:
        return {
            State.SPAWN: self._spawn,
            State.MOVING: self._moving,
            State.SHIFTING: self._shifting,
        }

    # Hooks ------------------------------------------------------------
    def _reset_field(self, session: SnakeSession) -> None:
        super()._reset_field(session)
        session.body.clear()
        session.apple = None

    def _prepare(self, session: SnakeSession) -> None:
        session.direction = SPAWN_DIRECTION
        session.body.clear()
        for cell in SPAWN_BODY:
            session.body.push_head(cell)
            session.grid.set_cell(cell.y, cell.x, OCCUPIED)

    def _release(self, session: SnakeSession) -> None:
        session.body.clear()
        session.apple = None

    # States -----------------------------------------------------------
    def _spawn(self, session: SnakeSession) -> Transition:
        free = session.grid.empty_cells()
        if not free:
            # The body fills the whole field; there is nothing left to eat.
            return Transition(State.GAME_OVER_WON)
        row, col = session.rng.choice(free)
        session.apple = Cell(col, row)
        session.grid.set_cell(row, col, MARKER)
        return Transition(State.MOVING)

    def _moving(self, session: SnakeSession) -> Transition:
        intent = session.intent
        if intent is Intent.ACTION:
            session.ticks = 0
            return Transition(State.SHIFTING)
        if intent is Intent.LEFT:
            session.direction = session.direction.turn_left()
        elif intent is Intent.RIGHT:
            session.direction = session.direction.turn_right()
        elif intent is Intent.PAUSE:
            session.status = GameStatus.PAUSED
            return Transition(State.PAUSE)
        elif intent is Intent.TERMINATE:
            return Transition(State.EXIT)
        else:
            return self._advance_clock(session)
        return Transition(State.MOVING)

    def _shifting(self, session: SnakeSession) -> Transition:
        """Move the head one cell forward, growing when it reaches the apple."""

        grid = session.grid
        body = session.body
        head = body.head.step(session.direction)

        # The tail leaves its cell before the head arrives, so the head may
        # follow directly behind it.
        tail = body.pop_tail()
        grid.set_cell(tail.y, tail.x, EMPTY)

        if grid.blocked(head.y, head.x):
            body.push_tail(tail)
            grid.set_cell(tail.y, tail.x, OCCUPIED)
            return Transition(State.GAME_OVER)

        body.push_head(head)
        grid.set_cell(head.y, head.x, OCCUPIED)

        transition = Transition(State.MOVING)
        if head == session.apple:
            body.push_tail(tail)
            grid.set_cell(tail.y, tail.x, OCCUPIED)
            session.apple = None
            self._award(session, 1)
            transition = Transition(State.SPAWN)

        if session.score >= WIN_SCORE:
            transition = Transition(State.GAME_OVER_WON)
        return transition
