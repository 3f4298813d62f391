"""Falling-block puzzle rules."""

from __future__ import annotations

import logging
from typing import Dict

from .engine import Engine, Handler, Transition
from .grid import EMPTY, OCCUPIED
from .session import GameStatus, Intent, State, TetrisSession
from .shapes import SPAWN_POSITION, Piece, PieceType
from .utils import collides

LOGGER = logging.getLogger(__name__)

# Points for clearing 1-4 rows with a single piece.
LINE_SCORES = {1: 100, 2: 300, 3: 700, 4: 1500}
POINTS_PER_LEVEL = 600


class TetrisEngine(Engine):
    """Engine for the falling-block game.

    Between ticks the active piece is drawn onto the grid like any attached
    block.  Every handler that moves it first lifts it off the grid so the
    piece cannot collide with itself, then puts it back.
    """

    name = "tetris"
    session_class = TetrisSession
    points_per_level = POINTS_PER_LEVEL
    pacing_scale = 1.0

    def _game_handlers(self) -> Dict[State, Handler]:
        return {
            State.SPAWN: self._spawn,
            State.MOVING: self._moving,
            State.SHIFTING: self._shifting,
            State.ATTACHING: self._attaching,
        }

    # Hooks ------------------------------------------------------------
    def _reset_field(self, session: TetrisSession) -> None:
        super()._reset_field(session)
        session.active = None
        session.upcoming = None

    def _prepare(self, session: TetrisSession) -> None:
        session.active = None
        session.upcoming = self._random_piece(session)

    def _release(self, session: TetrisSession) -> None:
        session.active = None
        session.upcoming = None

    # States -----------------------------------------------------------
    def _spawn(self, session: TetrisSession) -> Transition:
        """Bring the upcoming piece into play and draw a new upcoming one."""

        piece = session.upcoming or self._random_piece(session)
        piece.position = SPAWN_POSITION
        session.active = piece
        session.upcoming = self._random_piece(session)
        if collides(session.grid, piece):
            # The stack reaches the spawn area: nothing can enter the field.
            return Transition(State.GAME_OVER)
        self._place(session)
        return Transition(State.MOVING)

    def _moving(self, session: TetrisSession) -> Transition:
        piece = session.active
        self._lift(session)
        intent = session.intent
        transition = Transition(State.MOVING)

        if intent is Intent.ACTION:
            if piece.kind is not PieceType.O:
                piece.rotate(1)
                if collides(session.grid, piece):
                    piece.rotate(-1)
        elif intent is Intent.LEFT:
            self._try_move(session, -1, 0)
        elif intent is Intent.RIGHT:
            self._try_move(session, 1, 0)
        elif intent is Intent.DOWN:
            self._drop(session)
            transition = Transition(State.ATTACHING)
        elif intent is Intent.PAUSE:
            session.status = GameStatus.PAUSED
            transition = Transition(State.PAUSE)
        elif intent is Intent.TERMINATE:
            transition = Transition(State.EXIT)
        else:
            transition = self._advance_clock(session)

        self._place(session)
        return transition

    def _shifting(self, session: TetrisSession) -> Transition:
        self._lift(session)
        landed = not self._try_move(session, 0, 1)
        self._place(session)
        return Transition(State.ATTACHING if landed else State.MOVING)

    def _attaching(self, session: TetrisSession) -> Transition:
        """Merge the active piece into the grid and clear completed rows."""

        if session.active is not None:
            self._place(session)
            session.active = None

        cleared = session.grid.clear_full_rows()
        if cleared:
            self._award(session, LINE_SCORES[cleared])
            LOGGER.info(
                "tetris: cleared %d row(s), score %d, level %d",
                cleared,
                session.score,
                session.level,
            )

        if session.grid.row_occupied(0):
            return Transition(State.GAME_OVER)
        return Transition(State.SPAWN)

    # Helpers ----------------------------------------------------------
    def _random_piece(self, session: TetrisSession) -> Piece:
        return Piece(session.rng.choice(list(PieceType)))

    def _try_move(self, session: TetrisSession, dx: int, dy: int) -> bool:
        """Shift the lifted active piece, reverting on collision."""

        piece = session.active
        piece.move(dx, dy)
        if collides(session.grid, piece):
            piece.move(-dx, -dy)
            return False
        return True

    def _drop(self, session: TetrisSession) -> None:
        while self._try_move(session, 0, 1):
            pass

    def _lift(self, session: TetrisSession) -> None:
        if session.active is not None:
            session.grid.fill(session.active.blocks(), EMPTY)

    def _place(self, session: TetrisSession) -> None:
        if session.active is not None:
            session.grid.fill(session.active.blocks(), OCCUPIED)
