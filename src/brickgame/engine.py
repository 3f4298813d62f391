"""Finite-state controller shared by both games.

An engine holds only the rules and its collaborators; all mutable state lives
in a :class:`~brickgame.session.Session` owned by the caller.  Each call to
:meth:`Engine.tick` looks up the handler for the session's current state and
applies the :class:`Transition` it returns.  A handler may ask for its
successor to run within the same tick (``redispatch``); this is how a start
request received while paused begins the game immediately.  The loop is
bounded so a misbehaving handler cannot spin forever.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional
import logging

from .grid import Grid
from .highscore import HighScoreStore, MemoryHighScoreStore
from .session import NO_INTENT, GameStatus, Intent, Session, State
from .snapshot import Snapshot, project
from .utils import level_for_score, tick_threshold

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Session], "Transition"]


@dataclass(frozen=True)
class Transition:
    """Outcome of one state handler."""

    state: State
    redispatch: bool = False


class Engine(ABC):
    """Rules common to the falling-block and snake games.

    Subclasses provide the game-specific handlers and hooks:

    - ``_reset_field`` wipes leftovers from a finished game,
    - ``_prepare`` sets up the first piece or body of a new game,
    - ``_release`` drops everything that refers to the grid on exit.
    """

    name = "brickgame"
    session_class = Session
    points_per_level = 1
    pacing_scale = 1.0

    def __init__(
        self,
        *,
        high_scores: Optional[HighScoreStore] = None,
        grid_factory: Callable[[], Grid] = Grid,
    ) -> None:
        self.high_scores = high_scores or MemoryHighScoreStore()
        self.grid_factory = grid_factory
        self._handlers: Dict[State, Handler] = {
            State.START: self._start,
            State.PAUSE: self._pause,
            State.GAME_OVER: self._game_over,
            State.GAME_OVER_WON: self._game_won,
            State.EXIT: self._exit,
        }
        self._handlers.update(self._game_handlers())

    def _game_handlers(self) -> Dict[State, Handler]:
        return {}

    # Public API -------------------------------------------------------
    def new_session(self, seed: Optional[int] = None) -> Session:
        """Return a fresh session in the initial pause state."""

        return self.session_class(seed=seed)

    def tick(self, session: Session) -> Snapshot:
        """Advance ``session`` by one step and return its snapshot.

        The pending intent is consumed: it is reset to the neutral value once
        the step completes.
        """

        self.step(session)
        session.intent = NO_INTENT
        return project(session)

    def snapshot(self, session: Session) -> Snapshot:
        return project(session)

    def step(self, session: Session) -> None:
        """Run the handler for the current state, following re-dispatches."""

        for _ in range(len(State)):
            handler = self._handlers.get(session.state)
            if handler is None:
                return
            transition = handler(session)
            if transition.state is not session.state:
                LOGGER.debug(
                    "%s: %s -> %s on %s",
                    self.name,
                    session.state.value,
                    transition.state.value,
                    session.intent.value,
                )
            session.state = transition.state
            if not transition.redispatch:
                return
        raise RuntimeError("State dispatch did not settle")

    def pacing_threshold(self, speed: int) -> float:
        return tick_threshold(speed, self.pacing_scale)

    # Shared states ----------------------------------------------------
    def _pause(self, session: Session) -> Transition:
        if session.grid is None and session.status is GameStatus.STARTING:
            try:
                session.grid = self.grid_factory()
            except MemoryError:
                LOGGER.error("%s: could not allocate the playing field", self.name)
                return Transition(State.EXIT)

        intent = session.intent
        if intent is Intent.START:
            if session.status is GameStatus.STARTING:
                session.status = GameStatus.PLAYING
                return Transition(State.START, redispatch=True)
        elif intent is Intent.PAUSE:
            if session.status is not GameStatus.STARTING:
                session.status = GameStatus.PLAYING
                return Transition(State.MOVING)
        elif intent is Intent.TERMINATE:
            return Transition(State.EXIT)
        return Transition(State.PAUSE)

    def _start(self, session: Session) -> Transition:
        intent = session.intent
        if intent is Intent.TERMINATE:
            return Transition(State.EXIT)
        if intent is not Intent.START:
            return Transition(State.START)

        session.score = 0
        session.level = 1
        session.speed = 1
        session.ticks = 0
        if session.status in (GameStatus.LOST, GameStatus.WON):
            self._reset_field(session)
        else:
            session.rng.seed(session.seed)
        session.status = GameStatus.PLAYING
        session.high_score = self.high_scores.load()
        self._prepare(session)
        LOGGER.info("%s: new game (high score %d)", self.name, session.high_score)
        return Transition(State.SPAWN)

    def _game_over(self, session: Session) -> Transition:
        session.status = GameStatus.LOST
        LOGGER.info("%s: game over with score %d", self.name, session.score)
        self._save_high_score(session)
        return Transition(State.START)

    def _game_won(self, session: Session) -> Transition:
        session.status = GameStatus.WON
        LOGGER.info("%s: game won with score %d", self.name, session.score)
        self._save_high_score(session)
        return Transition(State.START)

    def _exit(self, session: Session) -> Transition:
        if session.status is not GameStatus.EXITED:
            self._release(session)
            session.grid = None
            session.status = GameStatus.EXITED
            LOGGER.debug("%s: session released", self.name)
        return Transition(State.EXIT)

    # Helpers ----------------------------------------------------------
    def _advance_clock(self, session: Session) -> Transition:
        """Count an idle tick; move on to shifting once the threshold is hit."""

        session.ticks += 1
        if session.ticks >= self.pacing_threshold(session.speed):
            session.ticks = 0
            return Transition(State.SHIFTING)
        return Transition(State.MOVING)

    def _award(self, session: Session, points: int) -> None:
        """Add ``points`` and refresh the high score, level and speed."""

        session.score += points
        if session.score > session.high_score:
            session.high_score = session.score
        session.level = max(session.level, level_for_score(session.score, self.points_per_level))
        session.speed = session.level

    def _save_high_score(self, session: Session) -> None:
        if session.score > 0 and session.high_score == session.score:
            self.high_scores.save(session.high_score)

    # Game hooks -------------------------------------------------------
    def _reset_field(self, session: Session) -> None:
        if session.grid is not None:
            session.grid.clear()

    @abstractmethod
    def _prepare(self, session: Session) -> None:
        """Set up the first piece or body of a new game."""

    def _release(self, session: Session) -> None:
        pass
