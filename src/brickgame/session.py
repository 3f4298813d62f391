"""Mutable session records stepped by the engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import random

from .body import SPAWN_DIRECTION, Cell, Direction, SnakeBody
from .grid import Grid
from .shapes import Piece


class Intent(str, Enum):
    """Abstract player actions consumed by the engine."""

    START = "start"
    PAUSE = "pause"
    TERMINATE = "terminate"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ACTION = "action"


# ``UP`` has no effect in any state, so it doubles as "nothing pressed".
NO_INTENT = Intent.UP


class GameStatus(str, Enum):
    """Pause/outcome status reported to renderers."""

    STARTING = "starting"
    PLAYING = "playing"
    PAUSED = "paused"
    LOST = "lost"
    WON = "won"
    EXITED = "exited"


class State(str, Enum):
    """States of the engine's finite-state machine."""

    START = "start"
    SPAWN = "spawn"
    MOVING = "moving"
    SHIFTING = "shifting"
    ATTACHING = "attaching"
    PAUSE = "pause"
    GAME_OVER = "game_over"
    GAME_OVER_WON = "game_over_won"
    EXIT = "exit"


@dataclass
class Session:
    """State shared by both games.

    ``grid`` stays ``None`` until the engine first enters the pause state
    while starting, and returns to ``None`` once the session exits.
    """

    grid: Optional[Grid] = None
    score: int = 0
    high_score: int = 0
    level: int = 1
    speed: int = 1
    ticks: int = 0
    status: GameStatus = GameStatus.STARTING
    state: State = State.PAUSE
    intent: Intent = NO_INTENT
    seed: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        if self.seed is not None:
            self.rng.seed(self.seed)

    def submit_intent(self, intent: Intent) -> None:
        """Record ``intent`` for the next tick, replacing any unconsumed one."""

        self.intent = intent


@dataclass
class TetrisSession(Session):
    """Session for the falling-block game."""

    active: Optional[Piece] = None
    upcoming: Optional[Piece] = None


@dataclass
class SnakeSession(Session):
    """Session for the snake game."""

    body: SnakeBody = field(default_factory=SnakeBody)
    direction: Direction = SPAWN_DIRECTION
    apple: Optional[Cell] = None
