"""Rules engines for the falling-block and snake brick games."""

from .grid import Grid
from .shapes import Piece, PieceType
from .body import Cell, Direction, SnakeBody
from .session import GameStatus, Intent, Session, SnakeSession, State, TetrisSession
from .snapshot import Snapshot
from .highscore import FileHighScoreStore, MemoryHighScoreStore
from .controls import translate
from .engine import Engine, Transition
from .tetris import TetrisEngine
from .snake import SnakeEngine

ENGINES = {
    "tetris": TetrisEngine,
    "snake": SnakeEngine,
}

__all__ = [
    "Grid",
    "Piece",
    "PieceType",
    "Cell",
    "Direction",
    "SnakeBody",
    "GameStatus",
    "Intent",
    "Session",
    "SnakeSession",
    "State",
    "TetrisSession",
    "Snapshot",
    "FileHighScoreStore",
    "MemoryHighScoreStore",
    "translate",
    "Engine",
    "Transition",
    "TetrisEngine",
    "SnakeEngine",
    "ENGINES",
]
