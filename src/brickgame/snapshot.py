"""Read-only projection of a session for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import Rows
from .session import GameStatus, Session, TetrisSession


@dataclass(frozen=True)
class Snapshot:
    grid: Optional[Rows]
    preview: Optional[Tuple[Tuple[int, ...], ...]]
    score: int
    high_score: int
    level: int
    speed: int
    status: GameStatus


def project(session: Session) -> Snapshot:
    """Copy the renderable parts of ``session`` into a :class:`Snapshot`."""

    preview = None
    if isinstance(session, TetrisSession) and session.upcoming is not None:
        preview = session.upcoming.preview()
    return Snapshot(
        grid=session.grid.to_rows() if session.grid is not None else None,
        preview=preview,
        score=session.score,
        high_score=session.high_score,
        level=session.level,
        speed=session.speed,
        status=session.status,
    )
