"""Utility helpers for the brick game engines."""

from __future__ import annotations

import sys

from .grid import EMPTY, MARKER, Grid
from .shapes import Piece
from .snapshot import Snapshot


# Ticks per automatic advance at speed 1, divided by ten.  Terminal input on
# macOS is polled far less often, so the base is scaled down there.
BASE_TIMEOUT = 50 if sys.platform == "darwin" else 350

MAX_LEVEL = 10


def tick_threshold(speed: int, scale: float = 1.0) -> float:
    """Return the tick count after which the engine advances on its own.

    The threshold shrinks as ``speed`` grows, so later levels advance more
    often.  ``scale`` shortens or stretches the interval for a given game.
    """

    return BASE_TIMEOUT * scale / (speed * 0.1)


def level_for_score(score: int, points_per_level: int) -> int:
    """Return the level reached with ``score``, capped at ``MAX_LEVEL``."""

    return min(MAX_LEVEL, 1 + score // points_per_level)


def collides(grid: Grid, piece: Piece) -> bool:
    """Return ``True`` if ``piece`` overlaps a block or leaves ``grid``.

    The piece's own cells must already be lifted off the grid, otherwise it
    collides with itself.
    """

    return any(grid.blocked(row, col) for row, col in piece.blocks())


_CELL_CHARS = {EMPTY: ".", MARKER: "@"}


def render_ascii(snapshot: Snapshot, preview: bool = True) -> str:
    """Return ``snapshot`` drawn as text with a one-line HUD underneath."""

    lines = []
    if snapshot.grid is not None:
        for row in snapshot.grid:
            lines.append("".join(_CELL_CHARS.get(cell, "#") for cell in row))
    if preview and snapshot.preview is not None:
        lines.append("")
        for row in snapshot.preview:
            lines.append("".join("#" if cell else "." for cell in row))
    lines.append(
        f"score={snapshot.score} high={snapshot.high_score} "
        f"level={snapshot.level} speed={snapshot.speed} "
        f"status={snapshot.status.value}"
    )
    return "\n".join(lines)
