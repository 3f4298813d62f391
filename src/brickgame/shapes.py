"""Piece definitions for the falling-block game.

Each piece kind is described by a 4x4 occupancy template.  Rotation turns the
template in place: the ``I`` piece spins inside the full 4x4 box while every
other kind spins inside its top-left 3x3 box, which keeps the pieces roughly
centred on their anchor.  The square never rotates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

TEMPLATE_SIDE = 4

# Anchor of a freshly spawned piece as ``(row, col)``.  Every spawn template
# leaves its first row empty so the piece appears on grid rows 0-1.
SPAWN_POSITION: Tuple[int, int] = (-1, 3)

Template = NDArray[np.uint8]


class PieceType(str, Enum):
    """Enumeration of the seven piece shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


_SPAWN_CELLS: Dict[PieceType, List[Tuple[int, int]]] = {
    PieceType.I: [(1, 0), (1, 1), (1, 2), (1, 3)],
    PieceType.J: [(1, 0), (1, 1), (1, 2), (2, 2)],
    PieceType.L: [(1, 0), (1, 1), (1, 2), (2, 0)],
    PieceType.O: [(1, 1), (1, 2), (2, 1), (2, 2)],
    PieceType.S: [(2, 0), (2, 1), (1, 1), (1, 2)],
    PieceType.T: [(1, 0), (1, 1), (1, 2), (2, 1)],
    PieceType.Z: [(1, 0), (1, 1), (2, 1), (2, 2)],
}


def spawn_template(kind: PieceType) -> Template:
    """Return a fresh copy of the spawn-orientation template for ``kind``."""

    template = np.zeros((TEMPLATE_SIDE, TEMPLATE_SIDE), dtype=np.uint8)
    for row, col in _SPAWN_CELLS[kind]:
        template[row, col] = 1
    return template


def _pivot_box(kind: PieceType) -> int:
    return TEMPLATE_SIDE if kind is PieceType.I else TEMPLATE_SIDE - 1


def rotate_template(template: Template, kind: PieceType, direction: int = 1) -> Template:
    """Return ``template`` turned a quarter turn.

    Positive ``direction`` turns clockwise, negative counter-clockwise.  Cells
    outside the pivot box are left untouched.
    """

    side = _pivot_box(kind)
    rotated = template.copy()
    k = -1 if direction > 0 else 1
    rotated[:side, :side] = np.rot90(template[:side, :side], k=k)
    return rotated


@dataclass(eq=False)
class Piece:
    """A piece template anchored at ``position`` on the grid."""

    kind: PieceType
    template: Template = field(default=None)  # type: ignore[assignment]
    position: Tuple[int, int] = SPAWN_POSITION  # (row, col)

    def __post_init__(self) -> None:
        if self.template is None:
            self.template = spawn_template(self.kind)

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece in place; the square is left as is."""

        if self.kind is PieceType.O:
            return
        self.template = rotate_template(self.template, self.kind, direction)

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        self.position = (row + dy, col + dx)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the grid coordinates covered by this piece."""

        row, col = self.position
        rows, cols = np.nonzero(self.template)
        return [(row + int(r), col + int(c)) for r, c in zip(rows, cols)]

    def preview(self) -> Tuple[Tuple[int, ...], ...]:
        """Return the template as nested tuples for read-only consumers."""

        return tuple(tuple(int(v) for v in row) for row in self.template)
