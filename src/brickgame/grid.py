"""Grid representation shared by both games."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np
from numpy.typing import NDArray


# Dimensions of the playing field.
WIDTH = 10
HEIGHT = 20

# Cell codes.  ``MARKER`` tags the snake's apple; it is visible to renderers
# but never blocks movement.
EMPTY = 0
OCCUPIED = 1
MARKER = 2

Cells = NDArray[np.uint8]
Rows = Tuple[Tuple[int, ...], ...]


def create_empty_cells() -> Cells:
    """Return a new empty cell matrix filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Grid:
    """Fixed-size occupancy map indexed by ``(row, col)``."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.cells: Cells = create_empty_cells()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if self.in_bounds(row, col):
            return int(self.cells[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """
        if self.in_bounds(row, col):
            self.cells[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def blocked(self, row: int, col: int) -> bool:
        """Return ``True`` if a block may not move into ``(row, col)``.

        Off-grid coordinates count as blocked, so movement, rotation and the
        snake's head all share this one check.  Marker cells are free.
        """

        if self.in_bounds(row, col):
            return bool(self.cells[row, col] == OCCUPIED)
        return True

    def fill(self, coordinates: Iterable[Tuple[int, int]], value: int = OCCUPIED) -> None:
        """Write ``value`` into every ``(row, col)`` in ``coordinates``."""

        coords = np.asarray(list(coordinates), dtype=np.int16)
        if coords.size == 0:
            return

        rows, cols = coords.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        self.cells[rows, cols] = np.uint8(value)

    def clear(self) -> None:
        """Reset every cell to ``EMPTY``."""

        self.cells.fill(EMPTY)

    def row_occupied(self, row: int) -> bool:
        """Return ``True`` if any cell of ``row`` holds a block."""

        return bool(np.any(self.cells[row] == OCCUPIED))

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows above each cleared row drop down so the freed rows appear at the
        top of the grid.
        """

        full_rows = np.all(self.cells == OCCUPIED, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.cells[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.cells.dtype)
            self.cells = np.vstack((new_rows, remaining))
        return cleared

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Return the ``(row, col)`` of every empty cell in row-major order."""

        rows, cols = np.nonzero(self.cells == EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def to_rows(self) -> Rows:
        """Return an immutable copy of the cells as nested tuples."""

        return tuple(tuple(int(v) for v in row) for row in self.cells)
