"""Snake body and look-direction model."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Deque, Iterable, Iterator, NamedTuple, Optional


class Cell(NamedTuple):
    """Grid coordinate given as column ``x`` and row ``y``."""

    x: int
    y: int

    def step(self, direction: "Direction") -> "Cell":
        dx, dy = direction.offset
        return Cell(self.x + dx, self.y + dy)


class Direction(str, Enum):
    """Cardinal look directions, listed in clockwise order."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]

    def turn_right(self) -> "Direction":
        order = list(Direction)
        return order[(order.index(self) + 1) % len(order)]

    def turn_left(self) -> "Direction":
        order = list(Direction)
        return order[(order.index(self) - 1) % len(order)]


_OFFSETS = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}

# Column 5, rows 12 (tail) up to 9 (head).
SPAWN_BODY = (Cell(5, 12), Cell(5, 11), Cell(5, 10), Cell(5, 9))
SPAWN_DIRECTION = Direction.UP


class SnakeBody:
    """Ordered segments from tail (left end) to head (right end)."""

    def __init__(self, cells: Optional[Iterable[Cell]] = None) -> None:
        self._segments: Deque[Cell] = deque(Cell(*c) for c in cells or ())

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._segments)

    def __contains__(self, cell: object) -> bool:
        return cell in self._segments

    @property
    def head(self) -> Cell:
        return self._segments[-1]

    @property
    def tail(self) -> Cell:
        return self._segments[0]

    def push_head(self, cell: Cell) -> None:
        self._segments.append(cell)

    def pop_tail(self) -> Cell:
        return self._segments.popleft()

    def push_tail(self, cell: Cell) -> None:
        """Re-attach ``cell`` behind the tail, growing the body by one."""

        self._segments.appendleft(cell)

    def clear(self) -> None:
        self._segments.clear()
