"""Geometry helpers for tile positions, rectangles, and cardinal directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Direction(Enum):
    """The four grid directions; values are ``(dx, dy)`` steps with y growing downward."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dx, -self.dy))

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Direction:
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported direction {value}") from exc


@dataclass(frozen=True, order=True)
class Position:
    """Integer tile coordinate, used in both room-local and canvas-global space."""

    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> int:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        raise IndexError("Position only supports two coordinates")

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy)

    def step(self, direction: Direction) -> Position:
        return Position(self.x + direction.dx, self.y + direction.dy)

    def neighbors(self) -> Iterator[Position]:
        """Yield the four orthogonal neighbours in N, E, S, W order."""
        for direction in Direction:
            yield self.step(direction)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_orthogonally_adjacent(self, other: Position) -> bool:
        """True when the two cells differ by exactly one step along a single axis."""
        dx = abs(self.x - other.x)
        dy = abs(self.y - other.y)
        return (dx == 1 and dy == 0) or (dx == 0 and dy == 1)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Position:
        return cls(*value)


@dataclass(frozen=True)
class Rect:
    """Tile-aligned rectangle; ``x``/``y`` is the top-left tile."""

    x: int
    y: int
    width: int
    height: int

    @property
    def max_x(self) -> int:
        """One past the rightmost column."""
        return self.x + self.width

    @property
    def max_y(self) -> int:
        """One past the bottom row."""
        return self.y + self.height

    @property
    def center(self) -> Position:
        return Position(self.x + self.width // 2, self.y + self.height // 2)

    def overlaps(self, other: Rect) -> bool:
        """True when the two rects share at least one tile."""
        if self.max_x <= other.x or other.max_x <= self.x:
            return False
        if self.max_y <= other.y or other.max_y <= self.y:
            return False
        return True

    def contains(self, point: Position) -> bool:
        """True when ``point`` is one of the rect's tiles."""
        return self.x <= point.x < self.max_x and self.y <= point.y < self.max_y

    def fits_within(self, width: int, height: int) -> bool:
        """Return True if the rect lies entirely inside a ``width`` x ``height`` canvas."""
        return 0 <= self.x and 0 <= self.y and self.max_x <= width and self.max_y <= height

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height
