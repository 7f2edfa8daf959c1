"""Coarse room-slot occupancy grid."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from geometry import Position

Cell = Tuple[int, int]


class RoomGrid:
    """``cells[gy][gx]`` holds the index of the room covering that slot, or ``None``."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("RoomGrid width and height must be positive")
        self.width = width
        self.height = height
        self.cells: List[List[Optional[int]]] = [[None] * width for _ in range(height)]

    def in_bounds(self, gx: int, gy: int) -> bool:
        return 0 <= gx < self.width and 0 <= gy < self.height

    def room_at(self, gx: int, gy: int) -> Optional[int]:
        if not self.in_bounds(gx, gy):
            raise IndexError(f"Grid cell {(gx, gy)} outside {self.width}x{self.height} grid")
        return self.cells[gy][gx]

    def is_free(self, gx: int, gy: int) -> bool:
        return self.room_at(gx, gy) is None

    def occupy(self, gx: int, gy: int, room_index: int, span_x: int = 1, span_y: int = 1) -> None:
        """Mark a ``span_x`` x ``span_y`` block starting at ``(gx, gy)`` as taken."""
        for y in range(gy, gy + span_y):
            for x in range(gx, gx + span_x):
                if not self.is_free(x, y):
                    raise ValueError(
                        f"Grid cell {(x, y)} already holds room {self.cells[y][x]}"
                    )
        for y in range(gy, gy + span_y):
            for x in range(gx, gx + span_x):
                self.cells[y][x] = room_index

    def is_edge_cell(self, gx: int, gy: int) -> bool:
        return gx == 0 or gy == 0 or gx == self.width - 1 or gy == self.height - 1

    def cells_row_major(self) -> Iterator[Cell]:
        for gy in range(self.height):
            for gx in range(self.width):
                yield gx, gy

    def free_edge_cells(self) -> List[Cell]:
        return [cell for cell in self.cells_row_major() if self.is_edge_cell(*cell) and self.is_free(*cell)]

    def free_interior_cells(self) -> List[Cell]:
        return [
            cell for cell in self.cells_row_major() if not self.is_edge_cell(*cell) and self.is_free(*cell)
        ]

    def occupied_count(self) -> int:
        return sum(1 for cell in self.cells_row_major() if not self.is_free(*cell))

    @staticmethod
    def cell_origin(gx: int, gy: int, room_width: int, room_height: int) -> Position:
        """Canvas position of a cell's top-left tile; neighbours share one wall."""
        return Position(gx * (room_width - 1), gy * (room_height - 1))
