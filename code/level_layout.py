"""Mutable placement state owned by one generation call."""

from __future__ import annotations

from typing import Dict, List, Optional

from errors import SizeConstraintViolation
from geometry import Position
from models import Room, RoomCategory, TileType
from room_grid import RoomGrid


class LevelLayout:
    """Stores the room list, room grid and tile canvas for a single level."""

    def __init__(self, grid_width: int, grid_height: int, canvas_width: int, canvas_height: int) -> None:
        self.room_grid = RoomGrid(grid_width, grid_height)
        self.width = canvas_width
        self.height = canvas_height
        self.rooms: List[Room] = []
        self.canvas: List[List[TileType]] = [[TileType.WALL] * canvas_width for _ in range(canvas_height)]

    def check_fits(self, room: Room) -> None:
        if not room.bounds.fits_within(self.width, self.height):
            raise SizeConstraintViolation(room.bounds, self.width, self.height)

    def register_room(self, room: Room, gx: int, gy: int, span: int = 1) -> int:
        """Append ``room`` and claim its grid cells. Returns the new room index."""
        self.check_fits(room)
        room_index = len(self.rooms)
        self.room_grid.occupy(gx, gy, room_index, span, span)
        room.index = room_index
        self.rooms.append(room)
        return room_index

    def central_room(self) -> Optional[Room]:
        for room in self.rooms:
            if room.is_central:
                return room
        return None

    def rooms_in_category(self, category: RoomCategory) -> List[Room]:
        return [room for room in self.rooms if room.category is category]

    def category_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for room in self.rooms:
            counts[room.category.value] = counts.get(room.category.value, 0) + 1
        return counts

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def tile_at(self, pos: Position) -> TileType:
        return self.canvas[pos.y][pos.x]

    def set_tile(self, pos: Position, tile: TileType) -> None:
        self.canvas[pos.y][pos.x] = tile

    def flattened_tiles(self) -> bytes:
        """Row-major tile codes, ``tiles[y * width + x]``."""
        return bytes(int(tile) for row in self.canvas for tile in row)

    def door_count(self) -> int:
        return sum(1 for row in self.canvas for tile in row if tile is TileType.DOOR)
