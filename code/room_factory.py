"""Instantiate placed rooms from parsed templates or as blank fallbacks."""

from __future__ import annotations

from typing import List

from geometry import Position
from level_constants import DEFAULT_MIN_ROOM_SIZE
from models import ParsedRoom, Room, RoomCategory, RoomTemplate, TileType, rows_from_tiles
from template_parser import parse_room_template


class RoomFactory:
    """Builds :class:`Room` instances at global canvas positions.

    The parsed template is never aliased: every room receives its own copy of
    the tile grid because the connectivity pass later turns connectors into
    doors in place.
    """

    def __init__(self, min_room_size: int = DEFAULT_MIN_ROOM_SIZE) -> None:
        if min_room_size < 3:
            raise ValueError("min_room_size must be at least 3")
        self.min_room_size = min_room_size

    def create_room(self, template: RoomTemplate, position: Position) -> Room:
        """Place ``template`` at exactly its authored size."""
        parsed = parse_room_template(template)
        return Room(
            position=position,
            width=parsed.width,
            height=parsed.height,
            tiles=rows_from_tiles(parsed.tiles),
            connectors=list(parsed.connectors),
            spawn_points=list(parsed.spawn_points),
            is_central=parsed.is_central,
            category=parsed.category,
            template_name=parsed.name,
        )

    def create_room_with_min_size(
        self,
        template: RoomTemplate,
        position: Position,
        min_width: int,
        min_height: int,
    ) -> Room:
        """Place ``template`` grown to at least ``min_width`` x ``min_height``.

        The pattern is centred inside a wall-filled canvas. Connectors and
        spawn markers move with it.
        """
        parsed = parse_room_template(template)
        return self._grow(parsed, position, max(parsed.width, min_width), max(parsed.height, min_height))

    def create_blank_room(
        self,
        position: Position,
        width: int,
        height: int,
        is_central: bool = False,
        category: RoomCategory = RoomCategory.COMBAT,
    ) -> Room:
        """Procedural fallback: wall perimeter, floor interior, generated connectors."""
        width = max(width, self.min_room_size)
        height = max(height, self.min_room_size)

        tiles: List[List[TileType]] = []
        for y in range(height):
            row = []
            for x in range(width):
                on_edge = x == 0 or y == 0 or x == width - 1 or y == height - 1
                row.append(TileType.WALL if on_edge else TileType.FLOOR)
            tiles.append(row)

        if is_central:
            connectors = _every_other_wall_cell(width, height)
        else:
            connectors = _side_midpoint_pairs(width, height)

        return Room(
            position=position,
            width=width,
            height=height,
            tiles=tiles,
            connectors=connectors,
            spawn_points=[],
            is_central=is_central,
            category=RoomCategory.CENTRAL if is_central else category,
            template_name=None,
        )

    def _grow(self, parsed: ParsedRoom, position: Position, width: int, height: int) -> Room:
        offset_x = (width - parsed.width) // 2
        offset_y = (height - parsed.height) // 2

        tiles = [[TileType.WALL] * width for _ in range(height)]
        for y, row in enumerate(parsed.tiles):
            tiles[y + offset_y][offset_x:offset_x + parsed.width] = list(row)

        return Room(
            position=position,
            width=width,
            height=height,
            tiles=tiles,
            connectors=[pos.offset(offset_x, offset_y) for pos in parsed.connectors],
            spawn_points=[pos.offset(offset_x, offset_y) for pos in parsed.spawn_points],
            is_central=parsed.is_central,
            category=parsed.category,
            template_name=parsed.name,
        )


def _side_midpoint_pairs(width: int, height: int) -> List[Position]:
    """Two consecutive connector cells at the middle of each wall.

    Any two such pairs on a shared wall are at most one tile apart, so
    neighbouring rooms always find an adjacent partner.
    """
    mid_x = width // 2
    mid_y = height // 2
    return [
        Position(mid_x - 1, 0),
        Position(mid_x, 0),
        Position(mid_x - 1, height - 1),
        Position(mid_x, height - 1),
        Position(0, mid_y - 1),
        Position(0, mid_y),
        Position(width - 1, mid_y - 1),
        Position(width - 1, mid_y),
    ]


def _every_other_wall_cell(width: int, height: int) -> List[Position]:
    # Every even offset, corners excluded: any neighbour's consecutive pair
    # then has a partner exactly one tile away.
    connectors = []
    for x in range(2, width - 2, 2):
        connectors.append(Position(x, 0))
        connectors.append(Position(x, height - 1))
    for y in range(2, height - 2, 2):
        connectors.append(Position(0, y))
        connectors.append(Position(width - 1, y))
    return connectors
