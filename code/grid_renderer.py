"""Stamp placed rooms onto the tile canvas and draw it as ASCII."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from geometry import Position
from level_constants import GLYPH_DOOR, GLYPH_FLOOR, GLYPH_SPAWN, GLYPH_WALL
from level_layout import LevelLayout
from models import Room, TileType

TILE_GLYPHS = {
    TileType.WALL: GLYPH_WALL,
    TileType.FLOOR: GLYPH_FLOOR,
    TileType.DOOR: GLYPH_DOOR,
}


class GridRenderer:
    """Writes rooms into a layout's canvas in placement order."""

    def __init__(self, background: TileType = TileType.WALL) -> None:
        self.background = background

    def clear(self, layout: LevelLayout) -> None:
        for row in layout.canvas:
            for x in range(layout.width):
                row[x] = self.background

    def render(self, layout: LevelLayout) -> None:
        """Clear the canvas and stamp every room; later rooms win on shared walls."""
        self.clear(layout)
        for room in layout.rooms:
            self.stamp_room(layout, room)

    def stamp_room(self, layout: LevelLayout, room: Room) -> None:
        origin_x, origin_y = room.position
        for local_y, row in enumerate(room.tiles):
            y = origin_y + local_y
            if not 0 <= y < layout.height:
                continue
            for local_x, tile in enumerate(row):
                x = origin_x + local_x
                if 0 <= x < layout.width:
                    layout.canvas[y][x] = tile


def render_ascii(
    canvas: Sequence[Sequence[TileType]],
    spawn_points: Optional[Iterable[Position]] = None,
) -> List[str]:
    """Return one string per canvas row, marking spawn points with ``S``."""
    lines = [[TILE_GLYPHS[TileType(tile)] for tile in row] for row in canvas]
    for point in spawn_points or ():
        if 0 <= point.y < len(lines) and 0 <= point.x < len(lines[point.y]):
            lines[point.y][point.x] = GLYPH_SPAWN
    return ["".join(row) for row in lines]


def print_grid(lines: Iterable[str], horizontal_sep: str = "") -> None:
    """Prints the ASCII grid to the console."""
    for line in lines:
        print(horizontal_sep.join(line))
