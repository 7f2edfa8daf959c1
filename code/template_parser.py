"""Convert ASCII room templates into typed room shapes."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List

from errors import TemplateParseError
from geometry import Position
from level_constants import (
    GLYPH_BLANK,
    GLYPH_CONNECTOR,
    GLYPH_DOOR,
    GLYPH_FLOOR,
    GLYPH_SPAWN,
    GLYPH_SPECIAL_FLOOR,
    GLYPH_WALL,
)
from models import ParsedRoom, RoomTemplate, TileType

logger = logging.getLogger(__name__)

# Connectors stay walls until the connectivity pass opens them.
GLYPH_TILES: Dict[str, TileType] = {
    GLYPH_WALL: TileType.WALL,
    GLYPH_BLANK: TileType.WALL,
    GLYPH_FLOOR: TileType.FLOOR,
    GLYPH_SPECIAL_FLOOR: TileType.FLOOR,
    GLYPH_SPAWN: TileType.FLOOR,
    GLYPH_DOOR: TileType.DOOR,
    GLYPH_CONNECTOR: TileType.WALL,
}


def _pattern_rows(pattern: str) -> List[str]:
    rows = pattern.splitlines()
    while rows and not rows[0].strip():
        rows.pop(0)
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def parse_room_template(template: RoomTemplate) -> ParsedRoom:
    """Parse ``template`` into a :class:`ParsedRoom`.

    Leading and trailing blank lines are dropped. Every remaining row must be
    as wide as the first one and use only legend glyphs. Results are cached
    per template, which is safe because parsing is pure and ``ParsedRoom`` is
    immutable.
    """
    return _parse_cached(template)


@lru_cache(maxsize=None)
def _parse_cached(template: RoomTemplate) -> ParsedRoom:
    name = template.name
    rows = _pattern_rows(template.pattern)
    if not rows:
        raise TemplateParseError(f"Empty template '{name}'", template_name=name)

    width = len(rows[0])
    tiles = []
    connectors = []
    spawn_points = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise TemplateParseError(
                f"Inconsistent line width in template '{name}' "
                f"(row {y} has {len(row)}, expected {width})",
                template_name=name,
            )
        tile_row = []
        for x, glyph in enumerate(row):
            tile = GLYPH_TILES.get(glyph)
            if tile is None:
                raise TemplateParseError(
                    f"Invalid character '{glyph}' in template '{name}'",
                    template_name=name,
                    character=glyph,
                )
            if glyph == GLYPH_CONNECTOR:
                connectors.append(Position(x, y))
            elif glyph == GLYPH_SPAWN:
                spawn_points.append(Position(x, y))
            tile_row.append(tile)
        tiles.append(tuple(tile_row))

    logger.debug(
        "Parsed template %s: %dx%d, %d connectors, %d spawn markers",
        name,
        width,
        len(rows),
        len(connectors),
        len(spawn_points),
    )
    return ParsedRoom(
        name=name,
        category=template.category,
        width=width,
        height=len(rows),
        tiles=tuple(tiles),
        connectors=tuple(connectors),
        spawn_points=tuple(spawn_points),
        is_central=template.is_central,
    )
