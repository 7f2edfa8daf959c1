"""Shared constants for the level generator."""

from __future__ import annotations

DEFAULT_MIN_ROOM_SIZE = 20  # Every placed room is at least this many tiles on each axis.

DEFAULT_DUNGEON_GRID = 3
DEFAULT_DUNGEON_ROOM_SIZE = 20
DEFAULT_CENTRAL_ROOM_MULTIPLIER = 2

DEFAULT_TOWN_GRID = 3
DEFAULT_TOWN_ROOM_SIZE = 30

MAX_INTERIOR_ATTEMPTS = 10  # Template draws per interior cell before falling back to a blank room.
EXTRA_CONNECTION_CHANCE = 0.3  # Spanning-tree policy: chance to open each non-tree adjacency.

SPAWN_EDGE_DISTANCE = 2  # Edge-floor fallback keeps floor tiles closer than this to the border.
SPAWN_CORNER_MARGIN = 2  # Synthetic fallback spawn points sit this far in from each edge.
TOWN_SPAWN_RADIUS = 5
TOWN_SPAWN_RING_POINTS = 8
SPAWN_NEARBY_RADIUS = 2

TOWN_SQUARE_TEMPLATE = "town_square"
TOWN_GATE_TEMPLATE = "town_gate"
# Classic layout used for 3x3 towns, listed row by row.
STARTING_TOWN_LAYOUT = (
    ("residential", "blacksmith", "residential"),
    ("market", TOWN_SQUARE_TEMPLATE, "general_store"),
    (TOWN_GATE_TEMPLATE, "tavern", TOWN_GATE_TEMPLATE),
)

# Template legend.
GLYPH_WALL = "#"
GLYPH_FLOOR = "."
GLYPH_DOOR = "D"
GLYPH_CONNECTOR = "C"
GLYPH_SPAWN = "S"
GLYPH_SPECIAL_FLOOR = "T"
GLYPH_BLANK = " "
