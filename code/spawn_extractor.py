"""Derive player spawn points from a connected layout."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import List, Optional

from geometry import Position
from level_constants import (
    SPAWN_CORNER_MARGIN,
    SPAWN_EDGE_DISTANCE,
    TOWN_SPAWN_RADIUS,
    TOWN_SPAWN_RING_POINTS,
)
from level_layout import LevelLayout
from models import RoomCategory, TileType

logger = logging.getLogger(__name__)


class SpawnExtractor:
    """Collects spawn points from a rendered, connected layout.

    Dungeons try three sources in order and keep the first non-empty one:
    ``S`` markers in SPAWN rooms, floor near the canvas border in edge rooms,
    then four synthetic points near the corners.
    """

    def __init__(self, layout: LevelLayout) -> None:
        self.layout = layout

    # Dungeon -----------------------------------------------------------------

    def dungeon_spawn_points(self) -> List[Position]:
        points = self.marker_spawn_points()
        if points:
            return points
        logger.warning("No spawn markers found; falling back to edge floor tiles")
        points = self.edge_floor_spawn_points()
        if points:
            return points
        logger.warning("No edge floor tiles found; falling back to synthetic corner spawns")
        return self.corner_spawn_points()

    def marker_spawn_points(self) -> List[Position]:
        points = []
        for room in self.layout.rooms_in_category(RoomCategory.SPAWN):
            for pos in room.global_spawn_points():
                if self.layout.in_bounds(pos) and self.layout.tile_at(pos) is TileType.FLOOR:
                    points.append(pos)
        return points

    def edge_floor_spawn_points(self) -> List[Position]:
        layout = self.layout
        points = []
        seen = set()
        for room in layout.rooms:
            if room.is_central or not room.touches_canvas_edge(layout.width, layout.height):
                continue
            bounds = room.bounds
            for y in range(max(bounds.y, 0), min(bounds.max_y, layout.height)):
                for x in range(max(bounds.x, 0), min(bounds.max_x, layout.width)):
                    pos = Position(x, y)
                    if pos in seen or layout.tile_at(pos) is not TileType.FLOOR:
                        continue
                    if _edge_distance(pos, layout.width, layout.height) < SPAWN_EDGE_DISTANCE:
                        seen.add(pos)
                        points.append(pos)
        return points

    def corner_spawn_points(self) -> List[Position]:
        """Four points ``SPAWN_CORNER_MARGIN`` in from each corner, moved onto floor."""
        layout = self.layout
        margin = SPAWN_CORNER_MARGIN
        far_x = max(layout.width - 1 - margin, 0)
        far_y = max(layout.height - 1 - margin, 0)
        corners = [
            Position(min(margin, far_x), min(margin, far_y)),
            Position(far_x, min(margin, far_y)),
            Position(min(margin, far_x), far_y),
            Position(far_x, far_y),
        ]
        points = []
        for corner in corners:
            nearest = self.nearest_floor(corner)
            if nearest is None:
                return corners
            if nearest not in points:
                points.append(nearest)
        return points

    def nearest_floor(self, start: Position) -> Optional[Position]:
        """Breadth-first search over the canvas for the closest FLOOR tile."""
        layout = self.layout
        if not layout.in_bounds(start):
            return None
        queue = deque([start])
        visited = {start}
        while queue:
            pos = queue.popleft()
            if layout.tile_at(pos) is TileType.FLOOR:
                return pos
            for neighbor in pos.neighbors():
                if neighbor not in visited and layout.in_bounds(neighbor):
                    visited.add(neighbor)
                    queue.append(neighbor)
        return None

    # Town --------------------------------------------------------------------

    def town_spawn_points(self) -> List[Position]:
        """A ring around the town-square centre, falling back to the centre."""
        central = self.layout.central_room()
        if central is None:
            return self.dungeon_spawn_points()
        center = central.center
        points = []
        for k in range(TOWN_SPAWN_RING_POINTS):
            angle = 2.0 * math.pi * k / TOWN_SPAWN_RING_POINTS
            pos = center.offset(
                int(TOWN_SPAWN_RADIUS * math.cos(angle)),
                int(TOWN_SPAWN_RADIUS * math.sin(angle)),
            )
            if self.layout.in_bounds(pos) and self.layout.tile_at(pos) is TileType.FLOOR:
                points.append(pos)
        if not points:
            logger.warning("Town square ring is blocked; spawning near its centre")
            points.append(self.nearest_floor(center) or center)
        return points

    def town_primary_spawn(self, points: List[Position]) -> Position:
        central = self.layout.central_room()
        if central is not None:
            center = central.center
            if self.layout.in_bounds(center) and self.layout.tile_at(center).is_walkable:
                return center
        return points[0]


def _edge_distance(pos: Position, width: int, height: int) -> int:
    return min(pos.x, pos.y, width - 1 - pos.x, height - 1 - pos.y)


def best_spawn_point(points: List[Position], width: int, height: int) -> Position:
    """The first point closest to any canvas edge."""
    if not points:
        raise ValueError("No spawn points to choose from")
    return min(points, key=lambda pos: _edge_distance(pos, width, height))
