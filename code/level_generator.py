"""Public entry points: generate dungeons and towns as :class:`LevelResult` values.

Collaborators persist ``LevelResult.tiles`` verbatim and validate movement
with :meth:`LevelResult.is_walkable`; tile codes 0 (wall), 1 (floor) and
2 (door) and the rule "walkable iff code is 1 or 2" are a stable contract.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from dungeon_generator import BaseLevelGenerator, DungeonGenerator
from errors import GenerationFailure
from geometry import Position
from level_config import DungeonParams, GenerationParams, LevelType, TownParams
from level_constants import DEFAULT_CENTRAL_ROOM_MULTIPLIER, SPAWN_NEARBY_RADIUS
from models import TileType
from room_templates import TemplateCatalog
from town_generator import TownGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelMetadata:
    room_count: int
    seed: int
    generation_time_ms: float
    special_features: Tuple[str, ...] = ()
    category_counts: Dict[str, int] = field(default_factory=dict)
    connected_components: int = 1
    phase_timings_ms: Optional[Dict[str, Dict[str, float | int]]] = None


@dataclass(frozen=True)
class LevelResult:
    """A finished level: flattened tiles plus spawn data and metadata."""

    level_type: LevelType
    name: str
    width: int
    height: int
    tiles: bytes
    spawn_position: Position
    spawn_points: Tuple[Position, ...]
    is_starting_town: bool
    metadata: LevelMetadata

    @property
    def room_count(self) -> int:
        return self.metadata.room_count

    @property
    def seed(self) -> int:
        return self.metadata.seed

    @property
    def generation_time(self) -> float:
        """Elapsed generation time in milliseconds."""
        return self.metadata.generation_time_ms

    @property
    def special_features(self) -> Tuple[str, ...]:
        return self.metadata.special_features

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> TileType:
        if not self.in_bounds(x, y):
            return TileType.WALL
        return TileType.from_code(self.tiles[y * self.width + x])

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tiles[y * self.width + x] in (TileType.FLOOR, TileType.DOOR)

    def spawn_positions_near_primary(self, radius: int = SPAWN_NEARBY_RADIUS) -> List[Position]:
        """Walkable tiles in the square of ``radius`` around the primary spawn."""
        origin = self.spawn_position
        positions = [
            Position(origin.x + dx, origin.y + dy)
            for dy in range(-radius, radius + 1)
            for dx in range(-radius, radius + 1)
            if self.is_walkable(origin.x + dx, origin.y + dy)
        ]
        return positions or [origin]

    def rows(self) -> List[bytes]:
        return [self.tiles[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    def to_dict(self) -> Dict[str, Any]:
        metadata = self.metadata
        return {
            "level_type": self.level_type.value,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "tiles": list(self.tiles),
            "spawn_position": list(self.spawn_position),
            "spawn_points": [list(point) for point in self.spawn_points],
            "is_starting_town": self.is_starting_town,
            "metadata": {
                "room_count": metadata.room_count,
                "seed": metadata.seed,
                "generation_time_ms": metadata.generation_time_ms,
                "special_features": list(metadata.special_features),
                "category_counts": dict(metadata.category_counts),
                "connected_components": metadata.connected_components,
                "phase_timings_ms": metadata.phase_timings_ms,
            },
        }


def _build_result(
    level_type: LevelType,
    name: str,
    generator: BaseLevelGenerator,
    started: float,
    special_features: List[str],
    is_starting_town: bool,
) -> LevelResult:
    layout = generator.layout
    metadata = LevelMetadata(
        room_count=len(layout.rooms),
        seed=generator.seed,
        generation_time_ms=(perf_counter() - started) * 1000.0,
        special_features=tuple(special_features),
        category_counts=layout.category_counts(),
        connected_components=generator.connectivity.component_count if generator.connectivity else 0,
        phase_timings_ms=generator.metrics.snapshot() if generator.metrics is not None else None,
    )
    return LevelResult(
        level_type=level_type,
        name=name,
        width=layout.width,
        height=layout.height,
        tiles=layout.flattened_tiles(),
        spawn_position=generator.spawn_position,
        spawn_points=tuple(generator.spawn_points),
        is_starting_town=is_starting_town,
        metadata=metadata,
    )


def generate_dungeon_with_params(
    name: str,
    seed: int,
    params: DungeonParams,
    catalog: Optional[TemplateCatalog] = None,
) -> LevelResult:
    started = perf_counter()
    generator = DungeonGenerator(params, seed, catalog)
    generator.generate()

    features = []
    if generator.used_pinned_central:
        features.append("Central Room Template")
    central = generator.central_room_position()
    if central is not None:
        features.append(f"Central Room at ({central.x}, {central.y})")

    result = _build_result(LevelType.DUNGEON, name, generator, started, features, False)
    logger.info(
        "Generated dungeon '%s' (seed %s): %dx%d, %d rooms in %.1f ms",
        name,
        seed,
        result.width,
        result.height,
        result.room_count,
        result.generation_time,
    )
    return result


def generate_town_with_params(
    name: str,
    seed: int,
    params: TownParams,
    catalog: Optional[TemplateCatalog] = None,
) -> LevelResult:
    started = perf_counter()
    generator = TownGenerator(params, seed, catalog)
    generator.generate()

    features = []
    if params.is_starting_town:
        features.append("Starting Town")
    features.append("Town Square")

    result = _build_result(LevelType.TOWN, name, generator, started, features, params.is_starting_town)
    logger.info(
        "Generated town '%s' (seed %s): %dx%d, %d buildings in %.1f ms",
        name,
        seed,
        result.width,
        result.height,
        result.room_count,
        result.generation_time,
    )
    return result


def generate_dungeon(
    name: str,
    seed: int,
    rooms_wide: int,
    rooms_high: int,
    room_w: int,
    room_h: int,
) -> LevelResult:
    params = DungeonParams(
        rooms_wide=rooms_wide,
        rooms_high=rooms_high,
        room_width=room_w,
        room_height=room_h,
        central_room_multiplier=min(DEFAULT_CENTRAL_ROOM_MULTIPLIER, rooms_wide, rooms_high),
    )
    return generate_dungeon_with_params(name, seed, params)


def generate_town(
    name: str,
    seed: int,
    town_grid_size: int,
    room_w: int,
    room_h: int,
    is_starting_town: bool,
) -> LevelResult:
    params = TownParams(
        grid_size=town_grid_size,
        room_width=room_w,
        room_height=room_h,
        is_starting_town=is_starting_town,
    )
    return generate_town_with_params(name, seed, params)


def generate(
    level_type: LevelType,
    name: str,
    seed: int,
    params: Optional[GenerationParams] = None,
) -> LevelResult:
    """Dispatch on ``level_type``. Wilderness and instance levels are not implemented."""
    if params is None:
        params = GenerationParams()
    if level_type is LevelType.DUNGEON:
        return generate_dungeon_with_params(name, seed, params.dungeon)
    if level_type is LevelType.TOWN:
        return generate_town_with_params(name, seed, params.town)
    if level_type in (LevelType.WILDERNESS, LevelType.INSTANCE):
        raise GenerationFailure(f"{level_type.value.capitalize()} generation is not implemented")
    raise GenerationFailure(f"Unknown level type {level_type!r}")
