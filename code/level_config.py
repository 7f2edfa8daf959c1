"""Parameter containers for dungeon and town generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from errors import InvalidParametersError
from level_constants import (
    DEFAULT_CENTRAL_ROOM_MULTIPLIER,
    DEFAULT_DUNGEON_GRID,
    DEFAULT_DUNGEON_ROOM_SIZE,
    DEFAULT_MIN_ROOM_SIZE,
    DEFAULT_TOWN_GRID,
    DEFAULT_TOWN_ROOM_SIZE,
    EXTRA_CONNECTION_CHANCE,
)


class LevelType(Enum):
    DUNGEON = "dungeon"
    TOWN = "town"
    WILDERNESS = "wilderness"
    INSTANCE = "instance"


class ConnectivityPolicy(Enum):
    """How detected connector pairs become doors."""

    FULL_CONNECT = "full_connect"  # Every adjacent connector pair is opened.
    SPANNING_TREE = "spanning_tree"  # BFS tree from the central room plus random extra loops.


def canvas_extent(cells: int, room_size: int) -> int:
    """Tiles spanned by ``cells`` rooms of ``room_size`` sharing one wall each."""
    return room_size + (cells - 1) * (room_size - 1)


def _clamped_room_size(value: int, minimum: int, label: str) -> int:
    if value <= 0:
        raise InvalidParametersError(f"{label} must be positive, got {value}")
    return max(int(value), minimum)


@dataclass(frozen=True)
class DungeonParams:
    """Tunable parameters for a dungeon.

    Room sizes smaller than ``min_room_size`` are raised to it, so canvas
    dimensions always reflect the rooms that are actually placed.
    """

    rooms_wide: int = DEFAULT_DUNGEON_GRID
    rooms_high: int = DEFAULT_DUNGEON_GRID
    room_width: int = DEFAULT_DUNGEON_ROOM_SIZE
    room_height: int = DEFAULT_DUNGEON_ROOM_SIZE
    central_room_multiplier: int = DEFAULT_CENTRAL_ROOM_MULTIPLIER
    # Pin the central room to a named template; missing names fall back to a blank room.
    central_room_template: Optional[str] = None
    connectivity_policy: ConnectivityPolicy = ConnectivityPolicy.FULL_CONNECT
    extra_connection_chance: float = EXTRA_CONNECTION_CHANCE
    min_room_size: int = DEFAULT_MIN_ROOM_SIZE
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        if self.rooms_wide <= 0 or self.rooms_high <= 0:
            raise InvalidParametersError(
                f"Dungeon grid must be positive, got {self.rooms_wide}x{self.rooms_high}"
            )
        if self.min_room_size < 3:
            raise InvalidParametersError("min_room_size must be at least 3")
        object.__setattr__(
            self, "room_width", _clamped_room_size(self.room_width, self.min_room_size, "room_width")
        )
        object.__setattr__(
            self, "room_height", _clamped_room_size(self.room_height, self.min_room_size, "room_height")
        )
        if self.central_room_multiplier <= 0:
            raise InvalidParametersError("central_room_multiplier must be positive")
        if self.central_room_multiplier > min(self.rooms_wide, self.rooms_high):
            raise InvalidParametersError(
                f"central_room_multiplier {self.central_room_multiplier} does not fit a "
                f"{self.rooms_wide}x{self.rooms_high} grid"
            )
        if not 0.0 <= self.extra_connection_chance <= 1.0:
            raise InvalidParametersError("extra_connection_chance must lie within [0, 1]")
        if not isinstance(self.connectivity_policy, ConnectivityPolicy):
            raise InvalidParametersError(f"Unknown connectivity policy {self.connectivity_policy!r}")

    @property
    def canvas_width(self) -> int:
        return canvas_extent(self.rooms_wide, self.room_width)

    @property
    def canvas_height(self) -> int:
        return canvas_extent(self.rooms_high, self.room_height)


@dataclass(frozen=True)
class TownParams:
    """Tunable parameters for a town laid out on a square grid."""

    grid_size: int = DEFAULT_TOWN_GRID
    room_width: int = DEFAULT_TOWN_ROOM_SIZE
    room_height: int = DEFAULT_TOWN_ROOM_SIZE
    is_starting_town: bool = False
    min_room_size: int = DEFAULT_MIN_ROOM_SIZE
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise InvalidParametersError(f"Town grid_size must be positive, got {self.grid_size}")
        if self.min_room_size < 3:
            raise InvalidParametersError("min_room_size must be at least 3")
        object.__setattr__(
            self, "room_width", _clamped_room_size(self.room_width, self.min_room_size, "room_width")
        )
        object.__setattr__(
            self, "room_height", _clamped_room_size(self.room_height, self.min_room_size, "room_height")
        )

    @property
    def canvas_width(self) -> int:
        return canvas_extent(self.grid_size, self.room_width)

    @property
    def canvas_height(self) -> int:
        return canvas_extent(self.grid_size, self.room_height)


@dataclass(frozen=True)
class WildernessParams:
    """Accepted for interface completeness; wilderness generation is not implemented."""

    width: int = 100
    height: int = 100

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidParametersError("Wilderness width and height must be positive")


@dataclass(frozen=True)
class GenerationParams:
    """Per-type parameters handed to :func:`level_generator.generate`."""

    dungeon: DungeonParams = field(default_factory=DungeonParams)
    town: TownParams = field(default_factory=TownParams)
    wilderness: WildernessParams = field(default_factory=WildernessParams)
