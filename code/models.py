"""Core dataclasses used by the level generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple

from geometry import Position, Rect


class TileType(IntEnum):
    """Tile codes shared with every consumer of a generated level.

    The integer values are a wire contract: collaborators persist them verbatim
    and treat codes 1 and 2 as walkable.
    """

    WALL = 0
    FLOOR = 1
    DOOR = 2

    @property
    def is_walkable(self) -> bool:
        return self is not TileType.WALL

    @classmethod
    def from_code(cls, code: int) -> TileType:
        try:
            return cls(code)
        except ValueError:
            return cls.WALL


class RoomCategory(Enum):
    """Specifies how a room template may be used during placement."""

    SPAWN = "spawn"  # Forced onto every outer grid cell; holds player spawn markers.
    COMBAT = "combat"
    TREASURE = "treasure"
    REST = "rest"
    CENTRAL = "central"  # The single large room at the grid centre.
    TOWN = "town"  # Town buildings, including the town square.

    @property
    def default_dungeon_weight(self) -> int:
        """Weight of this category when drawing a category for an interior cell."""
        if self is RoomCategory.COMBAT:
            return 50
        if self is RoomCategory.REST:
            return 20
        if self is RoomCategory.TREASURE:
            return 15
        if self is RoomCategory.SPAWN:
            return 15
        if self is RoomCategory.CENTRAL:
            return 0
        if self is RoomCategory.TOWN:
            return 10
        raise AssertionError(f"Unhandled room category {self}")

    @property
    def allowed_in_interior(self) -> bool:
        """Interior dungeon cells never hold spawn or central rooms."""
        if self in (RoomCategory.SPAWN, RoomCategory.CENTRAL):
            return False
        if self in (RoomCategory.COMBAT, RoomCategory.TREASURE, RoomCategory.REST, RoomCategory.TOWN):
            return True
        raise AssertionError(f"Unhandled room category {self}")


@dataclass(frozen=True)
class RoomTemplate:
    """Hand-authored ASCII blueprint for a room."""

    name: str
    category: RoomCategory
    weight: int
    pattern: str
    is_central: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Room template must have a name")
        if self.weight < 0:
            raise ValueError(f"Room template {self.name} weight must be non-negative")
        if not isinstance(self.category, RoomCategory):
            raise ValueError(f"Room template {self.name} has unsupported category {self.category}")


@dataclass(frozen=True)
class ParsedRoom:
    """Typed room shape produced by parsing a template."""

    name: str
    category: RoomCategory
    width: int
    height: int
    tiles: Tuple[Tuple[TileType, ...], ...]
    connectors: Tuple[Position, ...]
    spawn_points: Tuple[Position, ...]
    is_central: bool


@dataclass
class Room:
    """A room instance placed at a global canvas position."""

    position: Position
    width: int
    height: int
    tiles: List[List[TileType]]
    connectors: List[Position]  # Room-local.
    spawn_points: List[Position]  # Room-local.
    is_central: bool
    category: RoomCategory
    template_name: Optional[str] = None
    index: int = -1
    doors: List[Position] = field(default_factory=list)  # Room-local connectors opened as doors.

    @property
    def bounds(self) -> Rect:
        return Rect(self.position.x, self.position.y, self.width, self.height)

    @property
    def center(self) -> Position:
        return self.bounds.center

    def to_global(self, local: Position) -> Position:
        return Position(self.position.x + local.x, self.position.y + local.y)

    def to_local(self, world: Position) -> Position:
        return Position(world.x - self.position.x, world.y - self.position.y)

    def global_connectors(self) -> List[Position]:
        return [self.to_global(pos) for pos in self.connectors]

    def global_spawn_points(self) -> List[Position]:
        return [self.to_global(pos) for pos in self.spawn_points]

    def local_tile(self, local: Position) -> TileType:
        return self.tiles[local.y][local.x]

    def touches_canvas_edge(self, canvas_width: int, canvas_height: int) -> bool:
        bounds = self.bounds
        return (
            bounds.x == 0
            or bounds.y == 0
            or bounds.max_x >= canvas_width
            or bounds.max_y >= canvas_height
        )

    def open_connector(self, world: Position) -> bool:
        """Turn the connector at global ``world`` into a door.

        Returns False when ``world`` is not one of this room's connectors.
        """
        local = self.to_local(world)
        if local not in self.connectors:
            return False
        self.tiles[local.y][local.x] = TileType.DOOR
        if local not in self.doors:
            self.doors.append(local)
        return True


def rows_from_tiles(tiles: Sequence[Sequence[TileType]]) -> List[List[TileType]]:
    """Return a fresh, mutable copy of a tile grid."""
    return [list(row) for row in tiles]
