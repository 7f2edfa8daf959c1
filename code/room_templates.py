"""Hand-authored room blueprints and the immutable template catalog.

Legend: ``#`` wall, ``.`` floor, ``D`` door, ``C`` connector, ``S`` spawn
marker, ``T`` special floor, space is wall.

Dungeon rooms are 20x20 with connector pairs at the middle of every side so
that rooms sharing a wall line up one tile apart. Central rooms span a 2x2
block of cells (39x39) and carry a connector pair per neighbouring cell. Town
buildings are 30x30.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from errors import TemplateNotFoundError
from models import RoomCategory, RoomTemplate

# --- Dungeon rooms ---------------------------------------------------------

SPAWN_HALL = """
#########CC#########
#..................#
#..................#
#..................#
#..................#
#....S........S....#
#..................#
#..................#
C..................C
C..................C
#..................#
#..................#
#..................#
#..................#
#....S........S....#
#..................#
#..................#
#..................#
#..................#
#########CC#########
"""

SPAWN_ALCOVE = """
#########CC#########
#..................#
#..................#
#..##..........##..#
#..##..........##..#
#..................#
#..................#
#......S...........#
C..................C
C..................C
#..................#
#..................#
#...........S......#
#..................#
#..................#
#..##..........##..#
#..##..........##..#
#..................#
#..................#
#########CC#########
"""

SPAWN_CAMP = """
#########CC#########
#..................#
#.#####............#
#.#................#
#.#................#
#.#................#
#............S.....#
#..................#
C..................C
C........S.........C
#..................#
#..................#
#.....S............#
#..................#
#................#.#
#................#.#
#................#.#
#............#####.#
#..................#
#########CC#########
"""

COMBAT_PILLARS = """
#########CC#########
#..................#
#..................#
#..................#
#...##...##...##...#
#...##...##...##...#
#..................#
#..................#
C..................C
C..................C
#..................#
#..................#
#..................#
#..................#
#...##...##...##...#
#...##...##...##...#
#..................#
#..................#
#..................#
#########CC#########
"""

COMBAT_ARENA = """
#########CC#########
#..................#
#..................#
#..................#
#..................#
#..................#
#.....########.....#
#.....#......#.....#
C..................C
C..................C
#..................#
#..................#
#.....#......#.....#
#.....########.....#
#..................#
#..................#
#..................#
#..................#
#..................#
#########CC#########
"""

COMBAT_MAZE = """
#########CC#########
#..................#
#..................#
#..#..##....#####..#
#..#............#..#
#..#............#..#
#..#..########..#..#
#..................#
C..................C
C..................C
#..................#
#..#............#..#
#..#............#..#
#..#..########..#..#
#..#............#..#
#..#............#..#
#..#..##....#####..#
#..................#
#..................#
#########CC#########
"""

TREASURE_VAULT = """
#########CC#########
#..................#
#..................#
#..................#
#..................#
#....####..####....#
#....#........#....#
#....#........#....#
C....#..TTTT..#....C
C....#..TTTT..#....C
#....#..TTTT..#....#
#....#..TTTT..#....#
#....#........#....#
#....#........#....#
#....##########....#
#..................#
#..................#
#..................#
#..................#
#########CC#########
"""

TREASURE_CACHE = """
#########CC#########
#..................#
#............#####.#
#............#.....#
#............#.TT..#
#..................#
#..................#
#..................#
C..................C
C..................C
#..................#
#..................#
#..................#
#..................#
#..................#
#.###..............#
#..................#
#..T...............#
#..................#
#########CC#########
"""

REST_SHRINE = """
#########CC#########
#..................#
#..................#
#..#............#..#
#..................#
#..................#
#..................#
#......TTTTTT......#
C......TTTTTT......C
C......TTTTTT......C
#......TTTTTT......#
#......TTTTTT......#
#......TTTTTT......#
#..................#
#..................#
#..................#
#..#............#..#
#..................#
#..................#
#########CC#########
"""

REST_CAMP = """
#########CC#########
#..................#
#.###..............#
#.###..............#
#..................#
#..................#
#..................#
#..................#
C.......TTTT.......C
C.......T##T.......C
#.......T##T.......#
#.......TTTT.......#
#..................#
#..................#
#..................#
#..................#
#..............###.#
#..............###.#
#..................#
#########CC#########
"""

GREAT_HALL = """
#########CC#################CC#########
#.....................................#
#.....................................#
#.....................................#
#.....................................#
#....##.......##.......##.......##....#
#....##.......##.......##.......##....#
#.....................................#
C.....................................C
C.....................................C
#.....................................#
#.....................................#
#.....................................#
#.....................................#
#....##.........................##....#
#....##........TTTTTTTTT........##....#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#..............TTTTTTTTT..............#
#....##........TTTTTTTTT........##....#
#....##.........................##....#
#.....................................#
#.....................................#
C.....................................C
C.....................................C
#.....................................#
#.....................................#
#.....................................#
#....##.......##.......##.......##....#
#....##.......##.......##.......##....#
#.....................................#
#.....................................#
#.....................................#
#.....................................#
#########CC#################CC#########
"""

THRONE_ROOM = """
#########CC#################CC#########
#.....................................#
#.....................................#
#.....................................#
#...........###############...........#
#...........#...TTTTTTT...#...........#
#...........#...TT###TT...#...........#
#...........#...TT###TT...#...........#
C...........#...TTTTTTT...#...........C
C...........#...TTTTTTT...#...........C
#...........#.............#...........#
#.....................................#
#.....................................#
#.....................................#
#............T...TTTTT...T............#
#.......##...T...TTTTT...T...##.......#
#.......##...T...TTTTT...T...##.......#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#.......##...T...TTTTT...T...##.......#
#.......##...T...TTTTT...T...##.......#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
C............T...TTTTT...T............C
C............T...TTTTT...T............C
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#.......##...T...TTTTT...T...##.......#
#.......##...T...TTTTT...T...##.......#
#............T...TTTTT...T............#
#............T...TTTTT...T............#
#.....................................#
#.....................................#
#.....................................#
#########CC#################CC#########
"""

# --- Town buildings --------------------------------------------------------

TOWN_SQUARE = """
##############CC##############
#............................#
#............................#
#............................#
#...##..................##...#
#...##..................##...#
#............................#
#............................#
#............#####...........#
#............................#
#.........TTTTTTTTTTT........#
#.........TTTTTTTTTTT........#
#.........TTTTTTTTTTT........#
#.......#.TTTTTTTTTTT.#......#
C.......#.TTTTTTTTTTT.#......C
C.......#.TTTTTTTTTTT.#......C
#.......#.TTTTTTTTTTT.#......#
#.......#.TTTTTTTTTTT.#......#
#.........TTTTTTTTTTT........#
#.........TTTTTTTTTTT........#
#.........TTTTTTTTTTT........#
#............................#
#............#####...........#
#............................#
#...##..................##...#
#...##..................##...#
#............................#
#............................#
#............................#
##############CC##############
"""

RESIDENTIAL = """
##############CC##############
#........#..........#........#
#........#..........#........#
#..TT....#..........#........#
#..TT....#..........#........#
#........#..........#........#
#............................#
#............................#
#............................#
############......############
#............................#
#............................#
#............................#
#............................#
C............................C
C............................C
#............................#
#............................#
#............................#
#............................#
############......############
#............................#
#............................#
#............................#
#........#..........#........#
#........#..........#....TT..#
#........#..........#....TT..#
#........#..........#........#
#........#..........#........#
##############CC##############
"""

BLACKSMITH = """
##############CC##############
#............................#
#............................#
#............................#
#...######........########...#
#...#....#........TTTTTTTT...#
#...#.TT.#........TTTTTTTT...#
#...#....#...................#
#...##..##...................#
#............................#
#............................#
#............................#
#............................#
#............................#
C............................C
C............................C
#............................#
#............................#
#............................#
#............................#
#...................###......#
#...TTTTT...........###......#
#...TTTTT....................#
#...TTTTT....................#
#...TTTTT....................#
#...TTTTT....................#
#............................#
#............................#
#............................#
##############CC##############
"""

MARKET = """
##############CC##############
#............................#
#............................#
#............................#
#...####...####..####..####..#
#...####...####..####..####..#
#...TTTT...TTTT..TTTT..TTTT..#
#............................#
#............................#
#............................#
#............................#
#............................#
#............................#
#............................#
C............................C
C............................C
#............................#
#............................#
#............................#
#............................#
#............................#
#............................#
#...TTTT...TTTT..TTTT..TTTT..#
#...####...####..####..####..#
#...####...####..####..####..#
#............................#
#............................#
#............................#
#............................#
##############CC##############
"""

GENERAL_STORE = """
##############CC##############
#............................#
#............................#
#...#..################..#...#
#...#....................#...#
#...#.......TTTTTT.......#...#
#...#.......TTTTTT.......#...#
#...#....................#...#
#...########......########...#
#............................#
#............................#
#............................#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
C.....#...#........#...#.....C
C.....#...#........#...#.....C
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#.....#...#........#...#.....#
#............................#
#............................#
##############CC##############
"""

TOWN_GATE = """
##############CC##############
#####.....###....###.....#####
#####.....###....###.....#####
#####.....###....###.....#####
#####.....###....###.....#####
#.........###....###.........#
#.........###....###.........#
#............................#
#............................#
#............................#
#............TTTT............#
#............TTTT............#
#............TTTT............#
#............TTTT............#
C............TTTT............C
C............TTTT............C
#............TTTT............#
#............TTTT............#
#............TTTT............#
#............TTTT............#
#............................#
#............................#
#............................#
#.........###....###.........#
#.........###....###.........#
#####.....###....###.....#####
#####.....###....###.....#####
#####.....###....###.....#####
#####.....###....###.....#####
##############CC##############
"""

TAVERN = """
##############CC##############
#............................#
#.......................####.#
#..##################...#..#.#
#..TTTTTTTTTTTTTTTTTT...#..#.#
#.......................#..#.#
#.......................#.##.#
#............................#
#............................#
#....#...#..........#...#....#
#............................#
#............................#
#............................#
#............................#
C............................C
C............................C
#............................#
#............................#
#............................#
#............................#
#....#...#..........#...#....#
#............................#
#............................#
#............................#
#....#...#..........#...#....#
#............................#
#............................#
#............................#
#............................#
##############CC##############
"""

DUNGEON_TEMPLATES: Tuple[RoomTemplate, ...] = (
    RoomTemplate("spawn_hall", RoomCategory.SPAWN, 10, SPAWN_HALL),
    RoomTemplate("spawn_alcove", RoomCategory.SPAWN, 6, SPAWN_ALCOVE),
    RoomTemplate("spawn_camp", RoomCategory.SPAWN, 4, SPAWN_CAMP),
    RoomTemplate("combat_pillars", RoomCategory.COMBAT, 10, COMBAT_PILLARS),
    RoomTemplate("combat_arena", RoomCategory.COMBAT, 8, COMBAT_ARENA),
    RoomTemplate("combat_maze", RoomCategory.COMBAT, 5, COMBAT_MAZE),
    RoomTemplate("treasure_vault", RoomCategory.TREASURE, 6, TREASURE_VAULT),
    RoomTemplate("treasure_cache", RoomCategory.TREASURE, 4, TREASURE_CACHE),
    RoomTemplate("rest_shrine", RoomCategory.REST, 6, REST_SHRINE),
    RoomTemplate("rest_camp", RoomCategory.REST, 4, REST_CAMP),
    RoomTemplate("great_hall", RoomCategory.CENTRAL, 10, GREAT_HALL, is_central=True),
    RoomTemplate("throne_room", RoomCategory.CENTRAL, 5, THRONE_ROOM, is_central=True),
)

TOWN_TEMPLATES: Tuple[RoomTemplate, ...] = (
    RoomTemplate("town_square", RoomCategory.TOWN, 10, TOWN_SQUARE, is_central=True),
    RoomTemplate("residential", RoomCategory.TOWN, 10, RESIDENTIAL),
    RoomTemplate("blacksmith", RoomCategory.TOWN, 5, BLACKSMITH),
    RoomTemplate("market", RoomCategory.TOWN, 6, MARKET),
    RoomTemplate("general_store", RoomCategory.TOWN, 5, GENERAL_STORE),
    RoomTemplate("town_gate", RoomCategory.TOWN, 4, TOWN_GATE),
    RoomTemplate("tavern", RoomCategory.TOWN, 6, TAVERN),
)

DUNGEON_CATEGORIES = (
    RoomCategory.COMBAT,
    RoomCategory.TREASURE,
    RoomCategory.CENTRAL,
    RoomCategory.REST,
    RoomCategory.SPAWN,
)


class TemplateCatalog:
    """Read-only collection of room templates plus per-category weights.

    Catalogs are built once and shared by every generation call; nothing on
    this class mutates after ``__init__``.
    """

    def __init__(
        self,
        templates: Iterable[RoomTemplate],
        category_weights: Optional[Mapping[RoomCategory, int]] = None,
    ) -> None:
        self._templates: Tuple[RoomTemplate, ...] = tuple(templates)
        self._by_name: Dict[str, RoomTemplate] = {}
        for template in self._templates:
            if template.name in self._by_name:
                raise ValueError(f"Duplicate room template name '{template.name}'")
            self._by_name[template.name] = template

        if category_weights is None:
            categories = []
            for template in self._templates:
                if template.category not in categories:
                    categories.append(template.category)
            category_weights = {category: category.default_dungeon_weight for category in categories}
        for category, weight in category_weights.items():
            if weight < 0:
                raise ValueError(f"Category {category.value} weight must be non-negative")
        self._category_weights: Tuple[Tuple[RoomCategory, int], ...] = tuple(category_weights.items())

    @classmethod
    def dungeon(cls) -> TemplateCatalog:
        return cls(
            DUNGEON_TEMPLATES,
            {category: category.default_dungeon_weight for category in DUNGEON_CATEGORIES},
        )

    @classmethod
    def town(cls) -> TemplateCatalog:
        return cls(TOWN_TEMPLATES, {RoomCategory.TOWN: RoomCategory.TOWN.default_dungeon_weight})

    @property
    def templates(self) -> Tuple[RoomTemplate, ...]:
        return self._templates

    @property
    def category_weights(self) -> Tuple[Tuple[RoomCategory, int], ...]:
        """``(category, weight)`` pairs in a stable order."""
        return self._category_weights

    def by_name(self, name: str) -> RoomTemplate:
        try:
            return self._by_name[name]
        except KeyError:
            raise TemplateNotFoundError(f"Room template '{name}' not found", template_name=name) from None

    def by_category(self, category: RoomCategory) -> Tuple[RoomTemplate, ...]:
        return tuple(template for template in self._templates if template.category is category)

    def central_templates(self) -> Tuple[RoomTemplate, ...]:
        return tuple(template for template in self._templates if template.is_central)

    def names(self) -> Tuple[str, ...]:
        return tuple(template.name for template in self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[RoomTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


DUNGEON_CATALOG = TemplateCatalog.dungeon()
TOWN_CATALOG = TemplateCatalog.town()
