import random
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from level_layout import LevelLayout
from models import RoomCategory, RoomTemplate
from room_factory import RoomFactory
from room_templates import DUNGEON_CATALOG, TemplateCatalog
from template_selector import TemplateSelector


def box_pattern(width: int, height: int, connectors_x=(), connectors_y=(), interior: str = ".") -> str:
    """Build a walled rectangular pattern with connectors on opposite walls."""
    rows = []
    for y in range(height):
        row = []
        for x in range(width):
            on_edge = x in (0, width - 1) or y in (0, height - 1)
            if on_edge and y in (0, height - 1) and x in connectors_x and 0 < x < width - 1:
                row.append("C")
            elif on_edge and x in (0, width - 1) and y in connectors_y and 0 < y < height - 1:
                row.append("C")
            elif on_edge:
                row.append("#")
            else:
                row.append(interior)
        rows.append("".join(row))
    return "\n".join(rows)


@pytest.fixture
def make_box_pattern() -> Callable[..., str]:
    return box_pattern


@pytest.fixture
def small_template() -> RoomTemplate:
    pattern = "\n".join(
        [
            "#CC#",
            "#S.#",
            "C..C",
            "#CC#",
        ]
    )
    return RoomTemplate("small", RoomCategory.SPAWN, 1, pattern)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def factory() -> RoomFactory:
    return RoomFactory()


@pytest.fixture
def dungeon_catalog() -> TemplateCatalog:
    return DUNGEON_CATALOG


@pytest.fixture
def selector(dungeon_catalog: TemplateCatalog, rng: random.Random) -> TemplateSelector:
    return TemplateSelector(dungeon_catalog, rng)


@pytest.fixture
def make_layout() -> Callable[..., LevelLayout]:
    def _make_layout(grid: int = 3, room_size: int = 20) -> LevelLayout:
        extent = room_size + (grid - 1) * (room_size - 1)
        return LevelLayout(grid, grid, extent, extent)

    return _make_layout
