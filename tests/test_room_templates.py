import pytest

from errors import TemplateNotFoundError
from geometry import Position
from level_constants import STARTING_TOWN_LAYOUT, TOWN_SQUARE_TEMPLATE
from models import RoomCategory, RoomTemplate, TileType
from room_templates import (
    DUNGEON_CATALOG,
    DUNGEON_TEMPLATES,
    TOWN_CATALOG,
    TOWN_TEMPLATES,
    TemplateCatalog,
)
from template_parser import parse_room_template

ALL_TEMPLATES = DUNGEON_TEMPLATES + TOWN_TEMPLATES


def _inward(pos: Position, width: int, height: int) -> Position:
    if pos.y == 0:
        return pos.offset(0, 1)
    if pos.y == height - 1:
        return pos.offset(0, -1)
    if pos.x == 0:
        return pos.offset(1, 0)
    return pos.offset(-1, 0)


@pytest.mark.parametrize("template", ALL_TEMPLATES, ids=lambda template: template.name)
def test_every_template_parses_with_boundary_connectors(template):
    parsed = parse_room_template(template)

    assert parsed.width >= 20 and parsed.height >= 20
    assert parsed.connectors
    for pos in parsed.connectors:
        on_boundary = pos.x in (0, parsed.width - 1) or pos.y in (0, parsed.height - 1)
        assert on_boundary, f"{template.name} connector {pos} is not on the wall"
        inner = _inward(pos, parsed.width, parsed.height)
        assert parsed.tiles[inner.y][inner.x] is TileType.FLOOR


@pytest.mark.parametrize("template", DUNGEON_TEMPLATES, ids=lambda template: template.name)
def test_dungeon_template_sizes(template):
    parsed = parse_room_template(template)

    expected = 39 if template.is_central else 20
    assert (parsed.width, parsed.height) == (expected, expected)


def test_spawn_templates_carry_markers():
    for template in DUNGEON_CATALOG.by_category(RoomCategory.SPAWN):
        assert parse_room_template(template).spawn_points, template.name


def test_central_templates_are_flagged():
    central = DUNGEON_CATALOG.central_templates()

    assert {template.name for template in central} == {"great_hall", "throne_room"}
    assert all(template.category is RoomCategory.CENTRAL for template in central)


def test_town_square_ring_is_open_floor():
    parsed = parse_room_template(TOWN_CATALOG.by_name(TOWN_SQUARE_TEMPLATE))
    center = Position(parsed.width // 2, parsed.height // 2)
    ring = [(5, 0), (3, 3), (0, 5), (-3, 3), (-5, 0), (-3, -3), (0, -5), (3, -3)]

    assert parsed.tiles[center.y][center.x] is TileType.FLOOR
    for dx, dy in ring:
        pos = center.offset(dx, dy)
        assert parsed.tiles[pos.y][pos.x] is TileType.FLOOR


def test_starting_town_layout_names_exist():
    for row in STARTING_TOWN_LAYOUT:
        for name in row:
            assert name in TOWN_CATALOG


def test_catalog_lookup_and_category_weights():
    assert DUNGEON_CATALOG.by_name("combat_arena").category is RoomCategory.COMBAT
    weights = dict(DUNGEON_CATALOG.category_weights)
    assert weights[RoomCategory.COMBAT] == 50
    assert weights[RoomCategory.CENTRAL] == 0
    assert RoomCategory.TOWN not in weights
    assert len(DUNGEON_CATALOG) == len(DUNGEON_TEMPLATES)

    with pytest.raises(TemplateNotFoundError) as excinfo:
        DUNGEON_CATALOG.by_name("missing_room")
    assert excinfo.value.template_name == "missing_room"


def test_catalog_rejects_duplicate_names():
    template = RoomTemplate("dup", RoomCategory.COMBAT, 1, "###\n#.#\n###")

    with pytest.raises(ValueError):
        TemplateCatalog([template, template])


def test_custom_catalog_derives_weights_from_categories():
    templates = [
        RoomTemplate("a", RoomCategory.REST, 1, "###\n#.#\n###"),
        RoomTemplate("b", RoomCategory.COMBAT, 1, "###\n#.#\n###"),
    ]

    catalog = TemplateCatalog(templates)

    assert catalog.category_weights == ((RoomCategory.REST, 20), (RoomCategory.COMBAT, 50))
    assert catalog.names() == ("a", "b")


def test_template_rejects_negative_weight():
    with pytest.raises(ValueError):
        RoomTemplate("neg", RoomCategory.COMBAT, -1, "#")


def test_category_predicates():
    assert not RoomCategory.CENTRAL.allowed_in_interior
    assert RoomCategory.REST.allowed_in_interior
