import pytest

from errors import TemplateParseError
from geometry import Position
from models import RoomCategory, RoomTemplate, TileType
from room_factory import RoomFactory
from room_templates import DUNGEON_CATALOG
from template_parser import parse_room_template


def test_create_room_uses_exact_template_size(factory, small_template):
    room = factory.create_room(small_template, Position(5, 7))

    assert (room.width, room.height) == (4, 4)
    assert room.position == Position(5, 7)
    assert room.template_name == "small"
    assert room.global_spawn_points() == [Position(6, 8)]
    assert Position(6, 7) in room.global_connectors()


def test_min_size_centres_pattern_and_translates_markers(factory, small_template):
    room = factory.create_room_with_min_size(small_template, Position(0, 0), 10, 8)

    # Offset is ((10 - 4) // 2, (8 - 4) // 2) == (3, 2).
    assert (room.width, room.height) == (10, 8)
    assert room.spawn_points == [Position(4, 3)]
    assert room.connectors[0] == Position(4, 2)
    assert room.tiles[3][4] is TileType.FLOOR
    assert room.tiles[0] == [TileType.WALL] * 10
    assert room.category is RoomCategory.SPAWN


def test_min_size_never_shrinks(factory):
    template = DUNGEON_CATALOG.by_name("great_hall")

    room = factory.create_room_with_min_size(template, Position(0, 0), 20, 20)

    assert (room.width, room.height) == (39, 39)
    assert room.is_central


def test_rooms_do_not_alias_parsed_template(factory, small_template):
    room_a = factory.create_room_with_min_size(small_template, Position(0, 0), 4, 4)
    room_b = factory.create_room(small_template, Position(10, 0))

    room_a.open_connector(Position(1, 0))

    assert room_a.tiles[0][1] is TileType.DOOR
    assert room_b.tiles[0][1] is TileType.WALL
    assert parse_room_template(small_template).tiles[0][1] is TileType.WALL


def test_blank_room_clamps_to_minimum_and_has_midpoint_connectors():
    factory = RoomFactory(min_room_size=20)

    room = factory.create_blank_room(Position(19, 0), 12, 25, category=RoomCategory.REST)

    assert (room.width, room.height) == (20, 25)
    assert room.template_name is None
    assert room.category is RoomCategory.REST
    assert room.spawn_points == []
    assert set(room.connectors) == {
        Position(9, 0),
        Position(10, 0),
        Position(9, 24),
        Position(10, 24),
        Position(0, 11),
        Position(0, 12),
        Position(19, 11),
        Position(19, 12),
    }
    assert room.tiles[1][1] is TileType.FLOOR
    assert room.tiles[0][5] is TileType.WALL


def test_blank_central_room_has_connectors_at_even_offsets(factory):
    room = factory.create_blank_room(Position(0, 0), 39, 39, is_central=True)

    assert room.is_central
    assert room.category is RoomCategory.CENTRAL
    top = sorted(pos.x for pos in room.connectors if pos.y == 0)
    assert top == list(range(2, 37, 2))
    left = sorted(pos.y for pos in room.connectors if pos.x == 0)
    assert left == list(range(2, 37, 2))


def test_parse_failure_surfaces(factory):
    template = RoomTemplate("broken", RoomCategory.COMBAT, 1, "###\n##\n###")

    with pytest.raises(TemplateParseError):
        factory.create_room_with_min_size(template, Position(0, 0), 20, 20)


def test_factory_rejects_tiny_minimum():
    with pytest.raises(ValueError):
        RoomFactory(min_room_size=2)


def test_room_coordinate_helpers(factory, small_template):
    room = factory.create_room(small_template, Position(10, 20))

    assert room.to_local(Position(11, 21)) == Position(1, 1)
    assert room.local_tile(Position(1, 1)) is TileType.FLOOR
    assert room.center == Position(12, 22)
    assert not room.open_connector(Position(11, 21))
    assert room.doors == []
