import pytest

from errors import TemplateParseError
from geometry import Position
from models import RoomCategory, RoomTemplate, TileType
from template_parser import parse_room_template


def test_parse_maps_glyphs_to_tiles(small_template):
    parsed = parse_room_template(small_template)

    assert (parsed.width, parsed.height) == (4, 4)
    assert parsed.tiles[0] == (TileType.WALL, TileType.WALL, TileType.WALL, TileType.WALL)
    assert parsed.tiles[1][1] is TileType.FLOOR  # spawn marker is floor
    assert parsed.tiles[2][0] is TileType.WALL  # connector stays wall until joined
    assert parsed.spawn_points == (Position(1, 1),)
    assert parsed.connectors == (
        Position(1, 0),
        Position(2, 0),
        Position(0, 2),
        Position(3, 2),
        Position(1, 3),
        Position(2, 3),
    )
    assert parsed.category is RoomCategory.SPAWN
    assert parsed.is_central is False


def test_parse_special_floor_door_and_space():
    template = RoomTemplate("mixed", RoomCategory.TREASURE, 1, "#D# \n#T.#\n####")

    parsed = parse_room_template(template)

    assert parsed.tiles[0] == (TileType.WALL, TileType.DOOR, TileType.WALL, TileType.WALL)
    assert parsed.tiles[1][1] is TileType.FLOOR


def test_parse_trims_blank_lines_but_keeps_leading_spaces():
    template = RoomTemplate("padded", RoomCategory.REST, 1, "\n   \n ##\n#..\n\n")

    parsed = parse_room_template(template)

    assert parsed.height == 2
    assert parsed.width == 3
    assert parsed.tiles[0][0] is TileType.WALL


def test_ragged_row_names_template():
    rows = ["#" * 20] * 5
    rows[3] = "#" * 19
    template = RoomTemplate("ragged_room", RoomCategory.COMBAT, 1, "\n".join(rows))

    with pytest.raises(TemplateParseError) as excinfo:
        parse_room_template(template)

    assert excinfo.value.template_name == "ragged_room"
    assert "ragged_room" in str(excinfo.value)
    assert "row 3 has 19, expected 20" in str(excinfo.value)


def test_invalid_glyph_names_character_and_template():
    template = RoomTemplate("bad_glyph", RoomCategory.COMBAT, 1, "###\n#X#\n###")

    with pytest.raises(TemplateParseError) as excinfo:
        parse_room_template(template)

    assert excinfo.value.character == "X"
    assert str(excinfo.value) == "Invalid character 'X' in template 'bad_glyph'"


@pytest.mark.parametrize("pattern", ["", "\n\n", "   \n  "])
def test_empty_pattern_is_rejected(pattern):
    template = RoomTemplate("empty", RoomCategory.COMBAT, 1, pattern)

    with pytest.raises(TemplateParseError, match="Empty template 'empty'"):
        parse_room_template(template)


def test_parse_is_deterministic_and_cached(small_template):
    first = parse_room_template(small_template)
    second = parse_room_template(RoomTemplate("small", RoomCategory.SPAWN, 1, small_template.pattern))

    assert first == second
    assert parse_room_template(small_template) is first
