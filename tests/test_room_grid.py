import pytest

from errors import SizeConstraintViolation
from geometry import Position
from level_layout import LevelLayout
from models import RoomCategory, TileType
from room_factory import RoomFactory
from room_grid import RoomGrid


def test_occupy_claims_block_and_rejects_overlap():
    grid = RoomGrid(4, 4)

    grid.occupy(1, 1, 0, 2, 2)

    assert [grid.room_at(x, y) for x, y in [(1, 1), (2, 1), (1, 2), (2, 2)]] == [0, 0, 0, 0]
    assert grid.is_free(0, 0)
    assert grid.occupied_count() == 4
    with pytest.raises(ValueError):
        grid.occupy(2, 2, 1)
    # A rejected claim leaves the grid untouched.
    with pytest.raises(ValueError):
        grid.occupy(0, 0, 2, 2, 2)
    assert grid.is_free(0, 0)


def test_edge_and_interior_cells_in_row_major_order():
    grid = RoomGrid(4, 3)
    grid.occupy(0, 0, 0)

    assert grid.free_edge_cells() == [
        (1, 0),
        (2, 0),
        (3, 0),
        (0, 1),
        (3, 1),
        (0, 2),
        (1, 2),
        (2, 2),
        (3, 2),
    ]
    assert grid.free_interior_cells() == [(1, 1), (2, 1)]


def test_room_at_outside_grid_raises():
    grid = RoomGrid(2, 2)

    with pytest.raises(IndexError):
        grid.room_at(2, 0)
    with pytest.raises(ValueError):
        RoomGrid(0, 3)


def test_cell_origin_shares_walls():
    assert RoomGrid.cell_origin(0, 0, 20, 20) == Position(0, 0)
    assert RoomGrid.cell_origin(2, 1, 20, 30) == Position(38, 29)


def test_layout_registers_rooms_and_counts_categories(make_layout):
    layout = make_layout(grid=2)
    factory = RoomFactory()
    first = factory.create_blank_room(Position(0, 0), 20, 20, category=RoomCategory.REST)
    second = factory.create_blank_room(Position(19, 0), 20, 20)

    assert layout.register_room(first, 0, 0) == 0
    assert layout.register_room(second, 1, 0) == 1

    assert second.index == 1
    assert layout.room_grid.room_at(1, 0) == 1
    assert layout.category_counts() == {"rest": 1, "combat": 1}
    assert layout.rooms_in_category(RoomCategory.REST) == [first]
    assert layout.central_room() is None


def test_layout_rejects_rooms_outside_canvas(make_layout):
    layout = make_layout(grid=2)
    room = RoomFactory().create_blank_room(Position(30, 0), 20, 20)

    with pytest.raises(SizeConstraintViolation) as excinfo:
        layout.register_room(room, 1, 1)

    assert excinfo.value.bounds.to_tuple() == (30, 0, 20, 20)
    assert layout.rooms == []


def test_flattened_tiles_are_row_major(make_layout):
    layout = make_layout(grid=1)
    layout.set_tile(Position(3, 1), TileType.DOOR)
    layout.set_tile(Position(0, 2), TileType.FLOOR)

    tiles = layout.flattened_tiles()

    assert len(tiles) == 20 * 20
    assert tiles[1 * 20 + 3] == 2
    assert tiles[2 * 20 + 0] == 1
    assert layout.door_count() == 1
    assert layout.in_bounds(Position(19, 19))
    assert not layout.in_bounds(Position(20, 0))
