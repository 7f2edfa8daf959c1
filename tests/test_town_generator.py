from level_config import TownParams
from level_constants import STARTING_TOWN_LAYOUT
from models import RoomCategory, TileType
from town_generator import TownGenerator


def test_starting_town_uses_classic_layout():
    generator = TownGenerator(TownParams(is_starting_town=True), seed=1)
    canvas = generator.generate()

    assert len(canvas) == 88 and len(canvas[0]) == 88
    assert generator.is_starting_town
    grid = generator.room_grid
    for gy, row in enumerate(STARTING_TOWN_LAYOUT):
        for gx, name in enumerate(row):
            assert generator.rooms[grid.room_at(gx, gy)].template_name == name
    assert all(room.category is RoomCategory.TOWN for room in generator.rooms)


def test_town_square_is_central_room():
    generator = TownGenerator(TownParams(), seed=5)
    generator.generate()

    central = generator.layout.central_room()

    assert central.template_name == "town_square"
    assert generator.room_grid.room_at(1, 1) == central.index


def test_town_spawns_are_floor():
    generator = TownGenerator(TownParams(), seed=9)
    canvas = generator.generate()

    assert generator.spawn_points
    for pos in generator.spawn_points:
        assert canvas[pos.y][pos.x] is TileType.FLOOR
    assert canvas[generator.spawn_position.y][generator.spawn_position.x].is_walkable


def test_larger_town_places_gates_on_side_midpoints():
    generator = TownGenerator(TownParams(grid_size=5), seed=13)
    generator.generate()
    grid = generator.room_grid

    assert len(generator.rooms) == 25
    assert generator.gate_cells() == {(2, 0), (2, 4), (0, 2), (4, 2)}
    for gx, gy in generator.gate_cells():
        assert generator.rooms[grid.room_at(gx, gy)].template_name == "town_gate"
    others = [room for room in generator.rooms if not room.is_central]
    assert all(room.template_name != "town_square" for room in others)


def test_town_is_connected():
    generator = TownGenerator(TownParams(grid_size=4), seed=2)
    generator.generate()

    assert generator.connectivity.fully_connected


def test_town_determinism():
    first = TownGenerator(TownParams(grid_size=5), seed=42)
    second = TownGenerator(TownParams(grid_size=5), seed=42)

    assert first.generate() == second.generate()
    assert first.spawn_points == second.spawn_points
