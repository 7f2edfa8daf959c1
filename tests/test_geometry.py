import pytest

from geometry import Direction, Position, Rect


def test_direction_opposite_and_vectors():
    assert Direction.NORTH.opposite() is Direction.SOUTH
    assert Direction.EAST.opposite() is Direction.WEST
    assert Direction.WEST.vector == (-1, 0)
    assert Direction.from_tuple((0, 1)) is Direction.SOUTH

    with pytest.raises(ValueError):
        Direction.from_tuple((1, 1))


def test_position_is_hashable_iterable_and_ordered():
    pos = Position(3, 4)

    assert tuple(pos) == (3, 4)
    assert pos[0] == 3 and pos[1] == 4
    assert {pos, Position(3, 4)} == {pos}
    assert sorted([Position(2, 0), Position(1, 5), Position(1, 2)]) == [
        Position(1, 2),
        Position(1, 5),
        Position(2, 0),
    ]
    with pytest.raises(IndexError):
        pos[2]


def test_position_neighbors_follow_cardinal_order():
    assert list(Position(5, 5).neighbors()) == [
        Position(5, 4),
        Position(6, 5),
        Position(5, 6),
        Position(4, 5),
    ]


@pytest.mark.parametrize(
    "other,expected",
    [
        (Position(11, 10), True),
        (Position(10, 9), True),
        (Position(10, 10), False),
        (Position(11, 11), False),
        (Position(12, 10), False),
    ],
)
def test_orthogonal_adjacency_requires_manhattan_distance_one(other, expected):
    assert Position(10, 10).is_orthogonally_adjacent(other) is expected
    assert other.is_orthogonally_adjacent(Position(10, 10)) is expected


def test_manhattan_and_offset():
    assert Position(1, 2).manhattan(Position(4, -2)) == 7
    assert Position(1, 2).offset(3, -1) == Position(4, 1)


@pytest.mark.parametrize(
    "rect_a,rect_b,expected",
    [
        (Rect(0, 0, 3, 3), Rect(2, 2, 3, 3), True),
        (Rect(0, 0, 2, 2), Rect(2, 2, 2, 2), False),
        (Rect(0, 0, 5, 5), Rect(5, 0, 3, 3), False),
        (Rect(0, 0, 20, 20), Rect(19, 0, 20, 20), True),
    ],
)
def test_rect_overlaps(rect_a, rect_b, expected):
    assert rect_a.overlaps(rect_b) is expected
    assert rect_b.overlaps(rect_a) is expected


def test_rect_center_contains_and_fits():
    rect = Rect(19, 19, 20, 20)

    assert rect.center == Position(29, 29)
    assert rect.contains(Position(19, 38))
    assert not rect.contains(Position(39, 20))
    assert rect.fits_within(39, 39)
    assert not rect.fits_within(38, 39)
    assert rect.to_tuple() == (19, 19, 20, 20)
