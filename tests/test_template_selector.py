import random
from collections import Counter

import pytest

from models import RoomCategory, RoomTemplate
from room_templates import TemplateCatalog
from template_selector import TemplateSelector

PATTERN = "###\n#.#\n###"


def test_pick_weighted_walks_weight_bands(monkeypatch):
    selector = TemplateSelector(TemplateCatalog([]), random.Random(0))
    candidates = [("a", 2), ("b", 0), ("c", 3)]
    draws = iter([0, 1, 2, 4])
    monkeypatch.setattr(selector.rng, "randrange", lambda total: next(draws))

    picks = [selector.pick_weighted(candidates) for _ in range(4)]

    assert picks == ["a", "a", "c", "c"]


def test_pick_weighted_zero_total_returns_first_without_drawing(monkeypatch):
    selector = TemplateSelector(TemplateCatalog([]), random.Random(0))

    def fail(_total):
        raise AssertionError("should not draw")

    monkeypatch.setattr(selector.rng, "randrange", fail)

    assert selector.pick_weighted([("x", 0), ("y", 0)]) == "x"
    assert selector.pick_weighted([]) is None


def test_pick_template_filters_by_category(selector):
    for _ in range(20):
        template = selector.pick_template(RoomCategory.TREASURE)
        assert template.category is RoomCategory.TREASURE


def test_pick_template_returns_none_for_missing_category(selector):
    assert selector.pick_template(RoomCategory.TOWN) is None


def test_pick_central_only_returns_central_templates(selector):
    names = {selector.pick_central().name for _ in range(30)}

    assert names <= {"great_hall", "throne_room"}


def test_pick_category_never_draws_central(selector):
    counts = Counter(selector.pick_category() for _ in range(500))

    assert RoomCategory.CENTRAL not in counts
    assert counts[RoomCategory.COMBAT] > counts[RoomCategory.TREASURE]


def test_same_seed_gives_same_sequence(dungeon_catalog):
    first = TemplateSelector(dungeon_catalog, random.Random(99))
    second = TemplateSelector(dungeon_catalog, random.Random(99))

    assert [first.pick_interior_template() for _ in range(25)] == [
        second.pick_interior_template() for _ in range(25)
    ]


def test_shuffle_is_seeded_fisher_yates():
    items = list(range(10))
    expected = list(items)
    reference = random.Random(7)
    for i in range(len(expected) - 1, 0, -1):
        j = reference.randint(0, i)
        expected[i], expected[j] = expected[j], expected[i]

    TemplateSelector(TemplateCatalog([]), random.Random(7)).shuffle(items)

    assert items == expected
    assert sorted(items) == list(range(10))


def test_interior_draw_skips_central_templates():
    catalog = TemplateCatalog(
        [
            RoomTemplate("hub", RoomCategory.COMBAT, 100, PATTERN, is_central=True),
            RoomTemplate("plain", RoomCategory.COMBAT, 1, PATTERN),
        ],
        {RoomCategory.COMBAT: 1},
    )
    selector = TemplateSelector(catalog, random.Random(3))

    assert {selector.pick_interior_template().name for _ in range(10)} == {"plain"}


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_pick_category_zero_weights_falls_back_to_first(seed):
    catalog = TemplateCatalog(
        [RoomTemplate("r", RoomCategory.REST, 1, PATTERN)],
        {RoomCategory.CENTRAL: 0, RoomCategory.REST: 0, RoomCategory.COMBAT: 0},
    )

    assert TemplateSelector(catalog, random.Random(seed)).pick_category() is RoomCategory.REST
