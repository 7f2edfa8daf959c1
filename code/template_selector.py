"""Seeded weighted selection over a template catalog."""

from __future__ import annotations

import random
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from models import RoomCategory, RoomTemplate
from room_templates import TemplateCatalog

T = TypeVar("T")


class TemplateSelector:
    """Every random choice made while placing rooms goes through here.

    The selector borrows the caller's ``random.Random`` so that one generation
    call draws from one stream, in a fixed order.
    """

    def __init__(self, catalog: TemplateCatalog, rng: random.Random) -> None:
        self.catalog = catalog
        self.rng = rng

    def pick_weighted(self, candidates: Sequence[Tuple[T, int]]) -> Optional[T]:
        """Draw one item from ``(item, weight)`` pairs.

        Draws ``randrange(total)`` and walks the weight bands in order. With a
        zero total the first candidate wins without consuming a draw.
        """
        if not candidates:
            return None
        total = sum(weight for _, weight in candidates)
        if total <= 0:
            return candidates[0][0]
        target = self.rng.randrange(total)
        for item, weight in candidates:
            if target < weight:
                return item
            target -= weight
        return candidates[-1][0]

    def pick_template(
        self,
        category: Optional[RoomCategory] = None,
        predicate: Optional[Callable[[RoomTemplate], bool]] = None,
    ) -> Optional[RoomTemplate]:
        eligible = [
            template
            for template in self.catalog.templates
            if (category is None or template.category is category)
            and (predicate is None or predicate(template))
        ]
        return self.pick_weighted([(template, template.weight) for template in eligible])

    def pick_central(self) -> Optional[RoomTemplate]:
        return self.pick_template(predicate=lambda template: template.is_central)

    def pick_category(self) -> Optional[RoomCategory]:
        """Draw a category for an ordinary cell; central rooms are never drawn."""
        eligible = [
            (category, weight)
            for category, weight in self.catalog.category_weights
            if category is not RoomCategory.CENTRAL
        ]
        return self.pick_weighted(eligible)

    def pick_interior_template(self) -> Optional[RoomTemplate]:
        """Two-stage draw: a category by category weight, then a template in it."""
        category = self.pick_category()
        if category is None:
            return None
        return self.pick_template(category, predicate=lambda template: not template.is_central)

    def shuffle(self, items: List[T]) -> None:
        """In-place Fisher-Yates shuffle scanning from the end."""
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
