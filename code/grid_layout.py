"""Three-phase placement of template rooms onto the room grid."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from errors import SizeConstraintViolation, TemplateError, TemplateNotFoundError
from level_constants import MAX_INTERIOR_ATTEMPTS
from level_layout import LevelLayout
from models import Room, RoomCategory, RoomTemplate
from room_factory import RoomFactory
from room_grid import RoomGrid
from template_selector import TemplateSelector

logger = logging.getLogger(__name__)


class GridLayoutEngine:
    """Fills a :class:`LevelLayout` in three phases: central, edge, interior.

    Each phase only ever claims free cells, so a phase never revisits the
    decisions of an earlier one. Template and sizing errors are absorbed here
    and replaced by blank procedural rooms.
    """

    def __init__(
        self,
        layout: LevelLayout,
        selector: TemplateSelector,
        factory: RoomFactory,
        room_width: int,
        room_height: int,
        central_multiplier: int = 1,
        central_template: Optional[str] = None,
    ) -> None:
        self.layout = layout
        self.selector = selector
        self.factory = factory
        self.room_width = room_width
        self.room_height = room_height
        self.central_multiplier = central_multiplier
        self.central_template = central_template
        self.used_pinned_central = False
        self.fallback_rooms = 0

    @property
    def grid(self) -> RoomGrid:
        return self.layout.room_grid

    def place_all(self) -> int:
        """Run all three phases. Returns the number of rooms placed."""
        self.place_central()
        self.place_edges()
        self.place_interior()
        return len(self.layout.rooms)

    # Phase 1 -----------------------------------------------------------------

    def central_cell(self) -> Tuple[int, int]:
        m = self.central_multiplier
        return (self.grid.width - m) // 2, (self.grid.height - m) // 2

    def central_size(self) -> Tuple[int, int]:
        m = self.central_multiplier
        return self.room_width * m - (m - 1), self.room_height * m - (m - 1)

    def _central_template(self) -> RoomTemplate:
        if self.central_template is not None:
            template = self.selector.catalog.by_name(self.central_template)
            if not template.is_central:
                raise TemplateNotFoundError(
                    f"Room template '{template.name}' is not a central template",
                    template_name=template.name,
                )
            return template
        template = self.selector.pick_central()
        if template is None:
            raise TemplateNotFoundError("Catalog has no central room templates")
        return template

    def place_central(self) -> Room:
        gx, gy = self.central_cell()
        position = RoomGrid.cell_origin(gx, gy, self.room_width, self.room_height)
        width, height = self.central_size()
        try:
            template = self._central_template()
            room = self.factory.create_room_with_min_size(template, position, width, height)
            _check_footprint(room, width, height)
            self.layout.check_fits(room)
            self.used_pinned_central = self.central_template is not None
        except (TemplateError, SizeConstraintViolation) as exc:
            logger.info("Central room fallback at cell %s: %s", (gx, gy), exc)
            room = self.factory.create_blank_room(position, width, height, is_central=True)
            self.fallback_rooms += 1
        self.layout.register_room(room, gx, gy, self.central_multiplier)
        return room

    # Phase 2 -----------------------------------------------------------------

    def place_edges(self) -> int:
        placed = 0
        for gx, gy in self.grid.free_edge_cells():
            room = self.place_cell(
                gx, gy, self.selector.pick_template(RoomCategory.SPAWN), RoomCategory.SPAWN
            )
            # Spawn extraction only looks at SPAWN rooms, so blank fallbacks are relabeled too.
            room.category = RoomCategory.SPAWN
            placed += 1
        return placed

    # Phase 3 -----------------------------------------------------------------

    def place_interior(self) -> int:
        cells = self.grid.free_interior_cells()
        self.selector.shuffle(cells)
        for gx, gy in cells:
            room = self._try_interior_templates(gx, gy)
            if room is None:
                logger.info("Interior cell %s exhausted %d attempts", (gx, gy), MAX_INTERIOR_ATTEMPTS)
                room = self._blank_cell_room(gx, gy, RoomCategory.COMBAT)
                self.fallback_rooms += 1
            self.layout.register_room(room, gx, gy)
        return len(cells)

    def _try_interior_templates(self, gx: int, gy: int) -> Optional[Room]:
        for _ in range(MAX_INTERIOR_ATTEMPTS):
            template = self.selector.pick_interior_template()
            if template is None or not template.category.allowed_in_interior:
                continue
            try:
                room = self._template_cell_room(gx, gy, template)
            except (TemplateError, SizeConstraintViolation) as exc:
                logger.debug("Interior attempt at %s rejected: %s", (gx, gy), exc)
                continue
            return room
        return None

    # Shared ------------------------------------------------------------------

    def place_cell(
        self,
        gx: int,
        gy: int,
        template: Optional[RoomTemplate],
        fallback_category: RoomCategory,
    ) -> Room:
        """Place ``template`` in one cell, or a blank room when it cannot be used."""
        try:
            if template is None:
                raise TemplateNotFoundError(
                    f"No {fallback_category.value} template available for cell {(gx, gy)}"
                )
            room = self._template_cell_room(gx, gy, template)
        except (TemplateError, SizeConstraintViolation) as exc:
            logger.info("Blank room fallback at cell %s: %s", (gx, gy), exc)
            room = self._blank_cell_room(gx, gy, fallback_category)
            self.fallback_rooms += 1
        self.layout.register_room(room, gx, gy)
        return room

    def _template_cell_room(self, gx: int, gy: int, template: RoomTemplate) -> Room:
        position = RoomGrid.cell_origin(gx, gy, self.room_width, self.room_height)
        room = self.factory.create_room_with_min_size(template, position, self.room_width, self.room_height)
        _check_footprint(room, self.room_width, self.room_height)
        self.layout.check_fits(room)
        return room

    def _blank_cell_room(self, gx: int, gy: int, category: RoomCategory) -> Room:
        position = RoomGrid.cell_origin(gx, gy, self.room_width, self.room_height)
        return self.factory.create_blank_room(position, self.room_width, self.room_height, category=category)


def _check_footprint(room: Room, width: int, height: int) -> None:
    """Templates larger than their cells would spill over neighbouring rooms."""
    if room.width > width or room.height > height:
        raise SizeConstraintViolation(room.bounds, width, height)
