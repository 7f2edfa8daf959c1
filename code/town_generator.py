"""TownGenerator lays out a walled town around a central square."""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from connectivity import ConnectivityBuilder
from dungeon_generator import BaseLevelGenerator
from grid_layout import GridLayoutEngine
from grid_renderer import GridRenderer
from level_config import ConnectivityPolicy, TownParams
from level_constants import STARTING_TOWN_LAYOUT, TOWN_GATE_TEMPLATE, TOWN_SQUARE_TEMPLATE
from models import RoomCategory, RoomTemplate, TileType
from room_templates import TOWN_CATALOG, TemplateCatalog
from spawn_extractor import SpawnExtractor

logger = logging.getLogger(__name__)


class TownGenerator(BaseLevelGenerator):
    """Builds a ``grid_size`` x ``grid_size`` town.

    The town square always takes the centre cell. A 3x3 town uses the classic
    fixed layout; larger towns put a gate in the middle of each outer side and
    draw the remaining buildings by weight.
    """

    def __init__(
        self,
        params: TownParams,
        seed: int,
        catalog: Optional[TemplateCatalog] = None,
    ) -> None:
        super().__init__(
            seed=seed,
            catalog=catalog if catalog is not None else TOWN_CATALOG,
            grid_width=params.grid_size,
            grid_height=params.grid_size,
            canvas_width=params.canvas_width,
            canvas_height=params.canvas_height,
            min_room_size=params.min_room_size,
            collect_metrics=params.collect_metrics,
        )
        self.params = params
        self.engine = GridLayoutEngine(
            self.layout,
            self.selector,
            self.factory,
            params.room_width,
            params.room_height,
            central_multiplier=1,
            central_template=TOWN_SQUARE_TEMPLATE,
        )
        # Anything not covered by a building is street.
        self.renderer = GridRenderer(TileType.FLOOR)

    def generate(self) -> List[List[TileType]]:
        """Generate the town and return its tile canvas."""
        self._run_phase("place_rooms", self.place_buildings)
        self._run_phase("render", self.renderer.render, self.layout)

        builder = ConnectivityBuilder(self.layout, self.rng, ConnectivityPolicy.FULL_CONNECT)
        self.connectivity = self._run_phase("connect", builder.connect)
        self.door_graph = builder.door_graph

        extractor = SpawnExtractor(self.layout)
        self.spawn_points = self._run_phase("spawns", extractor.town_spawn_points)
        self.spawn_position = extractor.town_primary_spawn(self.spawn_points)

        logger.debug(
            "Town seed=%s: %d buildings on %dx%d, %d spawn point(s)",
            self.seed,
            len(self.rooms),
            self.layout.width,
            self.layout.height,
            len(self.spawn_points),
        )
        return self.layout.canvas

    def place_buildings(self) -> int:
        square = self.engine.place_central()
        square.category = RoomCategory.TOWN
        for gx, gy in list(self.room_grid.cells_row_major()):
            if not self.room_grid.is_free(gx, gy):
                continue
            room = self.engine.place_cell(gx, gy, self._template_for(gx, gy), RoomCategory.TOWN)
            room.category = RoomCategory.TOWN
        return len(self.rooms)

    def _template_for(self, gx: int, gy: int) -> Optional[RoomTemplate]:
        if self.params.grid_size == len(STARTING_TOWN_LAYOUT):
            return self._lookup(STARTING_TOWN_LAYOUT[gy][gx])
        if (gx, gy) in self.gate_cells():
            return self._lookup(TOWN_GATE_TEMPLATE)
        return self.selector.pick_template(
            RoomCategory.TOWN, predicate=lambda template: not template.is_central
        )

    def _lookup(self, name: str) -> Optional[RoomTemplate]:
        if name not in self.catalog:
            logger.info("Town template '%s' missing from catalog", name)
            return None
        return self.catalog.by_name(name)

    def gate_cells(self) -> Set[Tuple[int, int]]:
        size = self.params.grid_size
        mid = size // 2
        return {(mid, 0), (mid, size - 1), (0, mid), (size - 1, mid)}

    @property
    def is_starting_town(self) -> bool:
        return self.params.is_starting_town
