"""DungeonGenerator runs the place, render, connect and spawn phases for one dungeon."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, List, Optional, TypeVar

import networkx as nx

from connectivity import ConnectivityBuilder, ConnectivityReport
from geometry import Position
from grid_layout import GridLayoutEngine
from grid_renderer import GridRenderer
from level_config import DungeonParams
from level_layout import LevelLayout
from metrics import GenerationMetrics
from models import Room, TileType
from room_factory import RoomFactory
from room_grid import RoomGrid
from room_templates import DUNGEON_CATALOG, TemplateCatalog
from spawn_extractor import SpawnExtractor, best_spawn_point
from template_selector import TemplateSelector

logger = logging.getLogger(__name__)

R = TypeVar("R")


class BaseLevelGenerator:
    """Shared state and phase bookkeeping for the dungeon and town pipelines.

    Each instance owns its RNG, seeded once from the caller's seed, and its
    own layout, so generators never share mutable state.
    """

    def __init__(
        self,
        seed: int,
        catalog: TemplateCatalog,
        grid_width: int,
        grid_height: int,
        canvas_width: int,
        canvas_height: int,
        min_room_size: int,
        collect_metrics: bool,
    ) -> None:
        self.seed = seed
        self.rng = random.Random(seed)
        self.catalog = catalog
        self.layout = LevelLayout(grid_width, grid_height, canvas_width, canvas_height)
        self.selector = TemplateSelector(catalog, self.rng)
        self.factory = RoomFactory(min_room_size)
        self.metrics = GenerationMetrics() if collect_metrics else None
        self.connectivity: Optional[ConnectivityReport] = None
        self.door_graph: Optional[nx.Graph] = None
        self.spawn_points: List[Position] = []
        self.spawn_position: Optional[Position] = None

    @property
    def rooms(self) -> List[Room]:
        return self.layout.rooms

    @property
    def room_grid(self) -> RoomGrid:
        return self.layout.room_grid

    @property
    def canvas(self) -> List[List[TileType]]:
        return self.layout.canvas

    def _run_phase(self, name: str, func: Callable[..., R], *args, **kwargs) -> R:
        if self.metrics is None:
            return func(*args, **kwargs)

        rooms_before = len(self.layout.rooms)
        doors_before = self.layout.door_count()
        start = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = perf_counter() - start
            self.metrics.record_phase(
                name,
                duration,
                len(self.layout.rooms) - rooms_before,
                self.layout.door_count() - doors_before,
            )

    def central_room_position(self) -> Optional[Position]:
        central = self.layout.central_room()
        return central.center if central is not None else None

    def random_spawn_point(self) -> Position:
        """Pick any spawn point using this generator's own RNG stream."""
        if not self.spawn_points:
            raise ValueError("Level has not been generated yet")
        return self.rng.choice(self.spawn_points)


class DungeonGenerator(BaseLevelGenerator):
    """Manages the overall process of generating a dungeon level."""

    def __init__(
        self,
        params: DungeonParams,
        seed: int,
        catalog: Optional[TemplateCatalog] = None,
    ) -> None:
        super().__init__(
            seed=seed,
            catalog=catalog if catalog is not None else DUNGEON_CATALOG,
            grid_width=params.rooms_wide,
            grid_height=params.rooms_high,
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
            central_multiplier=params.central_room_multiplier,
            central_template=params.central_room_template,
        )
        self.renderer = GridRenderer(TileType.WALL)

    def generate(self) -> List[List[TileType]]:
        """Generate the dungeon and return its tile canvas."""
        self._run_phase("place_rooms", self.engine.place_all)
        self._run_phase("render", self.renderer.render, self.layout)

        builder = ConnectivityBuilder(
            self.layout,
            self.rng,
            self.params.connectivity_policy,
            self.params.extra_connection_chance,
        )
        self.connectivity = self._run_phase("connect", builder.connect)
        self.door_graph = builder.door_graph

        extractor = SpawnExtractor(self.layout)
        self.spawn_points = self._run_phase("spawns", extractor.dungeon_spawn_points)
        self.spawn_position = self.best_spawn_point()

        logger.debug(
            "Dungeon seed=%s: %d rooms on %dx%d, %d fallback room(s), %d spawn point(s)",
            self.seed,
            len(self.rooms),
            self.layout.width,
            self.layout.height,
            self.engine.fallback_rooms,
            len(self.spawn_points),
        )
        return self.layout.canvas

    def best_spawn_point(self) -> Position:
        return best_spawn_point(self.spawn_points, self.layout.width, self.layout.height)

    @property
    def used_pinned_central(self) -> bool:
        return self.engine.used_pinned_central
