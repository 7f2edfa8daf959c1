"""Turn adjacent connector pairs between rooms into doors."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Set, Tuple

import networkx as nx

from component_manager import ComponentManager
from geometry import Position, Rect
from level_config import ConnectivityPolicy
from level_constants import EXTRA_CONNECTION_CHANCE
from level_layout import LevelLayout
from models import Room, TileType

logger = logging.getLogger(__name__)

ConnectorPair = Tuple[Position, Position]


@dataclass
class ConnectivityReport:
    """Summary of a connectivity pass."""

    policy: ConnectivityPolicy
    doors_opened: int = 0
    adjacency_edges: int = 0
    opened_edges: int = 0
    component_count: int = 0
    unreachable_rooms: List[int] = field(default_factory=list)

    @property
    def fully_connected(self) -> bool:
        return not self.unreachable_rooms

    def to_dict(self) -> dict:
        return {
            "policy": self.policy.value,
            "doors_opened": self.doors_opened,
            "adjacency_edges": self.adjacency_edges,
            "opened_edges": self.opened_edges,
            "component_count": self.component_count,
            "unreachable_rooms": list(self.unreachable_rooms),
        }


def _touching(a: Rect, b: Rect) -> bool:
    """True when ``b`` overlaps ``a`` grown by one tile on every side."""
    return Rect(a.x - 1, a.y - 1, a.width + 2, a.height + 2).overlaps(b)


def build_adjacency_graph(rooms: List[Room]) -> nx.Graph:
    """Graph of rooms whose connectors sit exactly one tile apart.

    Nodes are room indices. Each edge carries ``pairs``: every
    ``(connector_a, connector_b)`` hit for the lower-indexed room ``a``, in
    connector order.
    """
    graph = nx.Graph()
    graph.add_nodes_from(room.index for room in rooms)
    connectors = [room.global_connectors() for room in rooms]
    for i, room_a in enumerate(rooms):
        for j in range(i + 1, len(rooms)):
            room_b = rooms[j]
            if not _touching(room_a.bounds, room_b.bounds):
                continue
            pairs = [
                (pos_a, pos_b)
                for pos_a in connectors[i]
                for pos_b in connectors[j]
                if pos_a.is_orthogonally_adjacent(pos_b)
            ]
            if pairs:
                graph.add_edge(room_a.index, room_b.index, pairs=pairs)
    return graph


class ConnectivityBuilder:
    """Opens doors on a rendered layout according to a :class:`ConnectivityPolicy`."""

    def __init__(
        self,
        layout: LevelLayout,
        rng: random.Random,
        policy: ConnectivityPolicy = ConnectivityPolicy.FULL_CONNECT,
        extra_connection_chance: float = EXTRA_CONNECTION_CHANCE,
    ) -> None:
        self.layout = layout
        self.rng = rng
        self.policy = policy
        self.extra_connection_chance = extra_connection_chance
        self.components = ComponentManager(room.index for room in layout.rooms)
        self.graph: nx.Graph = nx.Graph()
        # Rooms joined by at least one opened door.
        self.door_graph: nx.Graph = nx.Graph()
        self.door_graph.add_nodes_from(room.index for room in layout.rooms)
        self._door_tiles: Set[Position] = set()

    def connect(self) -> ConnectivityReport:
        self.graph = build_adjacency_graph(self.layout.rooms)
        if self.policy is ConnectivityPolicy.FULL_CONNECT:
            opened_edges = self._connect_all()
        elif self.policy is ConnectivityPolicy.SPANNING_TREE:
            opened_edges = self._connect_spanning_tree()
        else:
            raise ValueError(f"Unsupported connectivity policy {self.policy}")

        report = ConnectivityReport(
            policy=self.policy,
            doors_opened=len(self._door_tiles),
            adjacency_edges=self.graph.number_of_edges(),
            opened_edges=opened_edges,
            component_count=self.components.total_components(),
        )
        if self.layout.rooms:
            report.unreachable_rooms = self.components.rooms_outside_component_of(self._root_index())
        if report.unreachable_rooms:
            logger.info(
                "%d room(s) not reachable from room %d: %s",
                len(report.unreachable_rooms),
                self._root_index(),
                report.unreachable_rooms,
            )
        logger.debug(
            "Connectivity (%s): %d doors over %d/%d edges, %d component(s)",
            self.policy.value,
            report.doors_opened,
            report.opened_edges,
            report.adjacency_edges,
            report.component_count,
        )
        return report

    def _root_index(self) -> int:
        central = self.layout.central_room()
        return central.index if central is not None else 0

    def _sorted_edges(self) -> List[Tuple[int, int]]:
        return sorted((min(u, v), max(u, v)) for u, v in self.graph.edges())

    def _pairs(self, a: int, b: int) -> List[ConnectorPair]:
        pairs = self.graph.edges[a, b]["pairs"]
        if a > b:
            return [(pos_b, pos_a) for pos_a, pos_b in pairs]
        return pairs

    def _connect_all(self) -> int:
        for a, b in self._sorted_edges():
            for pos_a, pos_b in self._pairs(a, b):
                self.open_pair(a, b, pos_a, pos_b)
        return self.graph.number_of_edges()

    def _connect_spanning_tree(self) -> int:
        if not self.layout.rooms:
            return 0
        root = self._root_index()
        tree_edges = list(nx.bfs_edges(self.graph, root, sort_neighbors=sorted))
        tree_keys = {(min(u, v), max(u, v)) for u, v in tree_edges}
        for a, b in tree_edges:
            self._open_random_pair(a, b)

        opened = len(tree_edges)
        for a, b in self._sorted_edges():
            if (a, b) in tree_keys:
                continue
            if self.rng.random() < self.extra_connection_chance:
                self._open_random_pair(a, b)
                opened += 1
        return opened

    def _open_random_pair(self, a: int, b: int) -> None:
        pairs = self._pairs(a, b)
        pos_a, pos_b = pairs[self.rng.randrange(len(pairs))]
        self.open_pair(a, b, pos_a, pos_b)

    def open_pair(self, a: int, b: int, pos_a: Position, pos_b: Position) -> None:
        """Write a door on each side of the seam, in the canvas and both rooms."""
        rooms = self.layout.rooms
        if not rooms[a].open_connector(pos_a) or not rooms[b].open_connector(pos_b):
            raise ValueError(f"Connector pair {pos_a}/{pos_b} does not belong to rooms {a}/{b}")
        for pos in (pos_a, pos_b):
            self.layout.set_tile(pos, TileType.DOOR)
            self._door_tiles.add(pos)
        self.components.connect(a, b)
        self.door_graph.add_edge(a, b)
