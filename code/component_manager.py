"""Track which rooms are joined by doors using a disjoint-set union."""

from __future__ import annotations

from typing import Dict, Iterable, List


class DisjointSetUnion:
    """Disjoint set union with path compression and canonical minimum roots."""

    def __init__(self) -> None:
        self._parent: Dict[int, int] = {}

    def add(self, item: int) -> None:
        if item not in self._parent:
            self._parent[item] = item

    def __contains__(self, item: object) -> bool:
        return item in self._parent

    def find(self, item: int) -> int:
        if item not in self._parent:
            raise KeyError(f"Unknown element {item}")
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> int:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return root_a
        # The smaller index stays the representative so summaries are stable.
        if root_a < root_b:
            self._parent[root_b] = root_a
            return root_a
        self._parent[root_a] = root_b
        return root_b


class ComponentManager:
    """Groups room indices into door-connected components."""

    def __init__(self, room_indices: Iterable[int] = ()) -> None:
        self._dsu = DisjointSetUnion()
        self._rooms: List[int] = []
        for index in room_indices:
            self.register_room(index)

    def register_room(self, index: int) -> None:
        if index in self._dsu:
            return
        self._dsu.add(index)
        self._rooms.append(index)

    def connect(self, room_a: int, room_b: int) -> int:
        """Record a door between two rooms. Returns the merged component id."""
        self.register_room(room_a)
        self.register_room(room_b)
        return self._dsu.union(room_a, room_b)

    def component_of(self, index: int) -> int:
        return self._dsu.find(index)

    def connected(self, room_a: int, room_b: int) -> bool:
        return self._dsu.find(room_a) == self._dsu.find(room_b)

    def components(self) -> Dict[int, List[int]]:
        """Map each component id to its sorted room indices."""
        summary: Dict[int, List[int]] = {}
        for index in sorted(self._rooms):
            summary.setdefault(self._dsu.find(index), []).append(index)
        return summary

    def component_sizes(self) -> Dict[int, int]:
        return {root: len(members) for root, members in self.components().items()}

    def total_components(self) -> int:
        return len(self.components())

    def has_single_component(self) -> bool:
        return self.total_components() <= 1

    def largest_component_size(self) -> int:
        sizes = self.component_sizes()
        return max(sizes.values()) if sizes else 0

    def rooms_outside_component_of(self, index: int) -> List[int]:
        root = self._dsu.find(index)
        return sorted(room for room in self._rooms if self._dsu.find(room) != root)

    @property
    def room_count(self) -> int:
        return len(self._rooms)
