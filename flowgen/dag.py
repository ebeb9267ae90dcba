"""A directed acyclic graph of rooms and random grid-walk generators for it."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field

from flowgen.geometry import TilePosition, TileRect
from flowgen.rand import Range


def _label(pos: TilePosition) -> str:
    return f"{pos.x}_{pos.y}"


def _step(pos: TilePosition, direction: int) -> TilePosition:
    if direction == 0:
        return TilePosition(pos.x + 1, pos.y)
    if direction == 1:
        return TilePosition(pos.x - 1, pos.y)
    if direction == 2:
        return TilePosition(pos.x, pos.y + 1)
    return TilePosition(pos.x, pos.y - 1)


class RoomDag:
    """Rooms joined by edges that always run from an earlier-added room to a later one."""

    def __init__(self) -> None:
        self.nodes: list[str] = []
        self.node_map: dict[str, int] = {}
        self.edges: dict[str, list[str]] = {}
        self._rank = 0

    def add_node(self, label: str) -> bool:
        """Add a room; False if it already exists."""
        if label in self.node_map:
            return False
        self.node_map[label] = self._rank
        self.nodes.append(label)
        self.edges[label] = []
        self._rank += 1
        return True

    def add_edge(self, source: str, target: str) -> None:
        """Join two existing rooms, directed from the lower rank to the higher."""
        source_rank = self.node_map.get(source)
        target_rank = self.node_map.get(target)
        if source_rank is None or target_rank is None:
            return
        if source_rank < target_rank:
            self.edges[source].append(target)
        else:
            self.edges[target].append(source)

    def is_leaf_node(self, label: str) -> bool:
        """True if the room has no outgoing edges."""
        return not self.edges.get(label)

    def get_leaf_nodes(self) -> list[str]:
        return [node for node in self.nodes if self.is_leaf_node(node)]

    def distance(self, source: str, target: str) -> int | None:
        """Number of edges on the shortest path, or None if target is unreachable."""
        distances: dict[str, int] = {}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            current_distance = distances.get(current, 0)
            if current == target:
                return current_distance
            for child in self.edges.get(current, ()):
                if child not in distances:
                    distances[child] = current_distance + 1
                    queue.append(child)
        return None

    def has_edge_either_direction(self, source: str, target: str) -> bool:
        return self.has_edge(source, target) or self.has_edge(target, source)

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.edges.get(source, ())

    def topological_sort(self, start: str) -> list[str]:
        """Labels reachable from start, in breadth-first order."""
        visited: set[str] = set()
        order: list[str] = []
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            order.append(current)
            queue.extend(self.edges.get(current, ()))
        return order

    def random_label(self, rng: random.Random) -> str | None:
        """A random room label, or None if there are no rooms."""
        if not self.nodes:
            return None
        return self.nodes[rng.randrange(len(self.nodes))]

    def random_sorted_label(
        self,
        start_label: str,
        rng: random.Random,
        topo_after: int,
        topo_before_end: int,
    ) -> str | None:
        """A random room from the sorted order, skipping topo_after at the front and topo_before_end at the back."""
        if not self.nodes:
            return None
        nodes = self.topological_sort(start_label)
        after = min(topo_after, len(nodes) - 1)
        before = min(len(nodes) - topo_before_end, len(nodes) - 1)
        index = Range(after, before).seeded_get(rng)
        if index < 0 or index >= len(nodes):
            return self.random_label(rng)
        return nodes[index]


@dataclass
class RoomPlacement:
    """Where a room sits and the layout parameters attached to it."""

    rect: TileRect = field(default_factory=lambda: TileRect(TilePosition(), TilePosition()))
    goal_gap: float = 0.0
    static: bool = False
    repel: float = 0.0
    attract: float = 0.0
    depth: int = 0
    mass: float = 0.0
    placed: bool = False


def generate_random_grid_walk_dag2(
    rng: random.Random, num_rooms: int, num_walks: int
) -> tuple[RoomDag, dict[str, TilePosition]]:
    """Random walks from the origin until at least num_rooms rooms exist; walks may revisit rooms."""
    num_walks = max(num_walks, 1)
    dag = RoomDag()
    room_pos: dict[str, TilePosition] = {}
    walkers = [TilePosition() for _ in range(num_walks)]
    last_labels: list[str | None] = [None] * num_walks

    while len(dag.nodes) < num_rooms:
        for i, pos in enumerate(walkers):
            label = _label(pos)
            if dag.add_node(label):
                room_pos[label] = pos
            walkers[i] = _step(pos, rng.randrange(4))
            if last_labels[i] is not None:
                dag.add_edge(last_labels[i], label)
            last_labels[i] = label
    return dag, room_pos


def generate_random_grid_walk_dag_no_overlap(
    rng: random.Random, num_rooms: int, num_walks: int
) -> tuple[RoomDag, dict[str, TilePosition]]:
    """Random walks that try up to ten times per step to reach a room not yet visited."""
    num_walks = max(num_walks, 1)
    dag = RoomDag()
    room_pos: dict[str, TilePosition] = {}
    walkers = [TilePosition() for _ in range(num_walks)]
    last_labels: list[str | None] = [None] * num_walks

    while len(dag.nodes) < num_rooms:
        for i, pos in enumerate(walkers):
            label = _label(pos)
            if dag.add_node(label):
                room_pos[label] = pos

            next_pos = pos
            for _ in range(10):
                next_pos = _step(pos, rng.randrange(4))
                if _label(next_pos) not in dag.node_map:
                    break
            walkers[i] = next_pos

            if last_labels[i] is not None:
                dag.add_edge(last_labels[i], label)
            last_labels[i] = label
    return dag, room_pos


def _add_node_data(
    dag: RoomDag,
    room_pos: dict[str, TilePosition],
    pos: TilePosition,
    last_label: str | None,
) -> str:
    label = _label(pos)
    if dag.add_node(label):
        room_pos[label] = pos
    if last_label is not None:
        dag.add_edge(last_label, label)
    return label


def blank_walk_dag() -> tuple[RoomDag, dict[str, TilePosition]]:
    """An empty graph and room-position map for add_walk."""
    return RoomDag(), {}


def add_walk(
    dag: RoomDag,
    room_pos: dict[str, TilePosition],
    rng: random.Random,
    start_pos: TilePosition,
    walk_length: int,
    walk_north_only: bool,
) -> None:
    """Extend the graph with a walk of walk_length steps from start_pos."""
    last_label = _add_node_data(dag, room_pos, start_pos, None)
    last_pos = start_pos
    for _ in range(walk_length):
        next_pos = last_pos
        for _ in range(10):
            if walk_north_only:
                next_pos = TilePosition(last_pos.x, last_pos.y + 1)
            else:
                next_pos = _step(last_pos, rng.randrange(4))
            if _label(next_pos) not in dag.node_map:
                break
        last_label = _add_node_data(dag, room_pos, next_pos, last_label)
        last_pos = next_pos


def calculate_room_depths(
    dag: RoomDag, placements: dict[str, RoomPlacement], start: str
) -> None:
    """Set each reachable placement's depth to one more than its first-found parent."""
    visited: set[str] = set()
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current not in placements:
            raise KeyError(f"no placement for room {current!r}")
        current_depth = placements[current].depth
        for child in dag.edges.get(current, ()):
            if child in visited:
                continue
            visited.add(child)
            placements.setdefault(child, RoomPlacement()).depth = current_depth + 1
            queue.append(child)