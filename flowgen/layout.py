"""Room layout strategies: grid compaction and incremental depth/breadth-first placement."""

from __future__ import annotations

import math
import random
from collections import deque
from dataclasses import replace

from flowgen.dag import RoomDag, RoomPlacement
from flowgen.forces import (
    any_edges_intersect,
    has_any_rect_intersections,
    has_rect_intersections,
    node_has_edge_intersections,
    wiggle,
)
from flowgen.geometry import TilePosition, TileRect

_FAN_X = (0, 1, 1, 1)
_FAN_Y = (1, 1, 1, -1)


def axis_aligned(tol: int, a: TileRect, b: TileRect) -> bool:
    """True if the two rooms' centres line up closely enough along x or y.

    The allowed offset is the smaller half-width (or half-height) minus tol.
    """
    tol_x = int(min(a.w() / 2, b.w() / 2)) - tol
    x_offset = int(math.fabs(a.center().x - b.center().x))
    if x_offset < tol_x:
        return True

    tol_y = int(min(a.h() / 2, b.h() / 2)) - tol
    y_offset = int(math.fabs(a.center().y - b.center().y))
    return y_offset < tol_y


def _random_square_center(
    rng: random.Random, center: TilePosition, distance: float
) -> TilePosition:
    radius = int(distance)
    return TilePosition(
        center.x + rng.randrange(2 * radius) - radius,
        center.y + rng.randrange(2 * radius) - radius,
    )


class GridLayout:
    """Lays rooms out on a grid and then compacts them towards their parents."""

    def __init__(
        self,
        rng: random.Random,
        dag: RoomDag,
        place: dict[str, RoomPlacement],
        start: str,
        tolerance: int,
    ) -> None:
        self.rng = rng
        self.dag = dag
        self.place = place
        self.node_list = dag.topological_sort(start)
        self.topo_idx = 0
        self.topo_moved: set[str] = set()
        self.tolerance = tolerance

    def layout_grid(self, room_pos: dict[str, TilePosition]) -> None:
        """Centre every room on its grid cell, widening the grid until no rooms overlap."""
        grid_size = 1
        while True:
            for label, room in self.place.items():
                pos = room_pos[label]
                room.rect = room.rect.with_center(
                    TilePosition(pos.x * grid_size, pos.y * grid_size)
                )
            if not has_any_rect_intersections(self.place):
                return
            grid_size += 1

    def expand(self) -> bool:
        """Push every overlapping room one tile away from the origin."""
        for label in self.node_list:
            if not has_rect_intersections(self.place, label):
                continue
            parent = self.place[label]
            center = parent.rect.center()
            parent.rect = self.move_towards(
                parent.rect, TilePosition(-center.x, -center.y), 1
            )
        return False

    def _try_move(self, label: str, room: RoomPlacement, toward: TilePosition) -> bool:
        """Move room one step; undo it if it overlaps or breaks alignment. True if kept."""
        original = room.rect.center()
        room.rect = self.move_towards(room.rect, toward, 1)
        if has_rect_intersections(self.place, label) or not self.all_edges_axis_aligned(
            self.tolerance
        ):
            room.rect = room.rect.with_center(original)
            return False
        return True

    def iterate_gravity(self) -> bool:
        """Pull each child one tile towards the origin. True when nothing moved."""
        moved: set[str] = set()
        done = True
        for parent_label in self.node_list:
            for child in self.dag.edges[parent_label]:
                if child in moved:
                    continue
                moved.add(child)
                room = self.place[child]
                if self._try_move(child, room, room.rect.center()):
                    done = False
        return done

    def all_edges_axis_aligned(self, tolerance: int) -> bool:
        for label in self.node_list:
            edges = self.dag.edges[label]
            r1 = self.place.get(label, RoomPlacement()).rect
            for target in edges:
                r2 = self.place.get(target, RoomPlacement()).rect
                if not axis_aligned(tolerance, r1, r2):
                    return False
        return True

    def iterate_towards_parent(self) -> bool:
        """Pull each child one tile towards its parent, first along x then along y."""
        moved: set[str] = set()
        done = True
        for parent_label in self.node_list:
            parent = self.place[parent_label]
            for child in self.dag.edges[parent_label]:
                if child in moved:
                    continue
                moved.add(child)
                room = self.place[child]

                rel = room.rect.center().sub(parent.rect.center())
                if self._try_move(child, room, TilePosition(rel.x, 0)):
                    done = False

                rel = room.rect.center().sub(parent.rect.center())
                if self._try_move(child, room, TilePosition(0, rel.y)):
                    done = False
        return done

    def iterate(self) -> bool:
        """Slide the children of the next room in order as close to it as they can go."""
        parent_label = self.node_list[self.topo_idx]
        parent = self.place[parent_label]
        for child in self.dag.edges[parent_label]:
            if child in self.topo_moved:
                continue
            room = self.place[child]
            self.topo_moved.add(child)
            while True:
                original = room.rect.center()
                rel = original.sub(parent.rect.center())
                before = room.rect
                room.rect = self.move_towards(room.rect, rel, 1)
                if has_rect_intersections(self.place, child) or any_edges_intersect(
                    self.dag, self.place
                ):
                    room.rect = room.rect.with_center(original)
                    break
                if room.rect == before:
                    break
        self.topo_idx = (self.topo_idx + 1) % len(self.node_list)
        return False

    def move_towards(self, rect: TileRect, pos: TilePosition, dist: int) -> TileRect:
        """Move rect one tile against pos along pos's dominant axis (y on ties)."""
        dx = dy = 0
        if abs(pos.x) > abs(pos.y):
            if pos.x > 0:
                dx = -1
            elif pos.x < 0:
                dx = 1
        else:
            if pos.y > 0:
                dy = -1
            elif pos.y < 0:
                dy = 1
        return rect.moved(TilePosition(dx, dy))


def _unplace_movable(place: dict[str, RoomPlacement]) -> None:
    for room in place.values():
        if not room.static:
            room.placed = False


class DepthFirstLayout:
    """Places rooms one parent at a time in depth-first order."""

    def __init__(
        self,
        rng: random.Random,
        dag: RoomDag,
        place: dict[str, RoomPlacement],
        start: str,
        distance: float,
    ) -> None:
        self.rng = rng
        self.dag = dag
        self.place = place
        self.dist = distance
        self.stack: list[str] = [start]

    def reset(self) -> None:
        """Mark every non-static room as unplaced."""
        _unplace_movable(self.place)

    def cut_crossed(self) -> bool:
        """Unplace the descendants of rooms whose edges cross and queue them again."""
        cut_list = [
            label
            for label in self.place
            if node_has_edge_intersections(self.dag, self.place, label)
        ]
        if not cut_list:
            return False
        for label in cut_list:
            self.cut_below(label)
            self.stack.append(label)
        return True

    def cut(self, label: str) -> None:
        room = self.place.get(label)
        if room is not None:
            room.placed = False

    def cut_below(self, label: str) -> None:
        """Unplace every room reachable from label, but not label itself."""
        visited: set[str] = set()
        stack = [label]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for child in self.dag.edges.get(current, ()):
                room = self.place.get(child)
                if room is None:
                    continue
                room.placed = False
                stack.append(child)

    def iterate(self) -> bool:
        """Place the children of the next room. False once there is nothing left."""
        if not self.stack:
            return False
        current = self.stack.pop()
        for child in self.dag.edges.get(current, ()):
            room = self.place.setdefault(child, RoomPlacement())
            if room.placed:
                continue
            current_placement = self.place[current]
            current_rect = current_placement.rect
            current_depth = current_placement.depth
            for _ in range(50):
                room.rect = room.rect.with_center(
                    _random_square_center(self.rng, current_rect.center(), self.dist)
                )
                room.depth = current_depth + 1
                room.placed = True
                wiggle(self.dag, self.place, 90000.0, 0.0, 10)
                if not node_has_edge_intersections(self.dag, self.place, child):
                    break
            self.stack.append(child)
        return True


class BreadthFirstLayout:
    """Places rooms one parent at a time in breadth-first order."""

    def __init__(
        self,
        rng: random.Random,
        dag: RoomDag,
        place: dict[str, RoomPlacement],
        start: str,
        distance: float,
    ) -> None:
        self.rng = rng
        self.dag = dag
        self.place = place
        self.dist = distance
        self.queue: deque[str] = deque([start])

    def reset(self) -> None:
        """Mark every non-static room as unplaced."""
        _unplace_movable(self.place)

    def iterate(self) -> bool:
        """Place the children of the next room. False once there is nothing left."""
        if not self.queue:
            return False
        current = self.queue.popleft()
        for child in self.dag.edges.get(current, ()):
            room = self.place.get(child, RoomPlacement())
            if room.placed:
                continue
            current_placement = self.place[current]
            current_rect = current_placement.rect
            current_depth = current_placement.depth
            for _ in range(50):
                room = replace(
                    room,
                    rect=room.rect.with_center(
                        _random_square_center(self.rng, current_rect.center(), self.dist)
                    ),
                    depth=current_depth + 1,
                    placed=True,
                )
                # The candidate joins the layout only after the others have settled.
                wiggle(self.dag, self.place, 50000.0, 0.0, 20)
                self.place[child] = room
                if not node_has_edge_intersections(self.dag, self.place, child):
                    break
            self.queue.append(child)
        return True


def place_depth_first(
    rng: random.Random,
    dag: RoomDag,
    rooms: dict[str, RoomPlacement],
    start: str,
    distance: float,
) -> None:
    """Place rooms depth-first, fanning children around their parent at distance."""
    stack = [start]
    fan = 0
    placed: set[str] = set()
    while stack:
        current = stack.pop()
        for child in dag.edges.get(current, ()):
            if child in placed:
                continue
            current_placement = rooms[current]
            center = current_placement.rect.center()
            radius = int(distance)
            fan = (fan + 1) % len(_FAN_X)
            room = rooms.setdefault(child, RoomPlacement())
            room.rect = room.rect.with_center(
                TilePosition(
                    _FAN_X[fan] * radius + center.x, _FAN_Y[fan] * radius + center.y
                )
            )
            room.depth = current_placement.depth + 1
            wiggle(dag, rooms, 1000.0, 0.0, 100)
            placed.add(child)
            stack.append(child)


def place_breadth_first(
    rng: random.Random,
    dag: RoomDag,
    rooms: dict[str, RoomPlacement],
    start: str,
    distance: float,
) -> None:
    """Place rooms breadth-first on a random neighbouring cell of their parent."""
    queue: deque[str] = deque([start])
    placed: set[str] = set()
    while queue:
        current = queue.popleft()
        for child in dag.edges.get(current, ()):
            if child in placed:
                continue
            current_placement = rooms[current]
            center = current_placement.rect.center()
            radius = int(distance)
            mx = rng.randrange(3) - 1
            my = rng.randrange(3) - 1
            room = rooms.setdefault(child, RoomPlacement())
            room.rect = room.rect.with_center(
                TilePosition(mx * radius + center.x, my * radius + center.y)
            )
            room.depth = current_placement.depth + 1
            placed.add(child)
            queue.append(child)