"""Force-directed relaxation of room layouts and edge/rectangle intersection tests."""

from __future__ import annotations

import math
import random

from flowgen.dag import RoomDag, RoomPlacement
from flowgen.geometry import TilePosition, Vec2

_ATTRACT_CONSTANT = 0.2
_MASS = 4.0


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _ccw(a: TilePosition, b: TilePosition, c: TilePosition) -> bool:
    return (c.y - a.y) * (b.x - a.x) >= (b.y - a.y) * (c.x - a.x)


def _segments_intersect(
    a: TilePosition, b: TilePosition, c: TilePosition, d: TilePosition
) -> bool:
    """True if segment ab crosses segment cd."""
    return _ccw(a, c, d) != _ccw(b, c, d) and _ccw(a, b, c) != _ccw(a, b, d)


def has_edge_intersections(
    dag: RoomDag, rects: dict[str, RoomPlacement], label1: str, label2: str
) -> bool:
    """True if the edge label1-label2 crosses any edge not sharing an endpoint with it."""
    r_a = rects.get(label1)
    r_b = rects.get(label2)
    if r_a is None or r_b is None or not r_a.placed or not r_b.placed:
        return False

    a = r_a.rect.center()
    b = r_b.rect.center()
    for node, edges in dag.edges.items():
        if node in (label1, label2):
            continue
        r_c = rects.get(node)
        for target in edges:
            if target in (label1, label2):
                continue
            r_d = rects.get(target)
            if r_c is None or r_d is None or not r_c.placed or not r_d.placed:
                continue
            if _segments_intersect(a, b, r_c.rect.center(), r_d.rect.center()):
                return True
    return False


def node_has_edge_intersections(
    dag: RoomDag, rects: dict[str, RoomPlacement], label: str
) -> bool:
    """True if any outgoing edge of label crosses another edge."""
    edges = dag.edges[label]
    return any(has_edge_intersections(dag, rects, label, e) for e in edges)


def node_has_edge_intersections_with_more_shallow_edge(
    dag: RoomDag, placements: dict[str, RoomPlacement], label: str
) -> bool:
    """Like node_has_edge_intersections, ignoring edges to rooms deeper than label."""
    edges = dag.edges[label]
    p1 = placements.get(label)
    if p1 is None:
        return False
    for target in edges:
        p2 = placements.get(target)
        if p2 is None:
            continue
        if p1.depth < p2.depth:
            continue
        if has_edge_intersections(dag, placements, label, target):
            return True
    return False


def any_edges_intersect(dag: RoomDag, rects: dict[str, RoomPlacement]) -> bool:
    return any(
        has_edge_intersections(dag, rects, node, e)
        for node, edges in dag.edges.items()
        for e in edges
    )


def has_rect_intersections(rects: dict[str, RoomPlacement], label: str) -> bool:
    """True if label's rectangle overlaps any other placed room."""
    source = rects.get(label)
    if source is None:
        return False
    return any(
        key != label and other.placed and other.rect.intersects(source.rect)
        for key, other in rects.items()
    )


def has_any_rect_intersections(rects: dict[str, RoomPlacement]) -> bool:
    return any(has_rect_intersections(rects, label) for label in rects)


def find_node_neighbor_average_position(
    dag: RoomDag, place: dict[str, RoomPlacement], label: str
) -> TilePosition:
    """Mean centre of the placed rooms joined to label; the origin if there are none."""
    total = TilePosition()
    count = 0
    for key, placement in place.items():
        if key == label or not placement.placed:
            continue
        if dag.has_edge_either_direction(key, label):
            total = total.add(placement.rect.center())
            count += 1
    if count == 0:
        return total
    return total.div(count)


def wiggle(
    dag: RoomDag,
    rooms: dict[str, RoomPlacement],
    repel_multiplier: float,
    gravity_constant: float,
    iterations: int,
) -> bool:
    """Push placed, non-static rooms by spring, repulsion and gravity forces.

    Returns True if no room moved.
    """
    forces: dict[str, Vec2] = {}
    stable = True
    for _ in range(iterations):
        for key, placement in rooms.items():
            if placement.static or not placement.placed:
                continue
            center = placement.rect.center()
            force = Vec2()
            for key2, other in rooms.items():
                if key == key2 or not other.placed:
                    continue
                delta_tile = other.rect.center().sub(center)
                delta = Vec2(float(delta_tile.x), float(delta_tile.y))
                dist = delta.len()
                if dag.has_edge_either_direction(key2, key):
                    attract = _ATTRACT_CONSTANT * placement.attract * other.attract
                    mag = attract * (dist - (placement.goal_gap + other.goal_gap))
                    mag = min(mag, 100.0)
                    vec = delta.norm().scaled(mag)
                    vec = Vec2(vec.x * 4, vec.y)
                else:
                    dist = max(dist, 100.0)
                    repel = repel_multiplier * placement.repel * other.repel
                    mag = -repel / (dist * dist * dist * dist)
                    vec = delta.norm().scaled(mag)
                force = force.add(vec)

            position = Vec2(float(center.x), float(center.y))
            forces[key] = force.add(position.scaled(-gravity_constant))

        for key, force in forces.items():
            placement = rooms[key]
            move = TilePosition(
                _round_half_away(force.x / _MASS), _round_half_away(force.y / _MASS)
            )
            if move == TilePosition():
                continue
            stable = False
            placement.rect = placement.rect.moved(move)
    return stable


def untangle(
    dag: RoomDag,
    rooms: dict[str, RoomPlacement],
    repel_multiplier: float,
    gravity_constant: float,
    iterations: int,
) -> None:
    """Raise the forces on rooms with crossing edges and wiggle until stable."""
    for _ in range(iterations):
        for node, edges in dag.edges.items():
            for target in edges:
                room = rooms.setdefault(node, RoomPlacement())
                if has_edge_intersections(dag, rooms, node, target):
                    room.attract = 1.2
                    room.repel += 1
        if wiggle(dag, rooms, repel_multiplier, gravity_constant, 1):
            break


def psld_step(
    rng: random.Random, dag: RoomDag, place: dict[str, RoomPlacement]
) -> bool:
    """Move the first non-static room with a crossing edge onto its child.

    Returns True if there were no crossings to resolve.
    """
    for node, edges in dag.edges.items():
        for target in edges:
            if not has_edge_intersections(dag, place, node, target):
                continue
            p1 = place[node]
            if p1.static:
                continue
            p2 = place[target]
            delta = p2.rect.center().sub(p1.rect.center())
            p1.rect = p1.rect.moved(delta)
            return False
    return True


def psld(rng: random.Random, dag: RoomDag, place: dict[str, RoomPlacement]) -> None:
    """Repeat psld_step until no crossings remain."""
    while not psld_step(rng, dag, place):
        pass


class ForceBasedRelaxer:
    """Iteratively relaxes a layout, strengthening rooms that still overlap or cross."""

    def __init__(
        self,
        rng: random.Random,
        dag: RoomDag,
        placements: dict[str, RoomPlacement],
        starting_repel: float,
        starting_grav: float,
    ) -> None:
        self.rng = rng
        self.dag = dag
        self.placements = placements
        self.repel = starting_repel
        self.grav = starting_grav

    def iterate(self) -> None:
        for node, edges in self.dag.edges.items():
            for target in edges:
                if has_edge_intersections(self.dag, self.placements, node, target):
                    room = self.placements[node]
                    room.attract = 1.2
                    room.repel += 1

        for label, placement in self.placements.items():
            if has_rect_intersections(self.placements, label):
                placement.repel += 1

        self.repel -= 1
        self.grav = 0.1
        wiggle(self.dag, self.placements, self.repel, self.grav, 1)