"""Random wandering paths between two points."""

from __future__ import annotations

import math
import random

from flowgen.geometry import Vec2


def _distance_sq(a: Vec2, b: Vec2) -> float:
    d = a.sub(b)
    return d.dot(d)


def path(start: Vec2, end: Vec2, n: int, variation: float) -> list[Vec2]:
    """Scatter n points around the segment start-end, sorted by distance from start.

    Interior points deviate sideways by up to variation.  For n >= 3 the
    second-to-last slot is left at the origin before sorting.
    """
    if n < 1:
        raise ValueError("a path needs at least one point")

    direction = end.sub(start)
    length_sq = direction.dot(direction)
    if length_sq not in (0, 1):
        direction = direction.scaled(1 / math.sqrt(length_sq))
    lateral = Vec2(-direction.y, direction.x)

    def wander() -> Vec2:
        t = random.random()
        along = Vec2(start.x * (1 - t) + end.x * t, start.y * (1 - t) + end.y * t)
        offset = 2 * (random.random() - 0.5) * variation
        return along.add(lateral.scaled(offset))

    if n == 1:
        points = [end]
    elif n == 2:
        points = [start, end]
    else:
        points = [start, *(wander() for _ in range(n - 3)), Vec2(), end]

    return sorted(points, key=lambda p: _distance_sq(start, p))