"""Circle colliders, collision layers and a spatial hash."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from flowgen.geometry import Rect, Vec2


class CollisionLayer(int):
    """An 8-bit collision layer bitmask."""

    def __new__(cls, value: int = 0) -> CollisionLayer:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"collision layer out of range 0..255: {value}")
        return super().__new__(cls, value)

    def mask(self, layer: int) -> bool:
        """True if the two masks share at least one layer."""
        return (self & layer) > 0


@dataclass
class ColliderCache:
    """Tracks ids collided with this frame, last frame, and newly this frame."""

    current: list[int] = field(default_factory=list)
    last: list[int] = field(default_factory=list)
    new_collisions: list[int] = field(default_factory=list)

    def add(self, id: int) -> None:
        self.current.append(id)
        if id not in self.last:
            self.new_collisions.append(id)

    def clear(self) -> None:
        """Roll this frame's collisions over to last frame."""
        self.last = self.current
        self.current = []
        self.new_collisions = []


@dataclass
class CircleCollider:
    """A circle in world space with layer masks."""

    center_x: float = 0.0
    center_y: float = 0.0
    radius: float = 0.0
    hit_layer: CollisionLayer = CollisionLayer(0)
    layer: CollisionLayer = CollisionLayer(0)

    def layer_mask(self, layer: int) -> bool:
        return (self.hit_layer & layer) > 0

    def bounds(self) -> Rect:
        return Rect(
            Vec2(self.center_x - self.radius, self.center_y - self.radius),
            Vec2(self.center_x + self.radius, self.center_y + self.radius),
        )

    def contains(self, y_projection: float, pos: Vec2) -> bool:
        dx = pos.x - self.center_x
        dy = pos.y - self.center_y
        return math.hypot(dx, y_projection * dy) < self.radius

    def overlaps(self, y_projection: float, other: CircleCollider) -> bool:
        dx = other.center_x - self.center_x
        dy = other.center_y - self.center_y
        return math.hypot(dx, y_projection * dy) < self.radius + other.radius


@dataclass(frozen=True)
class HashPosition:
    x: int = 0
    y: int = 0


@dataclass
class SpatialBucket:
    position: HashPosition
    ids: list[int] = field(default_factory=list)


class SpatialHash:
    """Buckets object ids by the grid cell their position falls in."""

    def __init__(self, bucket_size: float) -> None:
        if bucket_size <= 0:
            raise ValueError("bucket_size must be positive")
        self.bucket_size = bucket_size
        self.buckets: dict[HashPosition, SpatialBucket] = {}

    def add_circle(self, id: int, circle: CircleCollider) -> None:
        position = self.to_hash_position(circle.center_x, circle.center_y)
        bucket = self.buckets.setdefault(position, SpatialBucket(position))
        bucket.ids.append(id)

    def to_hash_position(self, x: float, y: float) -> HashPosition:
        return HashPosition(
            math.floor(x / self.bucket_size), math.floor(y / self.bucket_size)
        )

    def bucket(self, position: HashPosition) -> SpatialBucket | None:
        """The bucket at position, or None if nothing was added there."""
        return self.buckets.get(position)