"""Small value types for 2D float and tile (integer) geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def add(self, other: Vec2) -> Vec2:
        return type(self)(self.x + other.x, self.y + other.y)

    def sub(self, other: Vec2) -> Vec2:
        return type(self)(self.x - other.x, self.y - other.y)

    def scaled(self, s: float) -> Vec2:
        return type(self)(self.x * s, self.y * s)

    def len(self) -> float:
        return math.hypot(self.x, self.y)

    def norm(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.len()
        if length == 0:
            return type(self)(0.0, 0.0)
        return type(self)(self.x / length, self.y / length)

    def rotated(self, radians: float) -> Vec2:
        cos, sin = math.cos(radians), math.sin(radians)
        return type(self)(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def angle(self) -> float:
        return math.atan2(self.y, self.x)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned float rectangle."""

    min: Vec2
    max: Vec2

    def w(self) -> float:
        return self.max.x - self.min.x

    def h(self) -> float:
        return self.max.y - self.min.y

    def center(self) -> Vec2:
        return Vec2((self.min.x + self.max.x) / 2, (self.min.y + self.max.y) / 2)


@dataclass(frozen=True)
class RGBA:
    """A colour with float channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


@dataclass(frozen=True)
class NRGBA:
    """A non-premultiplied colour with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"channel out of range 0..255: {channel}")


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True)
class TilePosition:
    """An integer grid position."""

    x: int = 0
    y: int = 0

    def add(self, other: TilePosition) -> TilePosition:
        return TilePosition(self.x + other.x, self.y + other.y)

    def sub(self, other: TilePosition) -> TilePosition:
        return TilePosition(self.x - other.x, self.y - other.y)

    def div(self, n: int) -> TilePosition:
        """Divide both coordinates, truncating toward zero."""
        return TilePosition(_trunc_div(self.x, n), _trunc_div(self.y, n))


@dataclass(frozen=True)
class TileRect:
    """An axis-aligned integer rectangle on the tile grid."""

    min: TilePosition
    max: TilePosition

    def w(self) -> int:
        return self.max.x - self.min.x

    def h(self) -> int:
        return self.max.y - self.min.y

    def center(self) -> TilePosition:
        return TilePosition((self.min.x + self.max.x) // 2, (self.min.y + self.max.y) // 2)

    def moved(self, delta: TilePosition) -> TileRect:
        return TileRect(self.min.add(delta), self.max.add(delta))

    def with_center(self, pos: TilePosition) -> TileRect:
        return self.moved(pos.sub(self.center()))

    def intersects(self, other: TileRect) -> bool:
        return (
            self.min.x < other.max.x
            and other.min.x < self.max.x
            and self.min.y < other.max.y
            and other.min.y < self.max.y
        )