"""Random ranges, list picks and weighted loot tables."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from flowgen.geometry import Rect, Vec2

T = TypeVar("T")
N = TypeVar("N", int, float)


def _source(rng: random.Random | None) -> random.Random:
    return random if rng is None else rng  # type: ignore[return-value]


@dataclass(frozen=True)
class Range(Generic[N]):
    """A half-open numeric range; integer ranges yield truncated integers."""

    min: N
    max: N

    def _cast(self, value: float) -> N:
        if isinstance(self.min, int) and isinstance(self.max, int):
            return int(value)  # type: ignore[return-value]
        return value  # type: ignore[return-value]

    def _sample(self, rng: random.Random) -> N:
        width = float(self.max) - float(self.min)
        return self._cast(rng.random() * width + float(self.min))

    def get(self) -> N:
        """A random value drawn from the global generator."""
        return self._sample(_source(None))

    def seeded_get(self, rng: random.Random) -> N:
        """A random value drawn from rng."""
        return self._sample(rng)


def get_list(items: Sequence[T]) -> T | None:
    """A random element of items, or None if items is empty."""
    if not items:
        return None
    return items[random.randrange(len(items))]


def seeded_list(rng: random.Random, items: Sequence[T]) -> T:
    """A random element of items chosen with rng."""
    if not items:
        raise IndexError("cannot pick from an empty list")
    return items[rng.randrange(len(items))]


def random_position_in_rect(rect: Rect) -> Vec2:
    """A random point inside rect."""
    return Vec2(
        Range(rect.min.x, rect.max.x).get(),
        Range(rect.min.y, rect.max.y).get(),
    )


@dataclass(frozen=True)
class Item(Generic[T]):
    """A table entry with its relative weight."""

    weight: int
    item: T


def new_item(weight: int, item: T) -> Item[T]:
    return Item(weight=weight, item=item)


class Table(Generic[T]):
    """A weighted random table; entries with weight <= 0 are never rolled."""

    def __init__(self, *items: Item[T], rng: random.Random | None = None) -> None:
        self.items: list[Item[T]] = list(items)
        self.rng = rng
        self.total = 0
        self._regenerate()

    def _regenerate(self) -> None:
        self.total = sum(entry.weight for entry in self.items if entry.weight > 0)

    def _get_index(self) -> int:
        if self.total == 0:
            self._regenerate()
        if self.total <= 0:
            raise ValueError("table has no items with a positive weight")
        roll = _source(self.rng).randrange(self.total)
        current = 0
        for index, entry in enumerate(self.items):
            current += entry.weight
            if roll < current:
                return index
        return 0

    def get(self) -> T:
        """Roll the table once."""
        return self.items[self._get_index()].item

    def get_unique(self, count: int) -> list[T]:
        """Roll count distinct entries; if the table has no more than count, return them all."""
        if count <= 0:
            return []
        if count >= len(self.items):
            return [entry.item for entry in self.items]

        indexes: list[int] = []
        while len(indexes) < count:
            index = self._get_index()
            if index not in indexes:
                indexes.append(index)
        return [self.items[index].item for index in indexes]