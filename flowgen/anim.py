"""Frame-based sprite animations with optional alignment to a global clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from flowgen.geometry import Vec2

_NS_PER_SECOND = 1_000_000_000

_global_timer_ns = 0


def _to_ns(td: timedelta) -> int:
    return (td.days * 86_400 + td.seconds) * _NS_PER_SECOND + td.microseconds * 1_000


def _seconds(ns: int) -> float:
    return ns / _NS_PER_SECOND


def update_global_animation_timer(dt: timedelta) -> None:
    """Advance the clock that aligned animations follow."""
    global _global_timer_ns
    _global_timer_ns += _to_ns(dt)


@dataclass
class Frame:
    """One animation frame: a sprite shown for a duration, plus named mount points."""

    sprite: Any = None
    dur: timedelta = field(default_factory=timedelta)
    _mounts: dict[str, Vec2] = field(default_factory=dict, repr=False)

    def bounds(self) -> Any:
        """The bounds of the frame's sprite."""
        if self.sprite is None:
            raise ValueError("frame has no sprite")
        return self.sprite.bounds()

    def set_mount(self, name: str, point: Vec2) -> None:
        self._mounts[name] = point

    def mount(self, name: str) -> Vec2:
        """The named mount point, or the origin if it was never set."""
        return self._mounts.get(name, Vec2())


class Animation:
    """A set of named animations, one of which is playing."""

    def __init__(self, starting_anim: str, frames: dict[str, list[Frame]]) -> None:
        self._frames = frames
        self._frame_idx = 0
        self._remaining_ns = 0
        self._anim_name = ""
        self._cur_anim: list[Frame] = []
        self._total_ns = 0
        self._done = False
        self._speed = 1.0
        self._has_updated_once = False
        self.loop = True
        self.mirror_y = False
        self.align_animation = False

        if starting_anim == "":
            self._random_animation()
        else:
            self.set_animation(starting_anim)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def total_anim_time(self) -> timedelta:
        return timedelta(microseconds=self._total_ns // 1_000)

    def _random_animation(self) -> None:
        for name in self._frames:
            self.set_animation(name)
            break

    def _calculate_total_anim_time(self) -> None:
        self._total_ns = sum(_to_ns(frame.dur) for frame in self._cur_anim)

    def set_animation_with_duration(self, name: str, dur: timedelta) -> None:
        """Play name, stretched or squeezed to last dur in total."""
        self.set_animation(name)
        dur_ns = _to_ns(dur)
        self._speed = _seconds(self._total_ns) / _seconds(dur_ns)
        self._total_ns = dur_ns

    def has_animation(self, name: str) -> bool:
        return name in self._frames

    def get_animation_name(self) -> str:
        return self._anim_name

    def set_animation(self, name: str) -> None:
        """Switch to name; unknown names are ignored unless nothing is playing yet."""
        if name == self._anim_name:
            return
        new_anim = self._frames.get(name)
        if new_anim is None:
            if self._anim_name == "":
                self._random_animation()
            return

        self._anim_name = name
        self._cur_anim = new_anim
        self.set_frame(0)
        self._speed = 1.0
        self._has_updated_once = False
        self._done = False
        self._calculate_total_anim_time()

    def next_frame(self) -> None:
        self.set_frame(self._frame_idx + 1)

    def done(self) -> bool:
        """True once a non-looping animation has run past its last frame."""
        if self.loop:
            return False
        return self._done

    def set_frame(self, idx: int) -> None:
        """Jump to frame idx, wrapping when looping or holding the last frame otherwise."""
        if not self._cur_anim:
            return
        if self.loop:
            self._frame_idx = idx % len(self._cur_anim)
        else:
            if idx >= len(self._cur_anim):
                self._done = True
                idx = len(self._cur_anim) - 1
            self._frame_idx = idx
        self._remaining_ns = _to_ns(self._cur_anim[self._frame_idx].dur)

    def get_frame(self) -> Frame:
        """The current frame, or an empty frame if the animation has none."""
        if not self._cur_anim:
            return Frame()
        return self._cur_anim[self._frame_idx % len(self._cur_anim)]

    def _first_update(self) -> bool:
        if not self._has_updated_once:
            self._has_updated_once = True
            return True
        return False

    def update(self, dt: timedelta) -> bool:
        """Advance by dt. True if the shown frame changed (or on the first update)."""
        if self.align_animation:
            remainder = _global_timer_ns % self._total_ns
            idx = 0
            while True:
                frame_ns = int(
                    _NS_PER_SECOND * _seconds(_to_ns(self._cur_anim[idx].dur)) / self._speed
                )
                if remainder < frame_ns:
                    changed = self._frame_idx != idx
                    self.set_frame(idx)
                    if self._first_update():
                        return True
                    return changed
                remainder -= frame_ns
                idx += 1

        adjusted_ns = int(_NS_PER_SECOND * self._speed * _seconds(_to_ns(dt)))
        self._remaining_ns -= adjusted_ns
        if self._remaining_ns < 0:
            self.next_frame()
            return True
        return self._first_update()