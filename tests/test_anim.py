from datetime import timedelta

import pytest

from flowgen import anim
from flowgen.anim import Animation, Frame, update_global_animation_timer
from flowgen.geometry import Vec2


class _Sprite:
    def __init__(self, box):
        self.box = box

    def bounds(self):
        return self.box


def ms(n):
    return timedelta(milliseconds=n)


def make_frames():
    walk = [Frame(_Sprite(("walk", i)), ms(100)) for i in range(3)]
    idle = [Frame(_Sprite(("idle", i)), ms(50)) for i in range(2)]
    return {"walk": walk, "idle": idle}


def test_frame_mount_default_and_set():
    frame = Frame(_Sprite(None), ms(10))
    assert frame.mount("hand") == Vec2()
    frame.set_mount("hand", Vec2(1.0, 2.0))
    assert frame.mount("hand") == Vec2(1.0, 2.0)


def test_frame_bounds_delegates_to_sprite():
    frame = Frame(_Sprite("box"), ms(10))
    assert frame.bounds() == "box"
    with pytest.raises(ValueError):
        Frame().bounds()


def test_named_starting_animation():
    frames = make_frames()
    a = Animation("idle", frames)
    assert a.get_animation_name() == "idle"
    assert a.get_frame() is frames["idle"][0]
    assert a.has_animation("walk")
    assert not a.has_animation("run")


def test_empty_or_unknown_start_picks_first():
    frames = make_frames()
    assert Animation("", frames).get_animation_name() == "walk"
    assert Animation("run", frames).get_animation_name() == "walk"


def test_no_frames_gives_empty_frame():
    a = Animation("", {})
    assert a.get_animation_name() == ""
    assert a.get_frame().sprite is None


def test_unknown_name_keeps_current():
    a = Animation("idle", make_frames())
    a.set_animation("run")
    assert a.get_animation_name() == "idle"


def test_looping_set_frame_wraps():
    frames = make_frames()
    a = Animation("walk", frames)
    a.set_frame(4)
    assert a.get_frame() is frames["walk"][1]
    assert not a.done()


def test_non_looping_holds_last_frame():
    frames = make_frames()
    a = Animation("walk", frames)
    a.loop = False
    a.set_frame(7)
    assert a.get_frame() is frames["walk"][2]
    assert a.done()


def test_switching_animation_resets_frame_and_done():
    frames = make_frames()
    a = Animation("walk", frames)
    a.loop = False
    a.set_frame(5)
    assert a.done()
    a.set_animation("idle")
    assert a.get_frame() is frames["idle"][0]
    assert not a.done()


def test_update_advances_after_duration():
    frames = make_frames()
    a = Animation("walk", frames)
    assert a.update(ms(10)) is True
    assert a.update(ms(10)) is False
    assert a.get_frame() is frames["walk"][0]
    assert a.update(ms(80)) is False
    assert a.update(ms(1)) is True
    assert a.get_frame() is frames["walk"][1]


def test_set_animation_with_duration_scales_speed():
    frames = make_frames()
    a = Animation("idle", frames)
    a.set_animation_with_duration("walk", ms(150))
    assert a.speed == pytest.approx(2.0)
    assert a.total_anim_time == ms(150)
    a.update(ms(0))
    assert a.update(ms(60)) is True
    assert a.get_frame() is frames["walk"][1]


def test_aligned_animation_follows_global_timer(monkeypatch):
    monkeypatch.setattr(anim, "_global_timer_ns", 0)
    frames = make_frames()
    a = Animation("walk", frames)
    a.align_animation = True
    update_global_animation_timer(ms(150))
    assert a.update(ms(0)) is True
    assert a.get_frame() is frames["walk"][1]
    assert a.update(ms(0)) is False
    update_global_animation_timer(ms(300))
    assert a.update(ms(0)) is False
    assert a.get_frame() is frames["walk"][1]
    update_global_animation_timer(ms(100))
    assert a.update(ms(0)) is True
    assert a.get_frame() is frames["walk"][2]


def test_aligned_animation_with_zero_length_raises(monkeypatch):
    monkeypatch.setattr(anim, "_global_timer_ns", 0)
    a = Animation("still", {"still": [Frame(_Sprite(None), ms(0))]})
    a.align_animation = True
    with pytest.raises(ZeroDivisionError):
        a.update(ms(10))