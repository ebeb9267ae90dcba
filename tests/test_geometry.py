import math

import pytest

from flowgen.geometry import NRGBA, Rect, TilePosition, TileRect, Vec2


def test_add_sub_round_trip():
    a, b = Vec2(3.0, -2.0), Vec2(1.5, 4.0)
    assert a.add(b).sub(b) == a


def test_scaled_matches_repeated_add():
    v = Vec2(1.25, -3.0)
    assert v.scaled(2) == v.add(v)


def test_norm_has_unit_length_and_same_angle():
    v = Vec2(3.0, 4.0)
    assert math.isclose(v.norm().len(), 1.0)
    assert math.isclose(v.norm().angle(), v.angle())


def test_norm_of_zero_is_zero():
    assert Vec2().norm() == Vec2(0.0, 0.0)


def test_rotation_preserves_length_and_shifts_angle():
    v = Vec2(2.0, 1.0)
    r = v.rotated(0.3)
    assert math.isclose(r.len(), v.len())
    assert math.isclose(r.angle(), v.angle() + 0.3)


def test_full_rotation_returns_original():
    v = Vec2(2.0, -5.0)
    r = v.rotated(2 * math.pi)
    assert r.x == pytest.approx(v.x)
    assert r.y == pytest.approx(v.y)


def test_dot_with_self_is_squared_length():
    v = Vec2(3.0, 7.0)
    assert math.isclose(v.dot(v), v.len() ** 2)


def test_rect_dimensions():
    r = Rect(Vec2(0.0, 0.0), Vec2(4.0, 6.0))
    assert r.w() == 4.0
    assert r.h() == 6.0
    assert r.center() == Vec2(2.0, 3.0)


def test_nrgba_rejects_out_of_range():
    with pytest.raises(ValueError):
        NRGBA(256, 0, 0, 0)


def test_tile_position_div_truncates_toward_zero():
    assert TilePosition(-7, 7).div(2) == TilePosition(-3, 3)


def test_tile_position_add_sub_round_trip():
    a, b = TilePosition(5, -2), TilePosition(-3, 9)
    assert a.add(b).sub(b) == a


def test_with_center_places_center():
    r = TileRect(TilePosition(0, 0), TilePosition(5, 3))
    for target in (TilePosition(-5, -5), TilePosition(10, 3), TilePosition(0, 0)):
        moved = r.with_center(target)
        assert moved.center() == target
        assert (moved.w(), moved.h()) == (r.w(), r.h())


def test_moved_keeps_size():
    r = TileRect(TilePosition(1, 2), TilePosition(4, 8))
    m = r.moved(TilePosition(-10, 3))
    assert m.min == TilePosition(-9, 5)
    assert (m.w(), m.h()) == (r.w(), r.h())


def test_intersects_is_symmetric():
    a = TileRect(TilePosition(0, 0), TilePosition(4, 4))
    b = TileRect(TilePosition(2, 2), TilePosition(6, 6))
    c = TileRect(TilePosition(10, 10), TilePosition(12, 12))
    assert a.intersects(b) and b.intersects(a)
    assert not a.intersects(c) and not c.intersects(a)
    assert a.intersects(a)