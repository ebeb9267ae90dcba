import pytest

from flowgen.geometry import Vec2
from flowgen.path import path


def _dist_sq(a, b):
    d = a.sub(b)
    return d.dot(d)


def test_length_matches_n():
    for n in range(1, 12):
        assert len(path(Vec2(1.0, 2.0), Vec2(8.0, -3.0), n, 1.5)) == n


def test_sorted_by_distance_from_start():
    start = Vec2(3.0, 3.0)
    points = path(start, Vec2(30.0, 20.0), 25, 4.0)
    distances = [_dist_sq(start, p) for p in points]
    assert distances == sorted(distances)


def test_two_points_are_start_and_end():
    start, end = Vec2(1.0, 1.0), Vec2(4.0, 5.0)
    assert path(start, end, 2, 10.0) == [start, end]


def test_single_point_is_end():
    end = Vec2(4.0, 5.0)
    assert path(Vec2(1.0, 1.0), end, 1, 3.0) == [end]


def test_three_points_include_origin_slot():
    start, end = Vec2(1.0, 1.0), Vec2(5.0, 1.0)
    assert path(start, end, 3, 2.0) == [start, Vec2(0.0, 0.0), end]


def test_zero_variation_stays_on_segment():
    points = path(Vec2(0.0, 0.0), Vec2(10.0, 0.0), 12, 0.0)
    for p in points:
        assert p.y == pytest.approx(0.0)
        assert 0.0 <= p.x <= 10.0


def test_variation_bounds_lateral_offset():
    variation = 2.0
    points = path(Vec2(0.0, 0.0), Vec2(10.0, 0.0), 40, variation)
    for p in points:
        assert abs(p.y) <= variation
        assert 0.0 <= p.x <= 10.0


def test_contains_start_and_end():
    start, end = Vec2(-2.0, 7.0), Vec2(6.0, 1.0)
    points = path(start, end, 9, 1.0)
    assert points[0] == start
    assert end in points


def test_invalid_count():
    with pytest.raises(ValueError):
        path(Vec2(), Vec2(1.0, 1.0), 0, 1.0)