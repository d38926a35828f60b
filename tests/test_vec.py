import math

import pytest

from weekendtracer.vec import Vec3, reflect, refract_branchless, schlick


def test_scalar_and_vector_arithmetic_mix():
    v = Vec3(1.0, 2.0, 3.0)
    assert tuple(v + 1) == (2.0, 3.0, 4.0)
    assert tuple(1 + v) == (2.0, 3.0, 4.0)
    assert tuple(v - v) == (0.0, 0.0, 0.0)
    assert tuple(2 * v) == tuple(v + v)
    assert tuple(v * v) == (1.0, 4.0, 9.0)
    assert tuple(-v) == (-1.0, -2.0, -3.0)


def test_division_by_zero_follows_float_rules():
    result = 1.0 / Vec3(0.0, 2.0, -0.0)
    assert result.x == math.inf
    assert result.y == 0.5
    assert result.z == -math.inf


def test_dot_and_cross():
    a = Vec3(1.0, 0.0, 0.0)
    b = Vec3(0.0, 1.0, 0.0)
    assert a.dot(b) == 0.0
    assert a.cross(b) == Vec3(0.0, 0.0, 1.0)
    p = Vec3(0.3, -1.2, 2.5)
    q = Vec3(4.0, 0.7, -0.1)
    c = p.cross(q)
    assert c.dot(p) == pytest.approx(0.0, abs=1e-12)
    assert c.dot(q) == pytest.approx(0.0, abs=1e-12)


def test_length_and_normalized():
    v = Vec3(3.0, 4.0, 0.0)
    assert v.length() == pytest.approx(5.0)
    n = Vec3(-2.0, 7.0, 1.5).normalized()
    assert n.length() == pytest.approx(1.0)


def test_min_max_sqrt():
    a = Vec3(1.0, 5.0, -2.0)
    b = Vec3(3.0, 0.0, -4.0)
    assert a.min(b) == Vec3(1.0, 0.0, -4.0)
    assert a.max(b) == Vec3(3.0, 5.0, -2.0)
    assert tuple(Vec3(4.0, 9.0, 16.0).sqrt()) == (2.0, 3.0, 4.0)


def test_getitem_by_axis():
    v = Vec3(7.0, 8.0, 9.0)
    assert [v[0], v[1], v[2]] == [7.0, 8.0, 9.0]
    with pytest.raises(IndexError):
        v[3]


def test_reflect_is_an_involution_and_keeps_length():
    n = Vec3(0.0, 1.0, 0.0)
    v = Vec3(1.0, -2.0, 0.5)
    r = reflect(v, n)
    assert r.length() == pytest.approx(v.length())
    assert tuple(reflect(r, n)) == pytest.approx(tuple(v))
    assert r.y == -v.y


def test_schlick_limits():
    assert schlick(0.0, 1.5) == pytest.approx(1.0)
    assert schlick(1.0, 1.0) == pytest.approx(0.0)
    assert schlick(0.2, 1.5) > schlick(0.8, 1.5)


def test_refract_with_equal_indices_passes_straight_through():
    n = Vec3(0.0, 1.0, 0.0)
    v = Vec3(0.6, -0.8, 0.0)
    out = refract_branchless(v, n, 1.0)
    assert tuple(out) == pytest.approx(tuple(v))


def test_refract_total_internal_reflection_drops_normal_component():
    n = Vec3(0.0, 1.0, 0.0)
    v = Vec3(0.99, -0.141, 0.0).normalized()
    out = refract_branchless(v, n, 1.5)
    assert out.dot(n) == pytest.approx(0.0, abs=1e-12)