import pytest

from weekendtracer.camera import Camera
from weekendtracer.vec import Vec3


def _camera(look_from=Vec3(13.0, 2.0, 3.0), aspect=16.0 / 9.0, vfov=20.0):
    return Camera(look_from, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), vfov, aspect)


def _assert_center_ray_aims_at_target(cam):
    ray = cam.get_ray(0.5, 0.5)
    expected = (cam.look_at - cam.origin).normalized()
    assert tuple(ray.direction.normalized()) == pytest.approx(tuple(expected))


def test_center_ray_points_at_look_at():
    cam = _camera()
    ray = cam.get_ray(0.5, 0.5)
    assert ray.origin == cam.origin
    assert ray.direction.length() == pytest.approx(1.0)
    _assert_center_ray_aims_at_target(cam)


def test_corner_ray_hits_lower_left_corner():
    cam = _camera()
    ray = cam.get_ray(0.0, 0.0)
    assert tuple(ray.point_at(1.0)) == pytest.approx(tuple(cam.lower_left_corner))


def test_viewport_dimensions_follow_fov_and_aspect():
    cam = _camera(vfov=90.0, aspect=2.0)
    assert cam.vertical.length() == pytest.approx(2.0)
    assert cam.horizontal.length() == pytest.approx(2.0 * cam.vertical.length())
    assert cam.horizontal.dot(cam.vertical) == pytest.approx(0.0, abs=1e-12)


def test_resize_viewport_keeps_height_and_direction():
    cam = _camera()
    height = cam.vertical.length()
    direction = cam.horizontal.normalized()
    cam.resize_viewport(1.0)
    assert cam.vertical.length() == pytest.approx(height)
    assert cam.horizontal.length() == pytest.approx(height)
    assert tuple(cam.horizontal.normalized()) == pytest.approx(tuple(direction))
    _assert_center_ray_aims_at_target(cam)


def test_offsets_start_at_look_from_x():
    cam = _camera(look_from=Vec3(13.0, 2.0, 3.0))
    assert cam.original_offset == 13.0
    assert cam.current_offset == 13.0


def test_move_forward_when_behind_start():
    cam = _camera()
    cam.origin = Vec3(12.0, 2.0, 3.0)
    cam.move_and_look_at_same_point(Vec3(0.1, 0.0, 0.0), 10.0)
    assert cam.current_offset == 0.1
    assert tuple(cam.origin) == pytest.approx((12.1, 2.1, 3.1))
    _assert_center_ray_aims_at_target(cam)


def test_move_reverses_past_reset_point():
    cam = _camera()
    cam.origin = Vec3(24.0, 2.0, 3.0)
    cam.move_and_look_at_same_point(Vec3(0.1, 0.0, 0.0), 10.0)
    assert cam.current_offset == -0.1
    assert tuple(cam.origin) == pytest.approx((23.9, 1.9, 2.9))
    _assert_center_ray_aims_at_target(cam)


def test_move_keeps_direction_between_limits():
    cam = _camera()
    cam.origin = Vec3(12.0, 2.0, 3.0)
    step = Vec3(0.1, 0.0, 0.0)
    cam.move_and_look_at_same_point(step, 10.0)
    before = cam.origin.x
    cam.move_and_look_at_same_point(step, 10.0)
    assert cam.current_offset == 0.1
    assert cam.origin.x == pytest.approx(before + 0.1)