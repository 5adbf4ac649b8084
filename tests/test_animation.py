import math

import pytest

from bezier3d.animation import AnimationController


def test_static_light_never_moves():
    controller = AnimationController(animate_light=False)
    for t in (0.0, 0.5, 3.0, 120.0):
        state = controller.tick(t)
        assert state.light_position == (10.0, 10.0, 10.0)


def test_light_orbit_at_time_zero():
    controller = AnimationController(animate_light=True)
    state = controller.tick(0.0)
    assert state.light_position == (0.0, 5.0, 10.0)


def test_light_orbit_radius_and_height():
    controller = AnimationController(animate_light=True, light_position=(1.0, 2.0, 7.0))
    for t in (0.3, 1.7, 4.2):
        x, y, z = controller.tick(t).light_position
        assert math.hypot(x, y) == pytest.approx(5.0)
        assert x == pytest.approx(math.sin(t) * 5.0)
        assert z == 7.0


def test_rotation_independent_of_light_flag():
    for flag in (False, True):
        controller = AnimationController(animate_light=flag)
        assert controller.tick(12.0).mesh_rotation_z == pytest.approx(1.2)


def test_toggling_animation_restores_static_light():
    controller = AnimationController(animate_light=True)
    controller.tick(1.0)
    controller.animate_light = False
    assert controller.tick(2.0).light_position == (10.0, 10.0, 10.0)
    assert controller.state.elapsed == 2.0
