import math

import numpy as np
import pytest

from nbodysim import (
    CoordinateMode,
    UnknownCoordinateMode,
    cartesian_to_spherical,
    parse_mode,
    spherical_to_cartesian,
    to_cartesian,
)


def test_position_on_axes():
    (x, y, z), _ = spherical_to_cartesian((2.0, 0.0, math.pi / 2), (0, 0, 0))
    np.testing.assert_allclose((x, y, z), (2.0, 0.0, 0.0), atol=1e-15)
    (x, y, z), _ = spherical_to_cartesian((3.0, 0.7, 0.0), (0, 0, 0))
    np.testing.assert_allclose((x, y, z), (0.0, 0.0, 3.0), atol=1e-15)
    (x, y, z), _ = spherical_to_cartesian((1.0, math.pi / 2, math.pi / 2), (0, 0, 0))
    np.testing.assert_allclose((x, y, z), (0.0, 1.0, 0.0), atol=1e-15)


def test_velocity_components_follow_local_basis():
    pos = (2.0, 0.0, math.pi / 2)
    _, v = spherical_to_cartesian(pos, (1.0, 0.0, 0.0))
    np.testing.assert_allclose(v, (1.0, 0.0, 0.0), atol=1e-15)
    _, v = spherical_to_cartesian(pos, (0.0, 1.0, 0.0))
    np.testing.assert_allclose(v, (0.0, 1.0, 0.0), atol=1e-15)
    _, v = spherical_to_cartesian(pos, (0.0, 0.0, 1.0))
    np.testing.assert_allclose(v, (0.0, 0.0, -1.0), atol=1e-15)


def test_speed_is_preserved():
    _, v = spherical_to_cartesian((1.5, 1.1, 0.4), (0.3, -0.4, 1.2))
    assert np.linalg.norm(v) == pytest.approx(math.sqrt(0.09 + 0.16 + 1.44))


@pytest.mark.parametrize("pos,vel", [
    ((1.0, 0.3, 1.2), (0.1, 0.2, 0.3)),
    ((5.0, -2.5, 0.2), (-1.0, 0.0, 2.0)),
    ((0.25, 3.0, 2.9), (0.0, -0.7, 0.05)),
    ((1e3, 1.0, math.pi / 2), (3.0, 4.0, 0.0)),
])
def test_spherical_round_trip(pos, vel):
    cart_pos, cart_vel = spherical_to_cartesian(pos, vel)
    back_pos, back_vel = cartesian_to_spherical(cart_pos, cart_vel)
    np.testing.assert_allclose(back_pos, pos, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(back_vel, vel, rtol=1e-12, atol=1e-12)


def test_cartesian_round_trip():
    pos = (0.3, -1.2, 2.0)
    vel = (0.5, 0.1, -0.4)
    back_pos, back_vel = spherical_to_cartesian(*cartesian_to_spherical(pos, vel))
    np.testing.assert_allclose(back_pos, pos, atol=1e-12)
    np.testing.assert_allclose(back_vel, vel, atol=1e-12)


def test_origin_is_defined():
    (r, theta, phi), _ = cartesian_to_spherical((0, 0, 0), (1, 0, 0))
    assert (r, theta, phi) == (0.0, 0.0, 0.0)


def test_mode_parsing():
    assert parse_mode("cartesian") is CoordinateMode.CARTESIAN
    assert parse_mode(" Spherical ") is CoordinateMode.SPHERICAL
    assert parse_mode(CoordinateMode.SPHERICAL) is CoordinateMode.SPHERICAL
    with pytest.raises(UnknownCoordinateMode):
        parse_mode("cylindrical")


def test_to_cartesian_passthrough():
    pos, vel = to_cartesian("cartesian", (1, 2, 3), (4, 5, 6))
    assert pos == (1.0, 2.0, 3.0)
    assert vel == (4.0, 5.0, 6.0)
