"""
This module converts initial conditions between spherical and cartesian coordinates.

Spherical positions are (r, theta, phi) with theta the azimuth in the x-y plane and phi
the polar angle from +z:

    x = r cos(theta) sin(phi),  y = r sin(theta) sin(phi),  z = r cos(phi)

Spherical velocities (v_r, v_theta, v_phi) are components along the local orthonormal
basis r_hat, theta_hat (azimuthal) and phi_hat (polar) at that position. to_cartesian is
the single conversion applied at load time so the engine only ever sees cartesian state.
cartesian_to_spherical is the inverse; it returns theta in (-pi, pi] and phi in [0, pi]
and picks theta = phi = 0 at the origin, where the basis is undefined.
"""

from __future__ import annotations
import enum
import math
from typing import Tuple

from .errors import UnknownCoordinateMode

Triple = Tuple[float, float, float]


class CoordinateMode(str, enum.Enum):
    CARTESIAN = "cartesian"
    SPHERICAL = "spherical"


def parse_mode(mode) -> CoordinateMode:
    if isinstance(mode, CoordinateMode):
        return mode
    key = str(mode).strip().lower()
    for m in CoordinateMode:
        if m.value == key:
            return m
    raise UnknownCoordinateMode(str(mode))


def _basis(theta: float, phi: float) -> Tuple[Triple, Triple, Triple]:
    st, ct = math.sin(theta), math.cos(theta)
    sp, cp = math.sin(phi), math.cos(phi)
    r_hat = (sp * ct, sp * st, cp)
    theta_hat = (-st, ct, 0.0)
    phi_hat = (cp * ct, cp * st, -sp)
    return r_hat, theta_hat, phi_hat


def spherical_to_cartesian(position: Triple, velocity: Triple) -> Tuple[Triple, Triple]:
    r, theta, phi = (float(c) for c in position)
    v_r, v_theta, v_phi = (float(c) for c in velocity)
    r_hat, theta_hat, phi_hat = _basis(theta, phi)

    pos = (r * r_hat[0], r * r_hat[1], r * r_hat[2])
    vel = tuple(
        v_r * r_hat[k] + v_theta * theta_hat[k] + v_phi * phi_hat[k]
        for k in range(3)
    )
    return pos, vel


def cartesian_to_spherical(position: Triple, velocity: Triple) -> Tuple[Triple, Triple]:
    x, y, z = (float(c) for c in position)
    vx, vy, vz = (float(c) for c in velocity)

    r = math.sqrt(x * x + y * y + z * z)
    if r == 0.0:
        theta = 0.0
        phi = 0.0
    else:
        theta = math.atan2(y, x)
        phi = math.acos(max(-1.0, min(1.0, z / r)))

    r_hat, theta_hat, phi_hat = _basis(theta, phi)
    v_r = vx * r_hat[0] + vy * r_hat[1] + vz * r_hat[2]
    v_theta = vx * theta_hat[0] + vy * theta_hat[1] + vz * theta_hat[2]
    v_phi = vx * phi_hat[0] + vy * phi_hat[1] + vz * phi_hat[2]
    return (r, theta, phi), (v_r, v_theta, v_phi)


def to_cartesian(mode, position: Triple, velocity: Triple) -> Tuple[Triple, Triple]:
    m = parse_mode(mode)
    if m is CoordinateMode.SPHERICAL:
        return spherical_to_cartesian(position, velocity)
    return tuple(float(c) for c in position), tuple(float(c) for c in velocity)
