"""
This module defines the Body class, the mutable state of a single point mass.

A Body stores its mass as a float and its position and velocity as Vector3 values. The
mass is validated once at construction (strictly positive and finite) and never changes
afterwards. Position and velocity are exposed read-only; the only way to change them is
apply_state, which the Integrator calls once per step with the freshly computed state.
The class makes no assumptions about units, leaving those to the configuration.
"""

from __future__ import annotations
import math
from typing import Iterable, Union

from .errors import InvalidParameters
from .vector3 import Vector3

VectorLike = Union[Vector3, Iterable[float]]


def _as_vector(v: VectorLike) -> Vector3:
	if isinstance(v, Vector3):
		return v
	return Vector3.from_iterable(v)


class Body:
	__slots__ = ("_mass", "_position", "_velocity")

	def __init__(self, mass: float, position: VectorLike, velocity: VectorLike) -> None:
		m = float(mass)
		if not (m > 0.0 and math.isfinite(m)):
			raise InvalidParameters(f"body mass must be a positive finite number, got {mass!r}")
		self._mass = m
		self._position = _as_vector(position)
		self._velocity = _as_vector(velocity)

	@property
	def mass(self) -> float:
		return self._mass

	@property
	def position(self) -> Vector3:
		return self._position

	@property
	def velocity(self) -> Vector3:
		return self._velocity

	@property
	def momentum(self) -> Vector3:
		return self._velocity.scale(self._mass)

	def kinetic_energy(self) -> float:
		return 0.5 * self._mass * self._velocity.dot(self._velocity)

	def apply_state(self, new_position: VectorLike, new_velocity: VectorLike) -> None:
		self._position = _as_vector(new_position)
		self._velocity = _as_vector(new_velocity)

	def __repr__(self) -> str:
		p = self._position
		v = self._velocity
		return (f"Body(mass={self._mass}, x={p.x}, y={p.y}, z={p.z}, "
				f"vx={v.x}, vy={v.y}, vz={v.z})")
