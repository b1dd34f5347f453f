"""
This module defines Vector3, the immutable three-component value type used for
positions, velocities and accelerations at the object level.

Every operation returns a new vector. normalized() on a zero-length vector returns the
zero vector rather than raising, so callers that normalize separation vectors never see
a division by zero; callers that need to distinguish that case should test magnitude()
first. The engine itself works on (n, 3) numpy arrays and converts to and from Vector3
only at the Body boundary through as_array and from_iterable.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Vector3:
	x: float = 0.0
	y: float = 0.0
	z: float = 0.0

	def __post_init__(self) -> None:
		object.__setattr__(self, "x", float(self.x))
		object.__setattr__(self, "y", float(self.y))
		object.__setattr__(self, "z", float(self.z))

	@classmethod
	def zero(cls) -> "Vector3":
		return cls(0.0, 0.0, 0.0)

	@classmethod
	def from_iterable(cls, values: Iterable[float]) -> "Vector3":
		vals = [float(v) for v in values]
		if len(vals) != 3:
			raise ValueError(f"Vector3 needs exactly 3 components, got {len(vals)}")
		return cls(vals[0], vals[1], vals[2])

	def add(self, other: "Vector3") -> "Vector3":
		return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

	def subtract(self, other: "Vector3") -> "Vector3":
		return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

	def scale(self, s: float) -> "Vector3":
		s = float(s)
		return Vector3(self.x * s, self.y * s, self.z * s)

	def dot(self, other: "Vector3") -> float:
		return self.x * other.x + self.y * other.y + self.z * other.z

	def cross(self, other: "Vector3") -> "Vector3":
		return Vector3(
			self.y * other.z - self.z * other.y,
			self.z * other.x - self.x * other.z,
			self.x * other.y - self.y * other.x,
		)

	def magnitude(self) -> float:
		return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

	def normalized(self) -> "Vector3":
		mag = self.magnitude()
		if mag == 0.0:
			return Vector3.zero()
		return self.scale(1.0 / mag)

	def is_finite(self) -> bool:
		return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

	def as_array(self) -> np.ndarray:
		return np.array([self.x, self.y, self.z], dtype=np.float64)

	def __iter__(self):
		yield self.x
		yield self.y
		yield self.z

	def __add__(self, other: "Vector3") -> "Vector3":
		return self.add(other)

	def __sub__(self, other: "Vector3") -> "Vector3":
		return self.subtract(other)

	def __mul__(self, s: float) -> "Vector3":
		return self.scale(s)

	__rmul__ = __mul__

	def __neg__(self) -> "Vector3":
		return Vector3(-self.x, -self.y, -self.z)

	def __repr__(self) -> str:
		return f"Vector3({self.x}, {self.y}, {self.z})"
