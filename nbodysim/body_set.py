"""
This module implements BodySet, the ordered, index-stable collection of bodies that a
simulation run owns.

Order is the order bodies were supplied (normally the order they were read from the
initial-conditions file) and is never changed, so index i always refers to the same
body in every snapshot. For the numeric kernels the set exposes masses, positions and
velocities as freshly allocated float64 arrays of shape (n,) and (n, 3); mutating those
arrays never touches the bodies. apply_arrays is the bulk form of Body.apply_state used
by the integrator to commit a whole step at once.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Sequence

import numpy as np

from .body import Body
from .vector3 import Vector3


class BodySet:
	def __init__(self, bodies: Iterable[Body] = ()) -> None:
		self._bodies: List[Body] = list(bodies)

	@classmethod
	def from_arrays(cls, masses, positions, velocities=None) -> "BodySet":
		m = np.asarray(masses, dtype=np.float64).ravel()
		q = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
		if velocities is None:
			v = np.zeros_like(q)
		else:
			v = np.asarray(velocities, dtype=np.float64).reshape(-1, 3)
		if not (m.size == q.shape[0] == v.shape[0]):
			raise ValueError(
				f"masses/positions/velocities disagree in length: {m.size}, {q.shape[0]}, {v.shape[0]}"
			)
		return cls(Body(m[i], q[i], v[i]) for i in range(m.size))

	def __len__(self) -> int:
		return len(self._bodies)

	def __iter__(self) -> Iterator[Body]:
		return iter(self._bodies)

	def __getitem__(self, idx: int) -> Body:
		return self._bodies[idx]

	@property
	def n_bodies(self) -> int:
		return len(self._bodies)

	def masses(self) -> np.ndarray:
		return np.array([b.mass for b in self._bodies], dtype=np.float64)

	def positions(self) -> np.ndarray:
		if not self._bodies:
			return np.empty((0, 3), dtype=np.float64)
		return np.array([tuple(b.position) for b in self._bodies], dtype=np.float64)

	def velocities(self) -> np.ndarray:
		if not self._bodies:
			return np.empty((0, 3), dtype=np.float64)
		return np.array([tuple(b.velocity) for b in self._bodies], dtype=np.float64)

	def apply_arrays(self, positions: np.ndarray, velocities: np.ndarray) -> None:
		q = np.asarray(positions, dtype=np.float64)
		v = np.asarray(velocities, dtype=np.float64)
		if q.shape != (len(self._bodies), 3) or v.shape != q.shape:
			raise ValueError(
				f"state arrays must have shape ({len(self._bodies)}, 3), got {q.shape} and {v.shape}"
			)
		for i, body in enumerate(self._bodies):
			body.apply_state(Vector3(*q[i]), Vector3(*v[i]))

	def total_mass(self) -> float:
		return float(sum(b.mass for b in self._bodies))

	def __repr__(self) -> str:
		return f"BodySet(n_bodies={len(self._bodies)})"


def as_body_set(bodies: "BodySet | Sequence[Body]") -> BodySet:
	if isinstance(bodies, BodySet):
		return bodies
	return BodySet(bodies)
