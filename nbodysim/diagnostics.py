from __future__ import annotations
import math
import numpy as np
from typing import TYPE_CHECKING, Tuple
from .forces import potential_energy as _pair_potential
if TYPE_CHECKING:
	from .body_set import BodySet

"""
This module computes conserved quantities of a body set. The Diagnostics class provides kinetic and potential energy (with the same Plummer softening the force model applies, so the total is the quantity the integrator actually conserves), the total energy and a breakdown dict, linear and angular momentum as 3-vectors, and the centre-of-mass position and velocity. relative_energy_drift compares the current total energy against a reference recorded with mark_reference. The simulation loop uses it to report the energy drift of a run; the tests use it to check conservation.

"""


class Diagnostics:
	def __init__(self, bodies: "BodySet", G: float, softening: float = 0.0) -> None:
		self.bodies = bodies
		self.G = float(G)
		self.softening = float(softening)
		self._E0 = None

	@classmethod
	def from_params(cls, bodies: "BodySet", params) -> "Diagnostics":
		return cls(bodies, params.G, params.softening)

	def kinetic_energy(self) -> float:
		m = self.bodies.masses()
		v = self.bodies.velocities()
		return 0.5 * float(np.sum(m * np.sum(v * v, axis=1)))

	def potential_energy(self) -> float:
		return _pair_potential(self.bodies.positions(), self.bodies.masses(), self.G, self.softening)

	def energy(self) -> float:
		return self.kinetic_energy() + self.potential_energy()

	def energy_breakdown(self) -> dict:
		T = self.kinetic_energy()
		V = self.potential_energy()
		return dict(T=T, V=V, E=T + V)

	def linear_momentum(self) -> np.ndarray:
		m = self.bodies.masses()
		v = self.bodies.velocities()
		return np.sum(m[:, None] * v, axis=0)

	def angular_momentum(self) -> np.ndarray:
		m = self.bodies.masses()
		q = self.bodies.positions()
		v = self.bodies.velocities()
		return np.sum(m[:, None] * np.cross(q, v), axis=0)

	def center_of_mass(self) -> Tuple[np.ndarray, np.ndarray]:
		m = self.bodies.masses()
		M = float(np.sum(m))
		if M == 0.0:
			return np.zeros(3), np.zeros(3)
		q = self.bodies.positions()
		r_cm = np.sum(m[:, None] * q, axis=0) / M
		v_cm = self.linear_momentum() / M
		return r_cm, v_cm

	def mark_reference(self) -> float:
		self._E0 = self.energy()
		return self._E0

	@property
	def reference_energy(self):
		return self._E0

	def relative_energy_drift(self) -> float:
		if self._E0 is None:
			self.mark_reference()
		E = self.energy()
		if self._E0 == 0.0:
			return abs(E)
		return abs(E - self._E0) / abs(self._E0)

	def max_separation(self) -> float:
		q = self.bodies.positions()
		n = q.shape[0]
		if n < 2:
			return 0.0
		iu = np.triu_indices(n, 1)
		d = q[iu[1]] - q[iu[0]]
		return float(math.sqrt(float(np.max(np.einsum("ij,ij->i", d, d)))))
