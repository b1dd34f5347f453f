from __future__ import annotations
import math
from typing import TYPE_CHECKING, Dict, Optional, Type
import numpy as np
from .integration_scheme_base import IntegrationScheme
from .symplectic_euler_scheme import SymplecticEulerScheme
from .verlet_scheme import VerletScheme
from .errors import InvalidParameters

if TYPE_CHECKING:
	from .body_set import BodySet
	from .forces import ForceModel

"""
This module implements the Integrator that advances a whole body set by one fixed step. step() takes the body set, the accelerations the force model produced for its current positions, and the step length. It snapshots masses, positions and velocities into arrays once, lets the configured IntegrationScheme compute every next state from that single snapshot, and only then commits the result through Body.apply_state for each body in index order. No body can therefore observe a sibling's new state within the same step. The scheme is fixed for the lifetime of the integrator; non-finite values coming out of the force model are passed through and left for the simulation loop to detect.

"""

_SCHEMES: Dict[str, Type[IntegrationScheme]] = {
	SymplecticEulerScheme.name: SymplecticEulerScheme,
	VerletScheme.name: VerletScheme,
}


class Integrator:
	def __init__(self, force_model: "ForceModel", scheme: str = SymplecticEulerScheme.name) -> None:
		self.force_model = force_model
		self._scheme: IntegrationScheme = self._make_scheme(scheme)
		self.steps_taken = 0

	def _make_scheme(self, mode: str) -> IntegrationScheme:
		key = str(mode).strip().lower()
		cls = _SCHEMES.get(key)
		if cls is None:
			raise InvalidParameters(f"unknown integration scheme {mode!r}; expected one of {sorted(_SCHEMES)}")
		return cls(self.force_model)

	@property
	def scheme(self) -> IntegrationScheme:
		return self._scheme

	@property
	def scheme_name(self) -> str:
		return self._scheme.name

	@property
	def order(self) -> int:
		return self._scheme.order

	def advance_arrays(self, pos, vel, mass, acc, dt: float):
		pos = np.asarray(pos, dtype=np.float64)
		vel = np.asarray(vel, dtype=np.float64)
		acc = np.asarray(acc, dtype=np.float64)
		if acc.shape != pos.shape:
			raise ValueError(f"accelerations shape {acc.shape} does not match positions {pos.shape}")
		return self._scheme.advance(pos, vel, np.asarray(mass, dtype=np.float64), acc, float(dt))

	@property
	def last_accelerations(self) -> "Optional[np.ndarray]":
		return self._scheme.end_accelerations

	def step(self, bodies: "BodySet", accelerations: np.ndarray, dt: float) -> None:
		if not (dt > 0.0 and math.isfinite(dt)):
			raise InvalidParameters(f"step size must be a positive finite number, got {dt!r}")
		if len(bodies) == 0:
			return

		pos = bodies.positions()
		vel = bodies.velocities()
		mass = bodies.masses()

		pos_new, vel_new = self.advance_arrays(pos, vel, mass, accelerations, dt)

		bodies.apply_arrays(pos_new, vel_new)
		self.steps_taken += 1
