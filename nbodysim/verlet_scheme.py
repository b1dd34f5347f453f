"""
This module implements the kick-drift-kick velocity Verlet scheme.

The VerletScheme half-kicks with the supplied acceleration, drifts a full step, then
evaluates the force model at the drifted position array and applies the second half
kick. It is second order and symplectic. The end-of-step acceleration is kept on the
scheme and reused as the first half kick of the next step, so a run still costs one
force evaluation per step. The drifted positions live only in local arrays, so the
second evaluation never sees a partially committed body set.
"""

from __future__ import annotations
from .integration_scheme_base import IntegrationScheme


class VerletScheme(IntegrationScheme):
	name = "verlet"
	order = 2

	def advance(self, pos, vel, mass, acc, h):
		h2 = 0.5 * h
		vel_half = self.kick(vel, acc, h2)
		pos_new = self.drift(pos, vel_half, h)
		acc_new = self.force_model.evaluate(pos_new, mass)
		vel_new = self.kick(vel_half, acc_new, h2)
		self.end_accelerations = acc_new
		return pos_new, vel_new
