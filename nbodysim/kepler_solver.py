"""
This module provides analytic two-body references used to check the integrator.

The UniversalVariableKeplerSolver class propagates a relative two-body state exactly for
all orbit types (elliptic, parabolic, hyperbolic) by solving the universal Kepler equation
with Newton-Raphson iteration and Stumpff C-functions. two_body_elements derives the
specific orbital energy, semi-major axis, eccentricity and period of a pair of bodies from
their cartesian states. Both work in three dimensions and assume Newtonian gravity with
mu = G (m1 + m2).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class OrbitalElements:
	mu: float
	energy: float
	semi_major_axis: float
	eccentricity: float
	period: float
	periapsis: float
	apoapsis: float

	@property
	def is_bound(self) -> bool:
		return self.energy < 0.0


def two_body_elements(m1: float, m2: float, r1, r2, v1, v2, G: float = 1.0) -> OrbitalElements:
	r = np.asarray(r2, dtype=float) - np.asarray(r1, dtype=float)
	v = np.asarray(v2, dtype=float) - np.asarray(v1, dtype=float)
	mu = float(G) * (float(m1) + float(m2))

	rn = float(np.linalg.norm(r))
	v2n = float(np.dot(v, v))
	energy = 0.5 * v2n - mu / rn

	h = np.cross(r, v)
	e_vec = np.cross(v, h) / mu - r / rn
	ecc = float(np.linalg.norm(e_vec))

	if energy < 0.0:
		a = -mu / (2.0 * energy)
		period = 2.0 * math.pi * math.sqrt(a ** 3 / mu)
		apo = a * (1.0 + ecc)
	else:
		a = math.inf if energy == 0.0 else -mu / (2.0 * energy)
		period = math.inf
		apo = math.inf
	h2 = float(np.dot(h, h))
	peri = h2 / (mu * (1.0 + ecc))
	return OrbitalElements(mu, energy, a, ecc, period, peri, apo)


class UniversalVariableKeplerSolver:
	max_iter: int = 64
	tol: float = 1.0e-13

	@staticmethod
	def stumpff(z: float):
		z = float(z)
		if abs(z) < 1.0e-3:
			z2 = z * z
			c2 = 0.5 - z / 24 + z2 / 720 - z * z2 / 40320
			c3 = 1 / 6 - z / 120 + z2 / 5040 - z * z2 / 362880
			return c2, c3
		if z > 0.0:
			s = math.sqrt(z)
			return (1.0 - math.cos(s)) / z, (s - math.sin(s)) / (s * z)
		s = math.sqrt(-z)
		return (math.cosh(s) - 1.0) / (-z), (math.sinh(s) - s) / (s * -z)

	def propagate(self, r, v, mu, dt):
		r = np.asarray(r, dtype=float)
		v = np.asarray(v, dtype=float)
		mu = float(mu)
		dt = float(dt)
		r0 = float(np.linalg.norm(r))
		if r0 < 1e-14 or dt == 0.0:
			return r + v * dt, v.copy()
		vr0 = float(np.dot(r, v) / r0)
		v2 = float(np.dot(v, v))
		alpha = 2 / r0 - v2 / mu
		sqrt_mu = math.sqrt(mu)
		if abs(alpha) > 1e-12:
			chi = sqrt_mu * abs(alpha) * dt
		else:
			chi = sqrt_mu * dt / r0
		for _ in range(self.max_iter):
			z = alpha * chi * chi
			c2, c3 = self.stumpff(z)
			F = r0 * vr0 / sqrt_mu * chi * chi * c2 + (1 - alpha * r0) * chi ** 3 * c3 + r0 * chi - sqrt_mu * dt
			dF = r0 * vr0 / sqrt_mu * chi * (1 - z * c3) + (1 - alpha * r0) * chi * chi * c2 + r0
			if dF == 0:
				break
			delta = F / dF
			chi -= delta
			if abs(delta) <= self.tol * max(1.0, abs(chi)):
				break
		z = alpha * chi * chi
		c2, c3 = self.stumpff(z)
		f = 1 - chi * chi * c2 / r0
		g = dt - chi ** 3 * c3 / sqrt_mu
		r_vec = f * r + g * v
		rn = float(np.linalg.norm(r_vec))
		if rn == 0:
			return r_vec, v.copy()
		fdot = sqrt_mu / (rn * r0) * chi * (z * c3 - 1)
		gdot = 1 - chi * chi * c2 / rn
		v_vec = fdot * r + gdot * v
		return r_vec, v_vec
