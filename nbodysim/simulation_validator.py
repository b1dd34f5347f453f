"""
This module provides validation utilities for N-body simulation states.

The SimulationValidator class offers static methods to check that a state is usable
(positive finite masses, finite positions and velocities, consistent (n, 3) shapes) and
to locate the first non-finite entry after a step. The simulation loop uses
first_non_finite to turn a silent NaN or Inf into a NumericDivergence that names the
offending body, and report_invalid_state prints the tagged details of a bad state.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple
import numpy as np

from .reporting import error


Vec3 = Tuple[float, float, float]


class SimulationValidator:
	@staticmethod
	def state_is_valid(
		masses: Sequence[float],
		positions: Sequence[Vec3],
		velocities: Sequence[Vec3],
		softening: float = 0.0,
	) -> bool:

		if masses is None or positions is None or velocities is None:
			return False

		m = np.asarray(masses, dtype=float).ravel()
		r = np.asarray(positions, dtype=float)
		v = np.asarray(velocities, dtype=float)

		if r.ndim != 2 or v.ndim != 2 or r.shape != v.shape:
			return False
		if r.shape[0] != m.size or r.shape[1] != 3:
			return False

		for m_i in m:
			if not (m_i > 0.0 and math.isfinite(m_i)):
				return False

		if not np.all(np.isfinite(r)) or not np.all(np.isfinite(v)):
			return False

		if not (math.isfinite(softening) and softening >= 0.0):
			return False

		return True

	@staticmethod
	def first_non_finite(
		positions: np.ndarray,
		velocities: np.ndarray,
	) -> Optional[Tuple[int, str]]:

		bad_pos = ~np.all(np.isfinite(positions), axis=1)
		bad_vel = ~np.all(np.isfinite(velocities), axis=1)
		bad = bad_pos | bad_vel
		if not np.any(bad):
			return None
		idx = int(np.argmax(bad))
		if bad_pos[idx]:
			return idx, "position"
		return idx, "velocity"

	@staticmethod
	def report_invalid_state(
		label: str,
		masses=None,
		positions=None,
		velocities=None,
	) -> None:

		error(f"invalid state: {label}")
		if masses is not None:
			error(f"masses {np.asarray(masses).tolist()}")
		if positions is not None:
			error(f"positions {np.asarray(positions).tolist()}")
		if velocities is not None:
			error(f"velocities {np.asarray(velocities).tolist()}")
