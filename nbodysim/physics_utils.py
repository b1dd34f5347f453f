import numpy as np

from .body_set import BodySet

"""
This module provides centre-of-mass frame helpers. remove_center_of_mass_velocity subtracts the mass-weighted mean velocity from a velocity array, and to_center_of_mass_frame applies the same shift (and optionally the position shift) to a whole body set through Body.apply_state, so the total linear momentum of the result is zero. Single bodies and empty arrays are returned unchanged.


"""

def remove_center_of_mass_velocity(
	masses: np.ndarray, velocities: np.ndarray
) -> np.ndarray:
	if len(masses) <= 1:
		return velocities.copy()
	total_mass = float(np.sum(masses))
	if total_mass == 0 or velocities.size == 0:
		return velocities.copy()
	v_cm = np.sum(masses[:, None] * velocities, axis=0) / total_mass
	return velocities - v_cm


def to_center_of_mass_frame(bodies: BodySet, shift_positions: bool = False) -> BodySet:
	m = bodies.masses()
	q = bodies.positions()
	v = remove_center_of_mass_velocity(m, bodies.velocities())
	if shift_positions and len(m) > 1:
		q = q - np.sum(m[:, None] * q, axis=0) / float(np.sum(m))
	bodies.apply_arrays(q, v)
	return bodies
