"""
This base class defines the interface for fixed-step explicit integration schemes.

An IntegrationScheme works on plain state arrays: it receives positions, velocities and
masses of the whole body set together with the accelerations evaluated at those
positions, and returns new position and velocity arrays. It never touches Body objects,
so every body's next state is computed from the same snapshot; committing the result is
the Integrator's job. The shared kick and drift helpers return new arrays rather than
updating in place. Subclasses implement advance and set name and order. A scheme that
evaluates the force model at the end of its step leaves that result in end_accelerations
so the next step can start from it.
"""

from __future__ import annotations
from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
	from .forces import ForceModel


class IntegrationScheme:
	name: str = ""
	order: int = 0

	def __init__(self, force_model: "ForceModel") -> None:
		self.force_model = force_model
		self.end_accelerations: Optional[np.ndarray] = None

	@staticmethod
	def kick(vel: np.ndarray, acc: np.ndarray, h: float) -> np.ndarray:
		return vel + float(h) * acc

	@staticmethod
	def drift(pos: np.ndarray, vel: np.ndarray, h: float) -> np.ndarray:
		return pos + float(h) * vel

	def advance(
		self,
		pos: np.ndarray,
		vel: np.ndarray,
		mass: np.ndarray,
		acc: np.ndarray,
		h: float,
	) -> Tuple[np.ndarray, np.ndarray]:
		raise NotImplementedError

	def __repr__(self) -> str:
		return f"{type(self).__name__}(order={self.order})"
