"""
This module implements the direct all-pairs gravitational force model.

ForceModel.evaluate returns the acceleration of every body in index order. Each of the
n(n-1)/2 unordered pairs is visited once: with f_ij = G r_ij / d_soft^3 the pair adds
m_j f_ij to body i and subtracts m_i f_ij from body j, so the mass-weighted sum of all
contributions cancels pair by pair. Close encounters are handled with Plummer softening,
d_soft = sqrt(d^2 + eps^2). With zero softening two coincident bodies have no defined
direction; such pairs contribute nothing, are counted in last_skipped_pairs, and trigger
a rate-limited warning. potential_energy uses the same softened distance so that energy
diagnostics are consistent with the forces actually applied. All functions assume (n, 3)
positions and positive masses.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
from typing import TYPE_CHECKING

from .geometry_cache import pair_geometry
from .reporting import rate_limited

if TYPE_CHECKING:
    from .body_set import BodySet


def pairwise_accelerations(
    q: NDArray[np.floating],
    m: NDArray[np.floating],
    G: float,
    eps: float = 0.0,
) -> tuple[NDArray[np.floating], int]:

    q_arr = np.asarray(q, dtype=float)
    m_arr = np.asarray(m, dtype=float).ravel()

    acc = np.zeros_like(q_arr, dtype=float)
    if q_arr.shape[0] < 2 or float(G) == 0.0:
        return acc, 0

    dr, _, inv_r3, valid, iu = pair_geometry(q_arr, float(eps))
    f = float(G) * inv_r3[:, None] * dr

    np.add.at(acc, iu[0], m_arr[iu[1]][:, None] * f)
    np.add.at(acc, iu[1], -m_arr[iu[0]][:, None] * f)

    n_skipped = int(valid.size - np.count_nonzero(valid))
    return acc, n_skipped


def potential_energy(
    q: NDArray[np.floating],
    m: NDArray[np.floating],
    G: float,
    eps: float = 0.0,
) -> float:

    q_arr = np.asarray(q, dtype=float)
    m_arr = np.asarray(m, dtype=float).ravel()

    if q_arr.shape[0] < 2 or float(G) == 0.0:
        return 0.0

    _, r2_soft, _, valid, iu = pair_geometry(q_arr, float(eps))
    mprod = m_arr[iu[0]] * m_arr[iu[1]]
    inv_r = np.zeros_like(r2_soft)
    inv_r[valid] = 1.0 / np.sqrt(r2_soft[valid])
    return -float(G) * float(np.sum(mprod * inv_r))


class ForceModel:
    def __init__(self, G: float, softening: float = 0.0) -> None:
        self.G = float(G)
        self.softening = float(softening)
        self.last_skipped_pairs = 0
        self.evaluations = 0

    @classmethod
    def from_params(cls, params) -> "ForceModel":
        return cls(params.G, params.softening)

    def evaluate(self, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        acc, n_skipped = pairwise_accelerations(positions, masses, self.G, self.softening)
        self.evaluations += 1
        self.last_skipped_pairs = n_skipped
        if n_skipped:
            rate_limited(
                "coincident_pairs",
                f"{n_skipped} coincident body pair(s) with zero softening; contribution skipped",
            )
        return acc

    def accelerations(self, bodies: "BodySet") -> np.ndarray:
        return self.evaluate(bodies.positions(), bodies.masses())

    def potential_energy(self, positions: np.ndarray, masses: np.ndarray) -> float:
        return potential_energy(positions, masses, self.G, self.softening)

    def __repr__(self) -> str:
        return f"ForceModel(G={self.G}, softening={self.softening})"
