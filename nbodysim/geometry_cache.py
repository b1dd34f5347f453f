from __future__ import annotations
from functools import lru_cache
from typing import Tuple

import numpy as np

"""
This module provides the geometric kernel shared by the force model and the energy diagnostics. pair_indices caches the upper-triangle index pairs (i < j) for a given body count so repeated evaluations with the same n do not rebuild them. pair_geometry computes, for every unordered pair, the separation vector r_ij = q_j - q_i, the Plummer-softened squared distance d^2 + eps^2 and the inverse cube of the softened distance. Pairs whose softened distance is exactly zero get an inverse cube of zero and are reported through the returned mask so callers can skip and count them. It assumes (n, 3) position arrays and a non-negative softening length.

"""


__all__ = ["pair_indices", "pair_geometry"]


@lru_cache(maxsize=32)
def pair_indices(n: int) -> Tuple[np.ndarray, np.ndarray]:
    iu = np.triu_indices(int(n), 1)
    iu[0].setflags(write=False)
    iu[1].setflags(write=False)
    return iu


def pair_geometry(
    pos: np.ndarray,
    eps: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    pos = np.asarray(pos, dtype=float)
    iu = pair_indices(pos.shape[0])

    dr = pos[iu[1]] - pos[iu[0]]
    r2_soft = np.einsum("ij,ij->i", dr, dr, optimize=True) + eps * eps

    inv_r3 = np.zeros_like(r2_soft, dtype=float)
    valid = r2_soft > 0.0
    if np.any(valid):
        inv_r3[valid] = np.power(r2_soft[valid], -1.5)

    return dr, r2_soft, inv_r3, valid, iu
