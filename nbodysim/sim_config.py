from __future__ import annotations
import math
from dataclasses import dataclass, replace

from .errors import InvalidParameters

"""
This module defines the immutable parameters of a simulation run. SimulationParameters
carries the gravitational constant, the fixed step, the total simulated duration, the
Plummer softening length and the name of the integration scheme. It is built once at
startup (normally by RunConfig from the config file) and handed explicitly to the
simulation loop; nothing mutates it during a run. Values are validated on construction
and a bad value raises InvalidParameters. RunConfig pairs the parameters with the output
path and the recording options read from the same file.

"""

_ALLOWED_SCHEMES = {
    "symplectic_euler",
    "verlet",
}

DEFAULT_SCHEME = "symplectic_euler"

# ceil(total_time / dt) is taken after snapping ratios this close to an integer
STEP_COUNT_RTOL = 1.0e-9


def _positive_finite(name: str, value) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidParameters(f"{name} must be a number, got {value!r}") from None
    if not (math.isfinite(v) and v > 0.0):
        raise InvalidParameters(f"{name} must be positive and finite, got {value!r}")
    return v


@dataclass(frozen=True)
class SimulationParameters:
    G: float
    dt: float
    total_time: float
    softening: float = 0.0
    scheme: str = DEFAULT_SCHEME

    def __post_init__(self) -> None:
        object.__setattr__(self, "G", _positive_finite("G", self.G))
        object.__setattr__(self, "dt", _positive_finite("dt", self.dt))
        object.__setattr__(self, "total_time", _positive_finite("total_time", self.total_time))

        eps = float(self.softening)
        if not (math.isfinite(eps) and eps >= 0.0):
            raise InvalidParameters(f"softening must be non-negative and finite, got {self.softening!r}")
        object.__setattr__(self, "softening", eps)

        scheme = str(self.scheme).strip().lower()
        if scheme not in _ALLOWED_SCHEMES:
            raise InvalidParameters(
                f"unknown integration scheme {self.scheme!r}; expected one of {sorted(_ALLOWED_SCHEMES)}"
            )
        object.__setattr__(self, "scheme", scheme)

    @property
    def n_steps(self) -> int:
        ratio = self.total_time / self.dt
        nearest = round(ratio)
        if nearest >= 1 and abs(ratio - nearest) <= STEP_COUNT_RTOL * max(1.0, ratio):
            return int(nearest)
        return max(1, int(math.ceil(ratio)))

    def step_size(self, step: int) -> float:
        n = self.n_steps
        if step < 1 or step > n:
            raise ValueError(f"step must be in [1, {n}], got {step}")
        if step < n:
            return self.dt
        return self.total_time - (n - 1) * self.dt

    def time_at(self, step: int) -> float:
        if step >= self.n_steps:
            return self.total_time
        return step * self.dt

    def copy(self, **changes) -> "SimulationParameters":
        return replace(self, **changes)


@dataclass(frozen=True)
class RunConfig:
    params: SimulationParameters
    output_file: str
    record_initial: bool = False
    progress_every: int = 0

    def copy(self, **changes) -> "RunConfig":
        return replace(self, **changes)
