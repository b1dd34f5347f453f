"""
This module implements SimulationLoop, the driver of a fixed-step run, together with the
StepSnapshot it emits and the RunReport it returns.

The loop moves through INITIALIZED -> RUNNING -> COMPLETED (or FAILED when the state
stops being finite). Each step evaluates the force model on the current body set, lets
the integrator commit the next state, advances simulated time, checks every body for
NaN or Inf, and hands a snapshot to the result sink. When the scheme already evaluated
the force at the committed positions (Verlet), that result starts the next step.

Step-count policy: the run takes ceil(total_time / dt) steps (ratios within 1e-9 of an
integer are snapped first), all of length dt except the last, which is shortened so the
final snapshot lands exactly on total_time. Simulated time at step k < n is k * dt
rather than an accumulated sum. A cooperative stop requested through request_stop is
honoured between steps only. The loop owns the body set for the duration of run() and
can be run once.
"""

from __future__ import annotations
import enum
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from .body_set import BodySet, as_body_set
from .diagnostics import Diagnostics
from .errors import InvalidParameters, NumericDivergence, SimulationStateError
from .forces import ForceModel
from .integrator import Integrator
from .reporting import info
from .simulation_validator import SimulationValidator
from .vector3 import Vector3

if TYPE_CHECKING:
	from .body import Body
	from .result_writer import ResultSink
	from .sim_config import SimulationParameters


class SimulationState(enum.Enum):
	INITIALIZED = "initialized"
	RUNNING = "running"
	COMPLETED = "completed"
	FAILED = "failed"


@dataclass(frozen=True)
class StepSnapshot:
	step: int
	sim_time: float
	masses: np.ndarray
	positions: np.ndarray
	velocities: np.ndarray

	@property
	def n_bodies(self) -> int:
		return int(self.masses.size)

	def body_states(self) -> List[Tuple[float, Vector3, Vector3]]:
		return [
			(float(self.masses[i]), Vector3(*self.positions[i]), Vector3(*self.velocities[i]))
			for i in range(self.n_bodies)
		]


@dataclass(frozen=True)
class RunReport:
	steps: int
	sim_time: float
	wall_time: float
	stopped_early: bool
	scheme: str
	initial_energy: float
	final_energy: float

	@property
	def energy_drift(self) -> float:
		if self.initial_energy == 0.0:
			return abs(self.final_energy)
		return abs(self.final_energy - self.initial_energy) / abs(self.initial_energy)


class SimulationLoop:
	def __init__(
		self,
		bodies: "BodySet | Sequence[Body]",
		params: "SimulationParameters",
		sink: "Optional[ResultSink]" = None,
		*,
		record_initial: bool = False,
		progress_every: int = 0,
		force_model: Optional[ForceModel] = None,
	) -> None:
		self.bodies = as_body_set(bodies)
		self.params = params
		self.sink = sink
		self.record_initial = bool(record_initial)
		self.progress_every = max(0, int(progress_every))

		self.force_model = force_model if force_model is not None else ForceModel.from_params(params)
		self.integrator = Integrator(self.force_model, params.scheme)
		self.diagnostics = Diagnostics.from_params(self.bodies, params)

		self.state = SimulationState.INITIALIZED
		self.sim_time = 0.0
		self.steps_done = 0
		self.report: Optional[RunReport] = None
		self._stop_requested = False
		self._next_acc: Optional[np.ndarray] = None

	@property
	def n_steps(self) -> int:
		return self.params.n_steps

	def request_stop(self) -> None:
		self._stop_requested = True

	def _snapshot(self, step: int, t: float) -> StepSnapshot:
		return StepSnapshot(
			step=step,
			sim_time=t,
			masses=self.bodies.masses(),
			positions=self.bodies.positions(),
			velocities=self.bodies.velocities(),
		)

	def _emit(self, step: int, t: float) -> None:
		if self.sink is not None:
			self.sink.record(self._snapshot(step, t))

	def _check_finite(self, step: int, t: float) -> None:
		bad = SimulationValidator.first_non_finite(self.bodies.positions(), self.bodies.velocities())
		if bad is not None:
			idx, quantity = bad
			raise NumericDivergence(step, t, idx, quantity)

	def _advance(self, step: int) -> None:
		acc = self._next_acc
		if acc is None:
			acc = self.force_model.accelerations(self.bodies)
		h = self.params.step_size(step)
		self.integrator.step(self.bodies, acc, h)
		self._next_acc = self.integrator.last_accelerations
		t = self.params.time_at(step)
		self.sim_time = t
		self.steps_done = step
		self._check_finite(step, t)
		self._emit(step, t)

	def run(self) -> RunReport:
		if self.state is not SimulationState.INITIALIZED:
			raise SimulationStateError(f"run() called on a simulation in state {self.state.value!r}")

		b = self.bodies
		if not SimulationValidator.state_is_valid(b.masses(), b.positions(), b.velocities(), self.params.softening):
			SimulationValidator.report_invalid_state("initial body set", b.masses(), b.positions(), b.velocities())
			raise InvalidParameters("initial body set is not a valid finite state")

		self.state = SimulationState.RUNNING
		t_wall0 = time.perf_counter()
		E0 = self.diagnostics.mark_reference()
		n = self.params.n_steps
		stopped_early = False

		try:
			if self.sink is not None:
				self.sink.open(self.bodies)
			if self.record_initial:
				self._emit(0, 0.0)
			for k in range(1, n + 1):
				if self._stop_requested:
					stopped_early = True
					break
				self._advance(k)
				if self.progress_every and k % self.progress_every == 0:
					info(f"step {k}/{n}  t={self.sim_time:.6g}")
		except Exception:
			self.state = SimulationState.FAILED
			raise
		finally:
			if self.sink is not None:
				self.sink.close()

		self.state = SimulationState.COMPLETED
		self.report = RunReport(
			steps=self.steps_done,
			sim_time=self.sim_time,
			wall_time=time.perf_counter() - t_wall0,
			stopped_early=stopped_early,
			scheme=self.integrator.scheme_name,
			initial_energy=E0,
			final_energy=self.diagnostics.energy(),
		)
		return self.report


def run_simulation(
	bodies: "BodySet | Sequence[Body]",
	params: "SimulationParameters",
	sink: "Optional[ResultSink]" = None,
	**kwargs,
) -> RunReport:
	return SimulationLoop(bodies, params, sink, **kwargs).run()
