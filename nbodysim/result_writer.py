"""
This module provides the result sinks that receive one StepSnapshot per step.

ResultSink is the base class the simulation loop talks to: open is called once with the
body set before the first snapshot, record once per snapshot in increasing simulated
time, and close once at the end, also when the run fails. CsvResultSink persists the
trajectory as long-format CSV (one row per body per snapshot: step, time, body, mass,
x, y, z, vx, vy, vz) through pandas, buffering flush_every snapshots between writes so
the per-step cost stays small. TrajectoryRecorder keeps snapshots in memory and exposes
them as arrays or a pandas DataFrame for analysis.
"""

from __future__ import annotations
import os
from typing import List, Optional, TYPE_CHECKING

import numpy as np
import pandas as pd

if TYPE_CHECKING:
	from .body_set import BodySet
	from .simulation import StepSnapshot

COLUMNS = ["step", "time", "body", "mass", "x", "y", "z", "vx", "vy", "vz"]


def snapshots_to_frame(snapshots: List["StepSnapshot"]) -> pd.DataFrame:
	if not snapshots:
		return pd.DataFrame(columns=COLUMNS)
	n = snapshots[0].n_bodies
	steps = np.repeat([s.step for s in snapshots], n)
	times = np.repeat([s.sim_time for s in snapshots], n)
	body = np.tile(np.arange(n), len(snapshots))
	mass = np.concatenate([s.masses for s in snapshots])
	pos = np.concatenate([s.positions for s in snapshots]).reshape(-1, 3)
	vel = np.concatenate([s.velocities for s in snapshots]).reshape(-1, 3)
	return pd.DataFrame({
		"step": steps,
		"time": times,
		"body": body,
		"mass": mass,
		"x": pos[:, 0], "y": pos[:, 1], "z": pos[:, 2],
		"vx": vel[:, 0], "vy": vel[:, 1], "vz": vel[:, 2],
	}, columns=COLUMNS)


class ResultSink:
	def open(self, bodies: "BodySet") -> None:
		pass

	def record(self, snapshot: "StepSnapshot") -> None:
		raise NotImplementedError

	def close(self) -> None:
		pass


class TrajectoryRecorder(ResultSink):
	def __init__(self, every: int = 1) -> None:
		self.every = max(1, int(every))
		self.snapshots: List["StepSnapshot"] = []
		self.closed = False

	def open(self, bodies: "BodySet") -> None:
		self.snapshots = []
		self.closed = False

	def record(self, snapshot: "StepSnapshot") -> None:
		if snapshot.step % self.every == 0:
			self.snapshots.append(snapshot)

	def close(self) -> None:
		self.closed = True

	@property
	def times(self) -> np.ndarray:
		return np.array([s.sim_time for s in self.snapshots], dtype=np.float64)

	def positions(self) -> np.ndarray:
		return np.stack([s.positions for s in self.snapshots]) if self.snapshots else np.empty((0, 0, 3))

	def velocities(self) -> np.ndarray:
		return np.stack([s.velocities for s in self.snapshots]) if self.snapshots else np.empty((0, 0, 3))

	def to_frame(self) -> pd.DataFrame:
		return snapshots_to_frame(self.snapshots)


class CsvResultSink(ResultSink):
	def __init__(self, filename: "str | os.PathLike", flush_every: int = 256,
				 float_format: Optional[str] = "%.17g") -> None:
		self.filename = os.fspath(filename)
		self.flush_every = max(1, int(flush_every))
		self.float_format = float_format
		self.rows_written = 0
		self.snapshots_written = 0
		self._buffer: List["StepSnapshot"] = []
		self._header_written = False

	def open(self, bodies: "BodySet") -> None:
		directory = os.path.dirname(self.filename)
		if directory:
			os.makedirs(directory, exist_ok=True)
		pd.DataFrame(columns=COLUMNS).to_csv(self.filename, index=False)
		self._header_written = True
		self._buffer = []

	def record(self, snapshot: "StepSnapshot") -> None:
		self._buffer.append(snapshot)
		if len(self._buffer) >= self.flush_every:
			self.flush()

	def flush(self) -> None:
		if not self._buffer:
			return
		if not self._header_written:
			self.open(None)
		df = snapshots_to_frame(self._buffer)
		df.to_csv(self.filename, mode="a", header=False, index=False, float_format=self.float_format)
		self.rows_written += len(df)
		self.snapshots_written += len(self._buffer)
		self._buffer = []

	def close(self) -> None:
		self.flush()


def read_trajectory(filename: "str | os.PathLike") -> pd.DataFrame:
	return pd.read_csv(filename)
