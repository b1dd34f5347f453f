"""
This module defines the exception hierarchy shared by the loaders and the integration
engine.

Input problems (unreadable files, missing keys, unknown coordinate modes) derive from
InputLoadError or ValueError and are raised before a run starts. MalformedBodyRecord is
the one recoverable kind: the bodies loader collects instances of it instead of raising
them. NumericDivergence is raised from inside a run when a body state stops being finite
and carries the step, simulated time and offending body so the caller can report where
the integration broke down.
"""

from __future__ import annotations


class NBodyError(Exception):
	pass


class InputLoadError(NBodyError):
	pass


class ConfigLoadError(InputLoadError):
	pass


class BodiesLoadError(InputLoadError):
	pass


class InvalidParameters(NBodyError, ValueError):
	pass


class UnknownCoordinateMode(InputLoadError, ValueError):
	def __init__(self, mode: str) -> None:
		super().__init__(f"unknown coordinate mode {mode!r} (expected 'cartesian' or 'spherical')")
		self.mode = mode


class MalformedBodyRecord(NBodyError):
	def __init__(self, line_no: int, reason: str, text: str = "") -> None:
		super().__init__(f"line {line_no}: {reason}: {text!r}")
		self.line_no = int(line_no)
		self.reason = reason
		self.text = text


class NumericDivergence(NBodyError):
	def __init__(self, step: int, sim_time: float, body_index: int, quantity: str) -> None:
		super().__init__(
			f"non-finite {quantity} for body {body_index} at step {step} (t={sim_time:.6g})"
		)
		self.step = int(step)
		self.sim_time = float(sim_time)
		self.body_index = int(body_index)
		self.quantity = quantity


class SimulationStateError(NBodyError):
	pass
