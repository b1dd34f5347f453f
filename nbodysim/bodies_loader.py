"""
This module reads initial conditions for the bodies of a run.

A record is three consecutive lines: the mass, then the position (3 values), then the
velocity (3 values). Blank lines and '#' comments between records are skipped. A blank
line, comment or end of file where a position or velocity line is expected aborts that
record. Each line contributes its first one or three whitespace-separated values and any
trailing tokens are ignored. The coordinate mode ('cartesian' or 'spherical') applies to
the whole file and is converted once, here, so the engine only sees cartesian state.

A line that is not a positive finite mass is skipped on its own. Once a mass parses, the
position and velocity lines are both taken before either is checked, so a bad value drops
the whole record and the records after it stay aligned. Skipped records (missing or
non-numeric values, non-positive mass, non-finite components) do not stop the load:
load_bodies returns them in LoadResult.skipped as MalformedBodyRecord values and prints a
tagged warning for each. An unknown mode or an unreadable file is fatal and raises.
"""

from __future__ import annotations
import math
import os
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple

from .body import Body
from .body_set import BodySet
from .coordinates import CoordinateMode, parse_mode, to_cartesian
from .errors import BodiesLoadError, MalformedBodyRecord
from .reporting import warn


@dataclass
class LoadResult:
	bodies: BodySet
	skipped: List[MalformedBodyRecord] = field(default_factory=list)
	mode: CoordinateMode = CoordinateMode.CARTESIAN

	@property
	def n_loaded(self) -> int:
		return len(self.bodies)

	@property
	def n_skipped(self) -> int:
		return len(self.skipped)


def _is_filler(line: str) -> bool:
	s = line.strip()
	return not s or s.startswith("#")


def _parse_values(line: str, count: int, line_no: int, what: str) -> Tuple[float, ...]:
	tokens = line.split()
	if len(tokens) < count:
		raise MalformedBodyRecord(line_no, f"expected {count} {what} value(s), found {len(tokens)}", line)
	try:
		values = tuple(float(t) for t in tokens[:count])
	except ValueError:
		raise MalformedBodyRecord(line_no, f"invalid {what} value", line) from None
	if not all(math.isfinite(v) for v in values):
		raise MalformedBodyRecord(line_no, f"non-finite {what} value", line)
	return values


def _record_line(it: Iterator[Tuple[int, str]], after: int, what: str) -> Tuple[int, str]:
	nxt = next(it, None)
	if nxt is None:
		raise MalformedBodyRecord(after + 1, f"missing {what} line (end of file)")
	line_no, line = nxt
	if _is_filler(line):
		raise MalformedBodyRecord(line_no, f"missing {what} line", line)
	return line_no, line


def parse_bodies(lines: Iterable[str], mode="cartesian") -> LoadResult:
	coords = parse_mode(mode)
	bodies: List[Body] = []
	skipped: List[MalformedBodyRecord] = []

	it = iter(enumerate((l.rstrip("\r\n") for l in lines), start=1))
	for line_no, line in it:
		if _is_filler(line):
			continue
		try:
			mass = _parse_values(line, 1, line_no, "mass")[0]
			if mass <= 0.0:
				raise MalformedBodyRecord(line_no, "mass must be positive", line)
			pos_no, pos_line = _record_line(it, line_no, "position")
			vel_no, vel_line = _record_line(it, pos_no, "velocity")
			pos = _parse_values(pos_line, 3, pos_no, coords.value + " position")
			vel = _parse_values(vel_line, 3, vel_no, coords.value + " velocity")
		except MalformedBodyRecord as rec:
			warn(f"skipping body record: {rec}")
			skipped.append(rec)
			continue

		pos, vel = to_cartesian(coords, pos, vel)
		bodies.append(Body(mass, pos, vel))

	return LoadResult(BodySet(bodies), skipped, coords)


def load_bodies(filename: "str | os.PathLike", mode="cartesian") -> LoadResult:
	coords = parse_mode(mode)
	try:
		with open(filename, "r", encoding="utf-8") as f:
			lines = f.readlines()
	except OSError as exc:
		raise BodiesLoadError(f"Could not open bodies file: {filename} ({exc.strerror})") from exc
	except UnicodeDecodeError as exc:
		raise BodiesLoadError(f"Could not decode bodies file: {filename} ({exc.reason})") from exc
	return parse_bodies(lines, coords)
