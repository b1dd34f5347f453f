"""
This module centralizes the console diagnostics printed by the package.

Messages are tagged the same way everywhere ("[warning]", "[error]", "[info]") so they
can be grepped out of long runs. rate_limited prints the first few occurrences of a
given key and then only every Nth one, which keeps per-step warnings from flooding the
console when the same condition repeats for thousands of steps. Counters are process
wide and can be cleared with reset_counts.
"""

from __future__ import annotations
import sys
from typing import Dict

_COUNTS: Dict[str, int] = {}

DEFAULT_LIMIT = 3
DEFAULT_INTERVAL = 1000


def info(msg: str) -> None:
	print(f"[info] {msg}")


def warn(msg: str) -> None:
	print(f"[warning] {msg}")


def error(msg: str) -> None:
	print(f"[error] {msg}", file=sys.stderr)


def rate_limited(key: str, msg: str, *, limit: int = DEFAULT_LIMIT,
				 interval: int = DEFAULT_INTERVAL) -> bool:
	if limit < 0:
		limit = 0
	if interval < 1:
		interval = 1

	c = _COUNTS.get(key, 0) + 1
	_COUNTS[key] = c

	if c <= limit:
		warn(msg)
		return True
	if c % interval == 0:
		warn(f"{msg} (occurrence #{c})")
		return True
	return False


def reset_counts() -> None:
	_COUNTS.clear()
