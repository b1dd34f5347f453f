"""
This module reads the key=value run configuration file.

Recognised keys are G, dt, total_time and filename, plus the optional softening,
integrator, record_initial and progress_every. Each line is split at its first '=', and
key and value are stripped of surrounding whitespace. Blank lines and lines starting
with '#' are ignored, as are unknown keys. load_config only parses; an unreadable file
or an unparsable value for a recognised key raises ConfigLoadError naming the file and
line. Missing keys are allowed at that stage and are checked by RawConfig.to_run_config,
which builds the immutable SimulationParameters for the run.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from .errors import ConfigLoadError, InvalidParameters
from .sim_config import RunConfig, SimulationParameters

REQUIRED_KEYS = ("G", "dt", "total_time", "filename")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(text: str) -> bool:
    key = text.strip().lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"not a boolean: {text!r}")


_PARSERS: Dict[str, Callable[[str], Any]] = {
    "G": float,
    "dt": float,
    "total_time": float,
    "filename": str,
    "softening": float,
    "integrator": str,
    "record_initial": _parse_bool,
    "progress_every": int,
}


@dataclass
class RawConfig:
    source: str = "<memory>"
    values: Dict[str, Any] = field(default_factory=dict)
    ignored_keys: list = field(default_factory=list)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def missing_keys(self) -> list:
        return [k for k in REQUIRED_KEYS if k not in self.values]

    def to_params(self) -> SimulationParameters:
        missing = [k for k in ("G", "dt", "total_time") if k not in self.values]
        if missing:
            raise ConfigLoadError(f"{self.source}: missing required key(s): {', '.join(missing)}")
        kwargs = dict(G=self.values["G"], dt=self.values["dt"], total_time=self.values["total_time"])
        if "softening" in self.values:
            kwargs["softening"] = self.values["softening"]
        if "integrator" in self.values:
            kwargs["scheme"] = self.values["integrator"]
        try:
            return SimulationParameters(**kwargs)
        except InvalidParameters as exc:
            raise ConfigLoadError(f"{self.source}: {exc}") from exc

    def to_run_config(self) -> RunConfig:
        missing = self.missing_keys()
        if missing:
            raise ConfigLoadError(f"{self.source}: missing required key(s): {', '.join(missing)}")
        if not self.values["filename"]:
            raise ConfigLoadError(f"{self.source}: 'filename' must not be empty")
        return RunConfig(
            params=self.to_params(),
            output_file=self.values["filename"],
            record_initial=bool(self.values.get("record_initial", False)),
            progress_every=max(0, int(self.values.get("progress_every", 0))),
        )


def parse_config_lines(lines, source: str = "<memory>") -> RawConfig:
    cfg = RawConfig(source=source)
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        parser = _PARSERS.get(key)
        if parser is None:
            cfg.ignored_keys.append(key)
            continue
        try:
            cfg.values[key] = parser(value)
        except ValueError:
            raise ConfigLoadError(
                f"{source}:{line_no}: invalid value for {key!r}: {value!r}"
            ) from None
    return cfg


def load_config(filename: "str | os.PathLike") -> RawConfig:
    try:
        with open(filename, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as exc:
        raise ConfigLoadError(f"Could not open config file: {filename} ({exc.strerror})") from exc
    except UnicodeDecodeError as exc:
        raise ConfigLoadError(f"Could not decode config file: {filename} ({exc.reason})") from exc
    return parse_config_lines(lines, source=os.fspath(filename))


def load_run_config(filename: "str | os.PathLike") -> RunConfig:
    return load_config(filename).to_run_config()
