"""
Command-line entry point: nbodysim <config_file> <bodies_file> <coordinates>.

Loads the run configuration and the initial conditions, runs the simulation into a CSV
result file and prints the wall-clock time taken. Exit status is 0 on success, 1 when an
input cannot be loaded (unreadable file, missing or invalid key, unknown coordinate
mode, no valid bodies), 3 when the integration diverges, 4 when the result file cannot be
written, and argparse's 2 for a wrong argument list.
"""

from __future__ import annotations
import argparse
import sys
import time
from typing import Optional, Sequence

from .bodies_loader import load_bodies
from .config_loader import load_run_config
from .errors import InputLoadError, NumericDivergence
from .physics_utils import to_center_of_mass_frame
from .reporting import error, info
from .result_writer import CsvResultSink
from .simulation import SimulationLoop

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_DIVERGED = 3
EXIT_WRITE_ERROR = 4


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nbodysim",
        description="Direct-summation gravitational N-body simulator",
    )
    parser.add_argument("config_file", help="key=value file with G, dt, total_time and filename")
    parser.add_argument("bodies_file", help="initial conditions: mass / position / velocity lines")
    parser.add_argument("coordinates", help="coordinate mode of the bodies file: cartesian or spherical")
    parser.add_argument(
        "--com-frame",
        action="store_true",
        help="shift initial velocities into the centre-of-mass frame",
    )
    parser.add_argument(
        "--flush-every",
        type=int,
        default=256,
        help="number of snapshots buffered between CSV writes (default: 256)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_parser().parse_args(argv)

    try:
        run_cfg = load_run_config(args.config_file)
        loaded = load_bodies(args.bodies_file, args.coordinates)
    except InputLoadError as exc:
        error(f"could not load input: {exc}")
        return EXIT_LOAD_ERROR

    if loaded.n_skipped:
        info(f"{loaded.n_skipped} malformed body record(s) skipped")
    if loaded.n_loaded == 0:
        error(f"could not load input: no valid bodies in {args.bodies_file}")
        return EXIT_LOAD_ERROR

    bodies = loaded.bodies
    if args.com_frame:
        to_center_of_mass_frame(bodies)

    sink = CsvResultSink(run_cfg.output_file, flush_every=args.flush_every)
    loop = SimulationLoop(
        bodies,
        run_cfg.params,
        sink,
        record_initial=run_cfg.record_initial,
        progress_every=run_cfg.progress_every,
    )

    print("Simulation started...")
    start = time.perf_counter()
    try:
        report = loop.run()
    except NumericDivergence as exc:
        error(f"simulation diverged: {exc}")
        return EXIT_DIVERGED
    except OSError as exc:
        error(f"could not write results: {exc}")
        return EXIT_WRITE_ERROR
    elapsed = time.perf_counter() - start

    print(f"Simulation completed. Results saved to {run_cfg.output_file}")
    print(f"Time taken: {elapsed} seconds")
    info(f"{report.steps} steps, t={report.sim_time:.6g}, relative energy drift {report.energy_drift:.3e}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
