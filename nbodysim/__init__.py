"""
This initialization file serves as the main entry point for the N-body simulation
package, exposing the public API through a single namespace.

It re-exports the value and state types (Vector3, Body, BodySet), the run parameters
(SimulationParameters, RunConfig), the engine (ForceModel, Integrator and its schemes,
SimulationLoop with StepSnapshot and RunReport), the conserved-quantity diagnostics and
analytic two-body references, the input adapters (config and bodies loaders, coordinate
conversion), the result sinks, and the error hierarchy.
"""

from .vector3 import Vector3
from .body import Body
from .body_set import BodySet
from .sim_config import SimulationParameters, RunConfig

from .forces import ForceModel, pairwise_accelerations, potential_energy
from .integration_scheme_base import IntegrationScheme
from .symplectic_euler_scheme import SymplecticEulerScheme
from .verlet_scheme import VerletScheme
from .integrator import Integrator
from .simulation import (
    SimulationLoop,
    SimulationState,
    StepSnapshot,
    RunReport,
    run_simulation,
)

from .diagnostics import Diagnostics
from .simulation_validator import SimulationValidator
from .kepler_solver import UniversalVariableKeplerSolver, OrbitalElements, two_body_elements
from .physics_utils import remove_center_of_mass_velocity, to_center_of_mass_frame

from .coordinates import (
    CoordinateMode,
    parse_mode,
    spherical_to_cartesian,
    cartesian_to_spherical,
    to_cartesian,
)
from .config_loader import RawConfig, load_config, load_run_config, parse_config_lines
from .bodies_loader import LoadResult, load_bodies, parse_bodies
from .result_writer import ResultSink, CsvResultSink, TrajectoryRecorder, read_trajectory

from .errors import (
    NBodyError,
    InputLoadError,
    ConfigLoadError,
    BodiesLoadError,
    InvalidParameters,
    UnknownCoordinateMode,
    MalformedBodyRecord,
    NumericDivergence,
    SimulationStateError,
)


__all__ = [
    "Vector3",
    "Body",
    "BodySet",
    "SimulationParameters",
    "RunConfig",
    "ForceModel",
    "pairwise_accelerations",
    "potential_energy",
    "IntegrationScheme",
    "SymplecticEulerScheme",
    "VerletScheme",
    "Integrator",
    "SimulationLoop",
    "SimulationState",
    "StepSnapshot",
    "RunReport",
    "run_simulation",
    "Diagnostics",
    "SimulationValidator",
    "UniversalVariableKeplerSolver",
    "OrbitalElements",
    "two_body_elements",
    "remove_center_of_mass_velocity",
    "to_center_of_mass_frame",
    "CoordinateMode",
    "parse_mode",
    "spherical_to_cartesian",
    "cartesian_to_spherical",
    "to_cartesian",
    "RawConfig",
    "load_config",
    "load_run_config",
    "parse_config_lines",
    "LoadResult",
    "load_bodies",
    "parse_bodies",
    "ResultSink",
    "CsvResultSink",
    "TrajectoryRecorder",
    "read_trajectory",
    "NBodyError",
    "InputLoadError",
    "ConfigLoadError",
    "BodiesLoadError",
    "InvalidParameters",
    "UnknownCoordinateMode",
    "MalformedBodyRecord",
    "NumericDivergence",
    "SimulationStateError",
]
