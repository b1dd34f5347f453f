import numpy as np
import pytest

from nbodysim import Body, BodySet, SimulationParameters
from nbodysim.reporting import reset_counts


@pytest.fixture(autouse=True)
def _fresh_diag_counts():
    reset_counts()
    yield
    reset_counts()


@pytest.fixture
def circular_pair():
    # equal masses on a circular relative orbit: r = 2, |v_rel| = 1, mu = 2
    return BodySet([
        Body(1.0, (-1.0, 0.0, 0.0), (0.0, 0.5, 0.0)),
        Body(1.0, (1.0, 0.0, 0.0), (0.0, -0.5, 0.0)),
    ])


@pytest.fixture
def example_params():
    return SimulationParameters(G=1.0, dt=0.01, total_time=10.0)


@pytest.fixture
def random_cluster():
    rng = np.random.default_rng(1234)
    n = 6
    masses = rng.uniform(0.5, 1.5, size=n)
    positions = rng.normal(0.0, 1.0, size=(n, 3))
    velocities = rng.normal(0.0, 0.3, size=(n, 3))
    return BodySet.from_arrays(masses, positions, velocities)
