import numpy as np
import pytest

from nbodysim import (
    Body,
    BodySet,
    ForceModel,
    Integrator,
    InvalidParameters,
    SymplecticEulerScheme,
    VerletScheme,
)


def test_default_scheme_is_symplectic_euler():
    integ = Integrator(ForceModel(G=1.0))
    assert isinstance(integ.scheme, SymplecticEulerScheme)
    assert integ.order == 1


def test_unknown_scheme_rejected():
    with pytest.raises(InvalidParameters):
        Integrator(ForceModel(G=1.0), "rk4")


def test_symplectic_euler_kicks_then_drifts(random_cluster):
    model = ForceModel(G=1.0)
    integ = Integrator(model, "symplectic_euler")
    q0 = random_cluster.positions()
    v0 = random_cluster.velocities()
    acc = model.accelerations(random_cluster)
    dt = 0.01

    integ.step(random_cluster, acc, dt)

    v_expected = v0 + dt * acc
    q_expected = q0 + dt * v_expected
    np.testing.assert_allclose(random_cluster.velocities(), v_expected, rtol=0, atol=1e-15)
    np.testing.assert_allclose(random_cluster.positions(), q_expected, rtol=0, atol=1e-15)
    assert integ.steps_taken == 1


def test_verlet_kick_drift_kick(random_cluster):
    model = ForceModel(G=1.0, softening=0.01)
    integ = Integrator(model, "verlet")
    assert isinstance(integ.scheme, VerletScheme)
    m = random_cluster.masses()
    q0 = random_cluster.positions()
    v0 = random_cluster.velocities()
    a0 = model.accelerations(random_cluster)
    dt = 0.02

    integ.step(random_cluster, a0, dt)

    v_half = v0 + 0.5 * dt * a0
    q1 = q0 + dt * v_half
    a1 = model.evaluate(q1, m)
    v1 = v_half + 0.5 * dt * a1
    np.testing.assert_allclose(random_cluster.positions(), q1, rtol=0, atol=1e-15)
    np.testing.assert_allclose(random_cluster.velocities(), v1, rtol=0, atol=1e-15)


def test_update_is_synchronous():
    # each body's new state must come from the same pre-step snapshot
    bodies = BodySet([
        Body(1.0, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        Body(1.0, (1.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
    ])
    model = ForceModel(G=1.0)
    acc = model.accelerations(bodies)
    Integrator(model).step(bodies, acc, 0.1)

    # both bodies move by the same amount towards each other
    dx0 = bodies[0].position.x
    dx1 = bodies[1].position.x - 1.0
    assert dx0 == pytest.approx(0.01)
    assert dx1 == pytest.approx(-0.01)


def test_empty_set_is_noop():
    integ = Integrator(ForceModel(G=1.0))
    integ.step(BodySet(), np.empty((0, 3)), 0.1)
    assert integ.steps_taken == 0


@pytest.mark.parametrize("dt", [0.0, -0.1, float("nan"), float("inf")])
def test_bad_step_size_rejected(circular_pair, dt):
    integ = Integrator(ForceModel(G=1.0))
    q0 = circular_pair.positions()
    with pytest.raises(InvalidParameters):
        integ.step(circular_pair, np.zeros((2, 3)), dt)
    np.testing.assert_array_equal(circular_pair.positions(), q0)
    assert integ.steps_taken == 0


def test_acceleration_shape_mismatch(circular_pair):
    with pytest.raises(ValueError):
        Integrator(ForceModel(G=1.0)).step(circular_pair, np.zeros((3, 3)), 0.1)


def test_verlet_keeps_end_of_step_accelerations(circular_pair):
    model = ForceModel(G=1.0)
    integ = Integrator(model, "verlet")
    assert integ.last_accelerations is None
    integ.step(circular_pair, model.accelerations(circular_pair), 0.01)
    np.testing.assert_array_equal(integ.last_accelerations, model.evaluate(circular_pair.positions(), circular_pair.masses()))
    assert Integrator(model).last_accelerations is None
