import numpy as np
import pytest

from nbodysim import ForceModel, pairwise_accelerations, potential_energy


def _direct_sum(q, m, G, eps):
    n = len(m)
    acc = np.zeros((n, 3))
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            r = q[j] - q[i]
            d2 = float(r @ r) + eps * eps
            if d2 == 0.0:
                continue
            acc[i] += G * m[j] * r / d2 ** 1.5
    return acc


def test_two_body_newtonian_acceleration():
    q = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    m = np.array([1.0, 2.0])
    acc = ForceModel(G=1.0).evaluate(q, m)
    np.testing.assert_allclose(acc[0], [0.5, 0.0, 0.0])
    np.testing.assert_allclose(acc[1], [-0.25, 0.0, 0.0])


def test_gravitational_constant_scales_linearly():
    q = np.array([[0.0, 0.0, 0.0], [0.0, 3.0, 4.0]])
    m = np.array([1.0, 1.0])
    a1 = ForceModel(G=1.0).evaluate(q, m)
    a2 = ForceModel(G=6.674e-11).evaluate(q, m)
    np.testing.assert_allclose(a2, 6.674e-11 * a1)


def test_symmetric_sum_matches_direct_sum(random_cluster):
    q = random_cluster.positions()
    m = random_cluster.masses()
    for eps in (0.0, 0.05):
        acc, skipped = pairwise_accelerations(q, m, 1.3, eps)
        assert skipped == 0
        np.testing.assert_allclose(acc, _direct_sum(q, m, 1.3, eps), rtol=1e-12, atol=1e-14)


def test_mass_weighted_forces_cancel(random_cluster):
    q = random_cluster.positions()
    m = random_cluster.masses()
    acc = ForceModel(G=1.0).evaluate(q, m)
    net = np.sum(m[:, None] * acc, axis=0)
    scale = np.max(np.abs(m[:, None] * acc))
    np.testing.assert_allclose(net, 0.0, atol=1e-14 * scale)


def test_plummer_softening():
    q = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    m = np.array([1.0, 2.0])
    acc = ForceModel(G=1.0, softening=1.0).evaluate(q, m)
    assert acc[0, 0] == pytest.approx(2.0 * 2.0 / 5.0 ** 1.5)


def test_coincident_bodies_are_skipped_and_counted():
    q = np.array([[1.0, 1.0, 1.0], [1.0, 1.0, 1.0], [4.0, 1.0, 1.0]])
    m = np.array([1.0, 1.0, 3.0])
    model = ForceModel(G=1.0)
    acc = model.evaluate(q, m)
    assert np.all(np.isfinite(acc))
    assert model.last_skipped_pairs == 1
    # only the third body pulls on the coincident pair
    np.testing.assert_allclose(acc[0], [3.0 / 9.0, 0.0, 0.0])
    np.testing.assert_allclose(acc[1], acc[0])


def test_coincident_bodies_with_softening_are_finite_and_zero():
    q = np.zeros((2, 3))
    m = np.ones(2)
    model = ForceModel(G=1.0, softening=0.1)
    acc = model.evaluate(q, m)
    np.testing.assert_array_equal(acc, 0.0)
    assert model.last_skipped_pairs == 0


def test_fewer_than_two_bodies():
    model = ForceModel(G=1.0)
    np.testing.assert_array_equal(model.evaluate(np.ones((1, 3)), np.ones(1)), np.zeros((1, 3)))
    assert model.evaluate(np.empty((0, 3)), np.empty(0)).shape == (0, 3)


def test_accelerations_from_body_set(circular_pair):
    acc = ForceModel(G=1.0).accelerations(circular_pair)
    np.testing.assert_allclose(acc, [[0.25, 0.0, 0.0], [-0.25, 0.0, 0.0]])


def test_potential_energy_pair():
    q = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 4.0]])
    m = np.array([2.0, 3.0])
    assert potential_energy(q, m, 1.0) == pytest.approx(-1.5)
    assert potential_energy(q, m, 1.0, eps=3.0) == pytest.approx(-6.0 / 5.0)
    assert potential_energy(q[:1], m[:1], 1.0) == 0.0


def test_pair_indices_cached_per_body_count():
    from nbodysim.geometry_cache import pair_indices

    i, j = pair_indices(5)
    assert pair_indices(5)[0] is i
    assert len(i) == 10
    assert np.all(i < j)
    assert pair_indices.cache_info().maxsize == 32
