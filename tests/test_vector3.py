import dataclasses
import math

import numpy as np
import pytest

from nbodysim import Vector3


def test_arithmetic_returns_new_vectors():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-1.0, 0.5, 2.0)

    assert a.add(b) == Vector3(0.0, 2.5, 5.0)
    assert a.subtract(b) == Vector3(2.0, 1.5, 1.0)
    assert a.scale(2.0) == Vector3(2.0, 4.0, 6.0)
    assert a + b == a.add(b)
    assert a - b == a.subtract(b)
    assert 2.0 * a == a * 2.0
    assert -a == Vector3(-1.0, -2.0, -3.0)
    assert a == Vector3(1.0, 2.0, 3.0)


def test_magnitude_dot_cross():
    v = Vector3(3.0, 4.0, 12.0)
    assert v.magnitude() == pytest.approx(13.0)
    assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)
    assert Vector3(1, 2, 3).dot(Vector3(4, -5, 6)) == pytest.approx(12.0)


def test_normalized_unit_length():
    n = Vector3(0.0, -5.0, 0.0).normalized()
    assert n == Vector3(0.0, -1.0, 0.0)
    assert Vector3(1.0, 1.0, 1.0).normalized().magnitude() == pytest.approx(1.0)


def test_normalized_zero_vector_is_zero():
    z = Vector3.zero().normalized()
    assert z == Vector3(0.0, 0.0, 0.0)
    assert all(math.isfinite(c) for c in z)


def test_frozen():
    v = Vector3(1.0, 2.0, 3.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0


def test_array_conversion():
    v = Vector3.from_iterable(np.array([1, 2, 3]))
    np.testing.assert_array_equal(v.as_array(), [1.0, 2.0, 3.0])
    assert isinstance(v.x, float)
    with pytest.raises(ValueError):
        Vector3.from_iterable([1.0, 2.0])


def test_is_finite():
    assert Vector3(1, 2, 3).is_finite()
    assert not Vector3(float("nan"), 0, 0).is_finite()
    assert not Vector3(0, float("inf"), 0).is_finite()
