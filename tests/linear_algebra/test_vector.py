import numpy as np
import pytest

from online_learning.linear_algebra import Vector, as_vector, at, dimension, dot, zero


def test_vector_access_and_dot() -> None:
    a = Vector([1.0, 2.0])
    b = Vector((3.0, 4.0))
    assert a.dimension() == 2
    assert a.at(1) == 2.0
    assert a.dot(b) == 11.0
    a.set_at(0, 5.0)
    assert a[0] == 5.0
    assert list(a) == [5.0, 2.0]


def test_vector_validates_expected_dimension() -> None:
    assert Vector([1.0, 2.0, 3.0], dimension=3).dimension() == 3
    with pytest.raises(ValueError):
        Vector([1.0, 2.0], dimension=3)
    with pytest.raises(ValueError):
        Vector(np.zeros((2, 2)))


def test_vector_index_out_of_range_fails() -> None:
    v = zero(3)
    assert v == [0.0, 0.0, 0.0]
    with pytest.raises(IndexError):
        v.at(3)
    with pytest.raises(IndexError):
        v.set_at(-1, 1.0)


def test_dot_requires_equal_dimension() -> None:
    with pytest.raises(ValueError):
        Vector([1.0, 2.0]).dot([1.0, 2.0, 3.0])


def test_scalars_behave_like_one_dimensional_vectors() -> None:
    assert dimension(4.0) == 1
    assert at(4.0, 0) == 4.0
    with pytest.raises(IndexError):
        at(4.0, 1)
    assert dot(2.0, 3.0) == 6.0
    assert dot(Vector([2.0]), 3.0) == 6.0
    assert float(as_vector(2.5)) == 2.5


def test_generic_helpers_accept_sequences_and_arrays() -> None:
    assert dimension((1.0, 2.0, 3.0)) == 3
    assert at(np.array([1.0, 7.0]), 1) == 7.0
    assert dot([1.0, 2.0], np.array([3.0, 4.0])) == 11.0


def test_as_vector_keeps_existing_instance_and_copy_is_independent() -> None:
    v = Vector([1.0])
    assert as_vector(v) is v
    clone = v.copy()
    clone.set_at(0, 9.0)
    assert v.at(0) == 1.0
    arr = v.to_numpy()
    arr[0] = 3.0
    assert v.at(0) == 1.0
