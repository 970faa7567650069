"""Runtime sized vectors and the generic helpers models use on feature values.

Features may be a plain real (dimension 1), a fixed tuple or list, a numpy
array or a :class:`Vector`. The module level helpers treat all of them alike.
"""

from __future__ import annotations

import operator
from numbers import Real
from typing import Any, Iterable, Iterator, Optional, Union

import numpy as np

VectorLike = Union["Vector", Real, Iterable[float], np.ndarray]


class Vector:
    """Ordered tuple of reals addressed by index ``0..dimension()``."""

    __slots__ = ("_values",)

    def __init__(self, values: Union[Real, Iterable[float], np.ndarray], dimension: Optional[int] = None) -> None:
        if isinstance(values, Vector):
            array = values.to_numpy()
        elif isinstance(values, Real):
            array = np.array([float(values)], dtype=np.float64)
        else:
            array = np.array(values if isinstance(values, np.ndarray) else list(values), dtype=np.float64)
        if array.ndim != 1:
            raise ValueError(f"Vector expects a flat sequence, got shape {array.shape}")
        if dimension is not None and array.shape[0] != dimension:
            raise ValueError(f"Expected dimension {dimension}, got {array.shape[0]}")
        self._values = array

    @classmethod
    def zero(cls, dimension: int) -> "Vector":
        if dimension < 0:
            raise ValueError("Vector dimension must be non-negative")
        return cls(np.zeros(dimension, dtype=np.float64))

    def dimension(self) -> int:
        return int(self._values.shape[0])

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < self._values.shape[0]:
            raise IndexError(f"Vector index {index} out of range for dimension {self.dimension()}")
        return index

    def at(self, index: int) -> float:
        return float(self._values[self._check_index(index)])

    def set_at(self, index: int, value: float) -> None:
        self._values[self._check_index(index)] = value

    def dot(self, other: VectorLike) -> float:
        """Scalar product; both operands must share the same dimension."""
        other = as_vector(other)
        if other.dimension() != self.dimension():
            raise ValueError(
                f"Dimension mismatch in dot product: {self.dimension()} != {other.dimension()}"
            )
        return float(np.dot(self._values, other._values))

    def copy(self) -> "Vector":
        return Vector(self._values)

    def to_numpy(self) -> np.ndarray:
        return self._values.copy()

    def __len__(self) -> int:
        return self.dimension()

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._values)

    def __getitem__(self, index: int) -> float:
        return self.at(index)

    def __setitem__(self, index: int, value: float) -> None:
        self.set_at(index, value)

    def __float__(self) -> float:
        if self.dimension() != 1:
            raise TypeError("Only one dimensional vectors convert to float")
        return float(self._values[0])

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        if dtype is None:
            return self._values.copy()
        return self._values.astype(dtype)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vector):
            return bool(np.array_equal(self._values, other._values))
        if isinstance(other, (list, tuple, np.ndarray)):
            return bool(np.array_equal(self._values, np.asarray(other, dtype=np.float64)))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector({[float(v) for v in self._values]})"


def as_vector(value: VectorLike) -> Vector:
    """Wrap ``value`` as a :class:`Vector` without copying existing vectors."""
    if isinstance(value, Vector):
        return value
    return Vector(value)


def dimension(value: VectorLike) -> int:
    if isinstance(value, Real):
        return 1
    return as_vector(value).dimension()


def at(value: VectorLike, index: int) -> float:
    if isinstance(value, Real):
        if operator.index(index) != 0:
            raise IndexError(f"Scalar index {index} out of range for dimension 1")
        return float(value)
    return as_vector(value).at(index)


def dot(left: VectorLike, right: VectorLike) -> float:
    if isinstance(left, Real) and isinstance(right, Real):
        return float(left) * float(right)
    return as_vector(left).dot(right)


def zero(size: int) -> Vector:
    return Vector.zero(size)
