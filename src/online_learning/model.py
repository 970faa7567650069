"""Parameterized predictors trained by a :class:`~online_learning.teacher.Teacher`.

Every model exposes its coefficients by index and the analytic partial
derivative of its prediction with respect to each of them.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Sequence

import numpy as np

from online_learning.linear_algebra import Vector, VectorLike, at


class Model(ABC):
    """A predictor whose output depends on a fixed number of real coefficients."""

    @abstractmethod
    def num_coefficients(self) -> int:
        """Number of coefficients; constant for the lifetime of the instance."""

    @abstractmethod
    def coefficient(self, index: int) -> float:
        """Value of the ``index``-th coefficient."""

    @abstractmethod
    def set_coefficient(self, index: int, value: float) -> None:
        """Overwrite the ``index``-th coefficient."""

    @abstractmethod
    def predict(self, features: Any) -> Any:
        """Predict a target from ``features`` using the current coefficients."""

    @abstractmethod
    def gradient(self, index: int, features: Any) -> Any:
        """Derivative of ``predict(features)`` with respect to coefficient ``index``."""

    def coefficients(self) -> np.ndarray:
        return np.array([self.coefficient(i) for i in range(self.num_coefficients())], dtype=np.float64)

    def _check_coefficient(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < self.num_coefficients():
            raise IndexError(
                f"Coefficient index {index} out of range for {type(self).__name__} "
                f"with {self.num_coefficients()} coefficients"
            )
        return index


@dataclass
class Constant(Model):
    """Predicts ``c`` regardless of the features."""

    c: float = 0.0

    def num_coefficients(self) -> int:
        return 1

    def coefficient(self, index: int) -> float:
        self._check_coefficient(index)
        return self.c

    def set_coefficient(self, index: int, value: float) -> None:
        self._check_coefficient(index)
        self.c = float(value)

    def predict(self, features: Any = None) -> float:
        return self.c

    def gradient(self, index: int, features: Any = None) -> float:
        self._check_coefficient(index)
        return 1.0


@dataclass
class Linear(Model):
    """Models the target as ``y = m . x + c``.

    ``m`` may be given as a scalar for one dimensional features; it is always
    stored as a :class:`Vector`. The slope coefficients come first, the
    offset ``c`` is the last coefficient.
    """

    m: Any = 0.0
    c: float = 0.0

    def __post_init__(self) -> None:
        self.m = Vector(self.m)
        self.c = float(self.c)

    @classmethod
    def with_feature_dimension(cls, dimension: int) -> "Linear":
        return cls(m=Vector.zero(dimension), c=0.0)

    def num_coefficients(self) -> int:
        return self.m.dimension() + 1

    def coefficient(self, index: int) -> float:
        index = self._check_coefficient(index)
        if index == self.m.dimension():
            return self.c
        return self.m.at(index)

    def set_coefficient(self, index: int, value: float) -> None:
        index = self._check_coefficient(index)
        if index == self.m.dimension():
            self.c = float(value)
        else:
            self.m.set_at(index, value)

    def predict(self, features: VectorLike) -> float:
        return self.m.dot(features) + self.c

    def gradient(self, index: int, features: VectorLike) -> float:
        index = self._check_coefficient(index)
        if index == self.m.dimension():
            return 1.0
        return at(features, index)


@dataclass
class Logistic(Model):
    """Models the target as ``y = 1 / (1 + e^(m . x + c))``."""

    linear: Linear = field(default_factory=Linear)

    @classmethod
    def with_feature_dimension(cls, dimension: int) -> "Logistic":
        return cls(Linear.with_feature_dimension(dimension))

    def num_coefficients(self) -> int:
        return self.linear.num_coefficients()

    def coefficient(self, index: int) -> float:
        return self.linear.coefficient(index)

    def set_coefficient(self, index: int, value: float) -> None:
        self.linear.set_coefficient(index, value)

    def predict(self, features: VectorLike) -> float:
        return float(1.0 / (1.0 + np.exp(self.linear.predict(features))))

    def gradient(self, index: int, features: VectorLike) -> float:
        p = self.predict(features)
        return -p * (1.0 - p) * self.linear.gradient(index, features)


@dataclass
class GeneralizedLinearModel(Model):
    """Models the target as ``y = g(m . x + c)``.

    ``g_derivative`` must be the derivative of ``g``; nothing checks that.
    """

    g: Callable[[float], float]
    g_derivative: Callable[[float], float]
    linear: Linear = field(default_factory=Linear)

    @classmethod
    def with_feature_dimension(
        cls,
        dimension: int,
        g: Callable[[float], float],
        g_derivative: Callable[[float], float],
    ) -> "GeneralizedLinearModel":
        return cls(g, g_derivative, Linear.with_feature_dimension(dimension))

    def num_coefficients(self) -> int:
        return self.linear.num_coefficients()

    def coefficient(self, index: int) -> float:
        return self.linear.coefficient(index)

    def set_coefficient(self, index: int, value: float) -> None:
        self.linear.set_coefficient(index, value)

    def predict(self, features: VectorLike) -> float:
        return float(self.g(self.linear.predict(features)))

    def gradient(self, index: int, features: VectorLike) -> float:
        return float(self.g_derivative(self.linear.predict(features))) * self.linear.gradient(index, features)


class OneVsRest(Model):
    """Multi-class model built from K binary models with equal coefficient counts.

    Coefficients are interleaved: for three models a, b, c the combined order
    is a0, b0, c0, a1, b1, c1, ... so index ``i`` belongs to model ``i % K``
    at local position ``i // K``. Predictions are raw per-class scores.
    """

    def __init__(self, models: Sequence[Model]) -> None:
        models = list(models)
        if not models:
            raise ValueError("OneVsRest requires at least one model")
        counts = {model.num_coefficients() for model in models}
        if len(counts) != 1:
            raise ValueError(f"OneVsRest models must share a coefficient count, got {sorted(counts)}")
        self.models: List[Model] = models

    @classmethod
    def with_classes(cls, num_classes: int, factory: Callable[[], Model]) -> "OneVsRest":
        return cls([factory() for _ in range(num_classes)])

    def num_classes(self) -> int:
        return len(self.models)

    def num_coefficients(self) -> int:
        return len(self.models) * self.models[0].num_coefficients()

    def locate(self, index: int) -> tuple[int, int]:
        """Return ``(class, local index)`` for a combined coefficient index."""
        index = self._check_coefficient(index)
        return index % len(self.models), index // len(self.models)

    def coefficient(self, index: int) -> float:
        cls_idx, local = self.locate(index)
        return self.models[cls_idx].coefficient(local)

    def set_coefficient(self, index: int, value: float) -> None:
        cls_idx, local = self.locate(index)
        self.models[cls_idx].set_coefficient(local, value)

    def predict(self, features: Any) -> Vector:
        return Vector([model.predict(features) for model in self.models])

    def gradient(self, index: int, features: Any) -> Vector:
        cls_idx, local = self.locate(index)
        result = Vector.zero(len(self.models))
        result.set_at(cls_idx, self.models[cls_idx].gradient(local, features))
        return result

    def __repr__(self) -> str:
        return f"OneVsRest({self.models!r})"
