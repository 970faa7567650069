"""Cost functions whose value a teacher tries to minimize.

A teacher never uses :meth:`Cost.outer_derivative` on its own. It calls
:meth:`Cost.gradient`, which applies the chain rule to the outer derivative of
the cost and the inner derivative supplied by the model.

Vector predictions (one score per class) take either a class index or a
sequence of per-class truths as ``truth``.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from numbers import Integral, Real
from typing import Any, List

import numpy as np

from online_learning.errors import InvalidPredictionError
from online_learning.linear_algebra import Vector, as_vector


def _per_class_truths(truth: Any, num_classes: int) -> List[Any]:
    if isinstance(truth, bool):
        raise ValueError("A boolean truth cannot be paired with a vector prediction")
    if isinstance(truth, Integral):
        index = operator.index(truth)
        if not 0 <= index < num_classes:
            raise IndexError(f"Class index {index} out of range for {num_classes} classes")
        return [j == index for j in range(num_classes)]
    truths = list(truth)
    if len(truths) != num_classes:
        raise ValueError(f"Expected {num_classes} truths, got {len(truths)}")
    return truths


class Cost(ABC):
    """Penalizes deviations of a prediction from the observed truth."""

    @abstractmethod
    def _outer(self, prediction: float, truth: Any) -> float:
        ...

    @abstractmethod
    def _value(self, prediction: float, truth: Any) -> float:
        ...

    def outer_derivative(self, prediction: Any, truth: Any) -> Any:
        """Derivative of the cost with respect to the prediction."""
        if isinstance(prediction, Real):
            return self._outer(float(prediction), truth)
        scores = as_vector(prediction)
        truths = _per_class_truths(truth, scores.dimension())
        return Vector([self._outer(p, t) for p, t in zip(scores, truths)])

    def cost(self, prediction: Any, truth: Any) -> float:
        """Value of the cost function; vector predictions sum over classes."""
        if isinstance(prediction, Real):
            return self._value(float(prediction), truth)
        scores = as_vector(prediction)
        truths = _per_class_truths(truth, scores.dimension())
        return sum(self._value(p, t) for p, t in zip(scores, truths))

    def gradient(self, prediction: Any, truth: Any, derivative_of_model: Any) -> float:
        """Chain rule: outer derivative of the cost times the model's inner derivative."""
        outer = self.outer_derivative(prediction, truth)
        if isinstance(outer, Vector):
            return outer.dot(derivative_of_model)
        return outer * float(derivative_of_model)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LeastSquares(Cost):
    """``C = (prediction - truth)^2``; fitting a Constant yields the mean."""

    def _outer(self, prediction: float, truth: Any) -> float:
        return 2.0 * (prediction - float(truth))

    def _value(self, prediction: float, truth: Any) -> float:
        error = prediction - float(truth)
        return error * error


class LeastAbsoluteDeviation(Cost):
    """``C = |prediction - truth|``; fitting a Constant yields the median.

    The derivative at ``prediction == truth`` is 0 so training settles on the optimum.
    """

    def _outer(self, prediction: float, truth: Any) -> float:
        error = prediction - float(truth)
        if error > 0.0:
            return 1.0
        if error < 0.0:
            return -1.0
        return 0.0

    def _value(self, prediction: float, truth: Any) -> float:
        return abs(prediction - float(truth))


class MaxLikelihood(Cost):
    """Cross entropy for predictions of a probability.

    Truth may be a probability in ``[0, 1]`` or a boolean label. The cost and
    its derivative do not exist for a prediction of exactly 0 or 1;
    :class:`InvalidPredictionError` is raised there.
    """

    def _check(self, prediction: float) -> None:
        if prediction == 0.0 or prediction == 1.0:
            raise InvalidPredictionError(prediction, type(self).__name__)

    def _outer(self, prediction: float, truth: Any) -> float:
        self._check(prediction)
        if isinstance(truth, (bool, np.bool_)):
            return 1.0 / -prediction if truth else 1.0 / (1.0 - prediction)
        truth = float(truth)
        return (1.0 - truth) / (1.0 - prediction) - truth / prediction

    def _value(self, prediction: float, truth: Any) -> float:
        self._check(prediction)
        if isinstance(truth, (bool, np.bool_)):
            return -float(np.log(prediction)) if truth else -float(np.log(1.0 - prediction))
        truth = float(truth)
        return float(-truth * np.log(prediction) - (1.0 - truth) * np.log(1.0 - prediction))
