"""Optimizers adapting the coefficients of a :class:`~online_learning.model.Model`.

A teacher holds only hyper parameters. Everything that changes while
learning lives in the training object returned by :meth:`Teacher.new_training`,
so one model may be handed to different teachers one after another.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from online_learning.cost import Cost
from online_learning.model import Model
from online_learning.training import annealed_learning_rate


@dataclass
class AnnealedTraining:
    """Number of events learned so far."""

    num_events: int = 0


@dataclass
class MomentumTraining:
    """Event counter and per-coefficient velocity."""

    num_events: int = 0
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(0))


@dataclass
class AdagradTraining:
    """Accumulated squared gradient per coefficient."""

    squared_gradients: np.ndarray = field(default_factory=lambda: np.zeros(0))


def _check_state_length(state: np.ndarray, model: Model, name: str) -> None:
    if len(state) != model.num_coefficients():
        raise ValueError(
            f"{name} has length {len(state)} but the model has {model.num_coefficients()} coefficients"
        )


class Teacher(ABC):
    """Strategy to adapt model coefficients one event at a time."""

    @abstractmethod
    def new_training(self, model: Model) -> Any:
        """Create the mutable state for one training run of ``model``."""

    @abstractmethod
    def teach_event(self, training: Any, model: Model, cost: Cost, features: Any, truth: Any) -> None:
        """
        Change the coefficients of ``model`` to lower ``cost`` on a single event.

        The prediction is computed once, before any coefficient is changed.
        """


@dataclass
class GradientDescent(Teacher):
    """Stochastic gradient descent with a fixed learning rate."""

    learning_rate: float

    def new_training(self, model: Model) -> None:
        return None

    def teach_event(self, training: None, model: Model, cost: Cost, features: Any, truth: Any) -> None:
        prediction = model.predict(features)
        for ci in range(model.num_coefficients()):
            g = cost.gradient(prediction, truth, model.gradient(ci, features))
            model.set_coefficient(ci, model.coefficient(ci) - self.learning_rate * g)


@dataclass
class GradientDescentAnnealed(Teacher):
    """
    Gradient descent whose learning rate decays as ``l0 / (1 + n / t)``.

    Attributes:
        l0: Learning rate for the first event.
        t: After ``t`` events the rate is ``l0 / 2``, after ``2 t`` it is ``l0 / 3``.
    """

    l0: float
    t: float

    def new_training(self, model: Model) -> AnnealedTraining:
        return AnnealedTraining()

    def learning_rate(self, training: AnnealedTraining) -> float:
        return annealed_learning_rate(training.num_events, self.l0, self.t)

    def teach_event(
        self, training: AnnealedTraining, model: Model, cost: Cost, features: Any, truth: Any
    ) -> None:
        prediction = model.predict(features)
        learning_rate = self.learning_rate(training)
        for ci in range(model.num_coefficients()):
            g = cost.gradient(prediction, truth, model.gradient(ci, features))
            model.set_coefficient(ci, model.coefficient(ci) - learning_rate * g)
        training.num_events += 1


@dataclass
class Momentum(Teacher):
    """
    Annealed gradient descent with a velocity term.

    ``inertia`` below 1 acts as friction; values of 1 or more diverge.
    """

    l0: float
    t: float
    inertia: float

    def new_training(self, model: Model) -> MomentumTraining:
        return MomentumTraining(velocity=np.zeros(model.num_coefficients()))

    def learning_rate(self, training: MomentumTraining) -> float:
        return annealed_learning_rate(training.num_events, self.l0, self.t)

    def teach_event(
        self, training: MomentumTraining, model: Model, cost: Cost, features: Any, truth: Any
    ) -> None:
        velocity = training.velocity
        _check_state_length(velocity, model, "Velocity")
        prediction = model.predict(features)
        learning_rate = self.learning_rate(training)
        for ci in range(model.num_coefficients()):
            g = cost.gradient(prediction, truth, model.gradient(ci, features))
            velocity[ci] = self.inertia * velocity[ci] - learning_rate * g
            model.set_coefficient(ci, model.coefficient(ci) + velocity[ci])
        training.num_events += 1


@dataclass
class Nesterov(Teacher):
    """
    Momentum variant that first moves every coefficient along its velocity.

    Per event the prediction is taken at the current coefficients and the
    existing velocity is applied to all coefficients. Each coefficient then
    moves by ``delta = -learning_rate * gradient`` and the velocity becomes
    ``inertia * velocity + delta``. The inner derivative is evaluated after the
    velocity step, against the already updated lower coefficients, while the
    cost derivative keeps the prediction from before the step.
    """

    l0: float
    t: float
    inertia: float

    def new_training(self, model: Model) -> MomentumTraining:
        return MomentumTraining(velocity=np.zeros(model.num_coefficients()))

    def learning_rate(self, training: MomentumTraining) -> float:
        return annealed_learning_rate(training.num_events, self.l0, self.t)

    def teach_event(
        self, training: MomentumTraining, model: Model, cost: Cost, features: Any, truth: Any
    ) -> None:
        velocity = training.velocity
        _check_state_length(velocity, model, "Velocity")
        num_coefficients = model.num_coefficients()
        prediction = model.predict(features)
        learning_rate = self.learning_rate(training)
        for ci in range(num_coefficients):
            model.set_coefficient(ci, model.coefficient(ci) + velocity[ci])
        for ci in range(num_coefficients):
            gradient = cost.gradient(prediction, truth, model.gradient(ci, features))
            delta = -learning_rate * gradient
            model.set_coefficient(ci, model.coefficient(ci) + delta)
            velocity[ci] = self.inertia * velocity[ci] + delta
        training.num_events += 1


@dataclass
class Adagrad(Teacher):
    """
    Gradient descent scaling each coefficient's step by its gradient history.

    The accumulator starts at ``epsilon`` rather than zero. Each step divides by
    the square root of the accumulator as it was before the event.
    """

    learning_rate: float
    epsilon: float

    def new_training(self, model: Model) -> AdagradTraining:
        return AdagradTraining(squared_gradients=np.full(model.num_coefficients(), self.epsilon, dtype=np.float64))

    def teach_event(
        self, training: AdagradTraining, model: Model, cost: Cost, features: Any, truth: Any
    ) -> None:
        squared = training.squared_gradients
        _check_state_length(squared, model, "Squared gradient accumulator")
        prediction = model.predict(features)
        for ci in range(model.num_coefficients()):
            g = cost.gradient(prediction, truth, model.gradient(ci, features))
            step = -self.learning_rate * g / np.sqrt(squared[ci])
            model.set_coefficient(ci, model.coefficient(ci) + float(step))
            squared[ci] += g * g


def describe(teacher: Teacher, training: Optional[Any]) -> str:
    """Short human readable summary of a teacher and its training state, for logs."""
    if not isinstance(training, (AnnealedTraining, MomentumTraining)):
        return repr(teacher)
    l0 = getattr(teacher, "l0", None)
    t = getattr(teacher, "t", None)
    if l0 is None or t is None:
        return f"{teacher!r} after {training.num_events} events"
    rate = annealed_learning_rate(training.num_events, l0, t)
    return f"{teacher!r} after {training.num_events} events (learning rate {rate:.3g})"
