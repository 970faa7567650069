"""Pluggable registries mapping names to teacher and cost factories."""

from __future__ import annotations

from typing import Callable, Dict, List

from online_learning.cost import Cost, LeastAbsoluteDeviation, LeastSquares, MaxLikelihood
from online_learning.teacher import (
    Adagrad,
    GradientDescent,
    GradientDescentAnnealed,
    Momentum,
    Nesterov,
    Teacher,
)


class _Registry:
    kind = "Factory"

    def __init__(self) -> None:
        self._registry: Dict[str, Callable[..., object]] = {}

    def register(self, name: str, factory: Callable[..., object]) -> None:
        if name in self._registry:
            raise ValueError(f"{self.kind} '{name}' already registered")
        self._registry[name] = factory

    def names(self) -> List[str]:
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def _create(self, name: str, **kwargs) -> object:
        if name not in self._registry:
            raise ValueError(f"Unknown {self.kind.lower()} '{name}'")
        return self._registry[name](**kwargs)


class TeacherRegistry(_Registry):
    """Registry of teacher factories, pre-populated with the built-in optimizers."""

    kind = "Teacher"

    def __init__(self) -> None:
        super().__init__()
        self.register("gradient_descent", GradientDescent)
        self.register("gradient_descent_annealed", GradientDescentAnnealed)
        self.register("momentum", Momentum)
        self.register("nesterov", Nesterov)
        self.register("adagrad", Adagrad)

    def create(self, name: str, **kwargs) -> Teacher:
        return self._create(name, **kwargs)  # type: ignore[return-value]


class CostRegistry(_Registry):
    """Registry of cost factories."""

    kind = "Cost"

    def __init__(self) -> None:
        super().__init__()
        self.register("least_squares", LeastSquares)
        self.register("least_absolute_deviation", LeastAbsoluteDeviation)
        self.register("max_likelihood", MaxLikelihood)

    def create(self, name: str, **kwargs) -> Cost:
        return self._create(name, **kwargs)  # type: ignore[return-value]
