"""Diagnostics computed over a history with a trained model."""

from __future__ import annotations

import operator
from numbers import Real
from typing import Any, Iterable, List, Tuple

from online_learning.cost import Cost
from online_learning.crisp import crisp
from online_learning.model import Model

Event = Tuple[Any, Any]


def _events(history: Iterable[Event]) -> List[Event]:
    events = list(history)
    if not events:
        raise ValueError("Cannot evaluate an empty history")
    return events


def _expected_class(prediction: Any, truth: Any) -> Any:
    if isinstance(prediction, Real):
        return truth if isinstance(truth, bool) else crisp(float(truth))
    return operator.index(truth)


def accuracy(model: Model, history: Iterable[Event]) -> float:
    """Fraction of events whose crisp prediction matches the truth."""
    events = _events(history)
    hits = 0
    for features, truth in events:
        prediction = model.predict(features)
        if crisp(prediction) == _expected_class(prediction, truth):
            hits += 1
    return hits / len(events)


def mean_absolute_deviation(model: Model, history: Iterable[Event]) -> float:
    events = _events(history)
    return sum(abs(model.predict(features) - float(truth)) for features, truth in events) / len(events)


def mean_cost(model: Model, cost: Cost, history: Iterable[Event]) -> float:
    events = _events(history)
    return sum(cost.cost(model.predict(features), truth) for features, truth in events) / len(events)
