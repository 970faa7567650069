"""Drive a teacher over a history of events."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable, Iterator, Tuple

from online_learning.config import RunConfig
from online_learning.cost import Cost
from online_learning.model import Model
from online_learning.teacher import Teacher, describe
from online_learning.utils import get_logger

logger = get_logger("train")

Event = Tuple[Any, Any]


def learn_history(teacher: Teacher, cost: Cost, model: Model, history: Iterable[Event]) -> Any:
    """
    Teach ``model`` every ``(features, truth)`` event of ``history`` in order.

    Args:
        teacher: Optimizer applied once per event.
        cost: Cost function to minimize.
        model: Model whose coefficients are changed in place.
        history: Finite, possibly lazy, iterable of events.

    Returns:
        The training state created for this run.
    """
    logger.debug("Learning history with %r and %r", teacher, cost)
    training = teacher.new_training(model)
    num_events = 0
    for features, truth in history:
        teacher.teach_event(training, model, cost, features, truth)
        num_events += 1
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Learned %d events using %s", num_events, describe(teacher, training))
    return training


def repeat_history(history: Iterable[Event], num_events: int) -> Iterator[Event]:
    """Cycle through a finite ``history`` until ``num_events`` events were produced."""
    if num_events < 0:
        raise ValueError("num_events must be non-negative")
    events = list(history)
    if not events and num_events:
        raise ValueError("Cannot repeat an empty history")
    return itertools.islice(itertools.cycle(events), num_events)


def learn_from_config(config: RunConfig, model: Model, history: Iterable[Event]) -> Any:
    """Build teacher and cost from ``config`` and teach ``model`` the history.

    When ``config.num_events`` is set the history is cycled to that length.
    """
    if config.num_events is not None:
        history = repeat_history(history, config.num_events)
    teacher = config.build_teacher()
    logger.debug("Training %s with %s and %s", type(model).__name__, teacher, config.cost)
    return learn_history(teacher, config.build_cost(), model, history)
