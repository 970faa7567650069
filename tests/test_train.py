"""Convergence of the teachers on small fixtures with known optima."""

import pytest

from online_learning import crisp, learn_history, repeat_history
from online_learning.cost import LeastAbsoluteDeviation, LeastSquares, MaxLikelihood
from online_learning.evaluation import accuracy
from online_learning.model import Constant, Linear, Logistic
from online_learning.teacher import (
    Adagrad,
    GradientDescent,
    GradientDescentAnnealed,
    Momentum,
    Nesterov,
)

# mean is 9, median is 7
SAMPLES = [1.0, 3.0, 4.0, 7.0, 8.0, 11.0, 29.0]
# y = x + 3
LINE = [(0.0, 3.0), (1.0, 4.0), (2.0, 5.0)]
# y = x0 + 2 x1 + 3
PLANE = [((0.0, 7.0), 17.0), ((1.0, 2.0), 8.0), ((2.0, -2.0), 1.0)]
# two clusters, interleaved by label
CLUSTERS = [
    ((-2.0, -1.0), False),
    ((2.0, 1.0), True),
    ((-1.5, -2.0), False),
    ((1.5, 2.0), True),
    ((-1.0, -1.5), False),
    ((1.0, 1.5), True),
    ((-2.0, 0.5), False),
    ((2.0, -0.5), True),
    ((-1.2, -0.3), False),
    ((1.2, 0.3), True),
]


def _samples(num_events):
    return repeat_history([(None, truth) for truth in SAMPLES], num_events)


@pytest.mark.parametrize(
    "teacher, num_events",
    [
        (GradientDescent(learning_rate=0.001), 7000),
        (GradientDescentAnnealed(l0=0.3, t=4.0), 100),
        (Momentum(l0=0.03, t=4.0, inertia=0.9), 700),
        (Nesterov(l0=0.03, t=4.0, inertia=0.9), 700),
        (Adagrad(learning_rate=0.5, epsilon=1.0), 2800),
    ],
)
def test_least_squares_constant_estimates_mean(teacher, num_events) -> None:
    model = Constant(0.0)
    learn_history(teacher, LeastSquares(), model, _samples(num_events))
    assert 8.9 < model.c < 9.1


@pytest.mark.parametrize(
    "teacher, num_events",
    [
        (GradientDescent(learning_rate=0.02), 2800),
        (GradientDescentAnnealed(l0=0.9, t=9.0), 150),
        (Momentum(l0=0.09, t=9.0, inertia=0.9), 700),
        (Nesterov(l0=0.09, t=9.0, inertia=0.9), 700),
        (Adagrad(learning_rate=0.5, epsilon=1.0), 2800),
    ],
)
def test_least_absolute_deviation_constant_estimates_median(teacher, num_events) -> None:
    model = Constant(0.0)
    learn_history(teacher, LeastAbsoluteDeviation(), model, _samples(num_events))
    assert 6.9 < model.c < 7.1


def test_learn_history_returns_training_state() -> None:
    model = Constant(0.0)
    training = learn_history(GradientDescentAnnealed(l0=0.3, t=4.0), LeastSquares(), model, _samples(42))
    assert training.num_events == 42


@pytest.mark.parametrize(
    "teacher, num_events",
    [
        (GradientDescent(learning_rate=0.2), 20),
        (GradientDescentAnnealed(l0=0.2, t=1000.0), 60),
        (Momentum(l0=0.05, t=1000.0, inertia=0.9), 400),
        (Nesterov(l0=0.05, t=1000.0, inertia=0.5), 400),
        (Adagrad(learning_rate=0.5, epsilon=1.0), 600),
    ],
)
def test_linear_fit_with_every_teacher(teacher, num_events) -> None:
    model = Linear(m=0.0, c=0.0)
    learn_history(teacher, LeastSquares(), model, repeat_history(LINE, num_events))
    assert 0.9 < float(model.m) < 1.1
    assert 2.9 < model.c < 3.1


@pytest.mark.parametrize(
    "teacher",
    [
        Momentum(l0=0.009, t=1000.0, inertia=0.995),
        Nesterov(l0=0.009, t=1000.0, inertia=0.995),
    ],
)
def test_linear_fit_two_features(teacher) -> None:
    model = Linear.with_feature_dimension(2)
    learn_history(teacher, LeastSquares(), model, repeat_history(PLANE, 1500))
    assert 0.9 < model.m[0] < 1.1
    assert 1.9 < model.m[1] < 2.1
    assert 2.9 < model.c < 3.1


LOGISTIC_TEACHERS = [
    (GradientDescent(learning_rate=0.3), 20),
    (GradientDescentAnnealed(l0=0.3, t=1000.0), 40),
    (Momentum(l0=0.05, t=1000.0, inertia=0.9), 40),
    (Nesterov(l0=0.05, t=1000.0, inertia=0.9), 40),
    (Adagrad(learning_rate=0.5, epsilon=1.0), 40),
]


@pytest.mark.parametrize("teacher, num_events", LOGISTIC_TEACHERS)
def test_logistic_max_likelihood_probability_truth(teacher, num_events) -> None:
    history = [(x, 1.0 if label else 0.0) for x, label in CLUSTERS]
    model = Logistic.with_feature_dimension(2)
    learn_history(teacher, MaxLikelihood(), model, repeat_history(history, num_events))
    errors = sum(1 for x, truth in history if crisp(model.predict(x)) != (truth == 1.0))
    assert errors == 0


@pytest.mark.parametrize("teacher, num_events", LOGISTIC_TEACHERS)
def test_logistic_max_likelihood_boolean_truth(teacher, num_events) -> None:
    model = Logistic.with_feature_dimension(2)
    learn_history(teacher, MaxLikelihood(), model, repeat_history(CLUSTERS, num_events))
    assert accuracy(model, CLUSTERS) == 1.0


def test_empty_history_leaves_model_untouched() -> None:
    model = Linear(m=1.0, c=2.0)
    learn_history(GradientDescent(learning_rate=0.5), LeastSquares(), model, [])
    assert float(model.m) == 1.0
    assert model.c == 2.0


def test_history_is_consumed_lazily_and_in_order() -> None:
    seen = []

    def history():
        for truth in (1.0, 2.0, 3.0):
            seen.append(truth)
            yield None, truth

    model = Constant(0.0)
    learn_history(GradientDescent(learning_rate=0.5), LeastSquares(), model, history())
    # learning rate 0.5 with least squares jumps straight to each truth
    assert seen == [1.0, 2.0, 3.0]
    assert model.c == 3.0


def test_repeat_history() -> None:
    assert list(repeat_history([1, 2], 5)) == [1, 2, 1, 2, 1]
    assert list(repeat_history([], 0)) == []
    with pytest.raises(ValueError):
        repeat_history([], 3)
    with pytest.raises(ValueError):
        repeat_history([1], -1)
