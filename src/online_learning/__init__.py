"""
Online learning toolkit: models, cost functions and teachers that combine freely.

A model says what is predicted, a cost says what is penalized and a teacher
says how coefficients adapt. ``learn_history`` feeds a sequence of
``(features, truth)`` events through any combination of the three.
"""

from online_learning.cost import Cost, LeastAbsoluteDeviation, LeastSquares, MaxLikelihood
from online_learning.crisp import crisp
from online_learning.errors import InvalidPredictionError, OnlineLearningError
from online_learning.linear_algebra import Vector
from online_learning.model import (
    Constant,
    GeneralizedLinearModel,
    Linear,
    Logistic,
    Model,
    OneVsRest,
)
from online_learning.teacher import (
    Adagrad,
    GradientDescent,
    GradientDescentAnnealed,
    Momentum,
    Nesterov,
    Teacher,
)
from online_learning.train import learn_from_config, learn_history, repeat_history

__all__ = [
    "Adagrad",
    "Constant",
    "Cost",
    "GeneralizedLinearModel",
    "GradientDescent",
    "GradientDescentAnnealed",
    "InvalidPredictionError",
    "LeastAbsoluteDeviation",
    "LeastSquares",
    "Linear",
    "Logistic",
    "MaxLikelihood",
    "Model",
    "Momentum",
    "Nesterov",
    "OneVsRest",
    "OnlineLearningError",
    "Teacher",
    "Vector",
    "crisp",
    "learn_from_config",
    "learn_history",
    "repeat_history",
]
