"""Exception types raised by the library."""


class OnlineLearningError(Exception):
    """Base class for library specific failures."""


class InvalidPredictionError(OnlineLearningError, ZeroDivisionError):
    """Raised when a cost is undefined at the given prediction.

    MaxLikelihood has no finite derivative at a prediction of exactly 0 or 1.
    The prediction is reported as is; nothing is clamped.
    """

    def __init__(self, prediction: float, cost_name: str) -> None:
        super().__init__(f"{cost_name} is undefined for prediction {prediction!r}")
        self.prediction = prediction
        self.cost_name = cost_name
