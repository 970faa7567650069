"""Helpers shared by the teacher implementations."""


def annealed_learning_rate(num_events: int, start: float, t: float) -> float:
    """
    Learning rate after ``num_events`` events: ``start / (1 + num_events / t)``.

    Smaller ``t`` decays faster. After ``t`` events the rate is half of
    ``start``, after ``2 t`` events a third, and so on. It never reaches zero.
    """
    return start / (1.0 + num_events / t)
