"""Turn continuous predictions into discrete class decisions."""

from __future__ import annotations

from numbers import Real
from typing import Any, Union

import numpy as np

from online_learning.linear_algebra import as_vector


def crisp(prediction: Any) -> Union[bool, int]:
    """
    Return the class decision for ``prediction``.

    A real prediction of a binary classifier maps to ``prediction > 0.5``. A
    vector of per-class scores maps to the index of its largest entry; the
    first index wins ties.
    """
    if isinstance(prediction, Real):
        return bool(prediction > 0.5)
    scores = as_vector(prediction).to_numpy()
    if scores.size == 0:
        raise ValueError("Cannot crisp an empty score vector")
    return int(np.argmax(scores))
