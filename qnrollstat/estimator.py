"""Sliding-window Qn estimator of scale.

Two surfaces over the same state bundle:

* :class:`QnScaleEstimator`, an object with ``push``/``extend``/``estimate``;
* ``init_rolling_qn`` / ``get_qn`` / ``get_qn_raw`` / ``rolling_qn``, the
  functional form used for streaming and whole-array processing.
"""
from typing import Iterable, Optional

import numpy as np

from .logutil import get_logger
from .median import RawMedian, raw_median
from .nbtypes import PY_FLOAT_ARRAY
from .scale import ScaleEstimate, corrected_scale, qn_rank
from .select import select
from .window import (PyWindowStateType, clear_window, init_window, push_value,
                     sorted_view, window_capacity, window_len, window_values)


def _estimate(state_tuple: PyWindowStateType) -> Optional[ScaleEstimate]:
    sorted_values = sorted_view(state_tuple)
    n = sorted_values.shape[0]
    if n == 0:
        return None
    return ScaleEstimate(n_samples=n, statistic=select(sorted_values, qn_rank(n)))


class QnScaleEstimator:
    """Qn over the last ``window_size`` pushed samples.

    ``push`` is O(window_size) (sorted insertion and eviction),
    ``estimate`` is O(n log n) and ``median`` is O(1). Not thread-safe: guard
    the whole instance with a lock if it is shared.
    """

    def __init__(self, window_size: int) -> None:
        self._state = init_window(window_size)

    @property
    def window_size(self) -> int:
        return window_capacity(self._state)

    def __len__(self) -> int:
        return window_len(self._state)

    def push(self, value: float) -> None:
        """Add a sample, evicting the oldest one if the window is full."""
        push_value(self._state, value)

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            push_value(self._state, value)

    def clear(self) -> None:
        get_logger().debug("clearing window of %d samples", len(self))
        clear_window(self._state)

    def sorted_values(self) -> PY_FLOAT_ARRAY:
        return sorted_view(self._state).copy()

    def window_values(self) -> PY_FLOAT_ARRAY:
        return window_values(self._state)

    def estimate(self) -> Optional[ScaleEstimate]:
        """Raw Qn statistic with its sample count, ``None`` when empty."""
        return _estimate(self._state)

    scale = estimate

    def corrected_scale(self) -> Optional[float]:
        return corrected_scale(self.estimate())

    def median(self) -> Optional[RawMedian]:
        return raw_median(sorted_view(self._state))


# =============================================================================
# Functional API
# =============================================================================

def init_rolling_qn(window_size: int = 1000) -> PyWindowStateType:
    return init_window(window_size)


def get_qn_raw(state_tuple: PyWindowStateType, new_value: float) -> float:
    push_value(state_tuple, new_value)
    estimate = _estimate(state_tuple)
    if estimate is None:
        return np.nan
    return float(estimate.statistic)


def get_qn(state_tuple: PyWindowStateType, new_value: float) -> float:
    push_value(state_tuple, new_value)
    scale = corrected_scale(_estimate(state_tuple))
    if scale is None:
        return np.nan
    return scale


def rolling_qn(input_array: PY_FLOAT_ARRAY, window_size: int, raw: bool = False) -> PY_FLOAT_ARRAY:
    """Qn of the trailing ``window_size`` samples at every position.

    Windows shorter than ``window_size`` at the start are used as they are
    (``min_periods=1``). With ``raw=True`` the unnormalized statistic is
    returned instead of the corrected scale.
    """
    input_array = np.asarray(input_array, dtype=np.float64)
    if input_array.ndim != 1:
        raise ValueError("Input data must be a 1D array.")
    if window_size < 1:
        raise ValueError('Should be: window_size >= 1')
    n = len(input_array)
    output = np.empty(n, dtype=np.float64)
    state_tuple = init_window(window_size)
    update = get_qn_raw if raw else get_qn
    for i in range(n):
        output[i] = update(state_tuple, input_array[i])
    return output


__all__ = [
    "QnScaleEstimator",
    "get_qn",
    "get_qn_raw",
    "init_rolling_qn",
    "rolling_qn",
]
