"""Candidate list ``L``: the matrix entries strictly between two pivots.

The selection only needs ``L`` when a requested rank falls between its two
candidates, and one recursion level may need it for both of its ranks. The
list is therefore wrapped in :class:`LazyCandidateList`, built on first use
and kept afterwards.
"""
from typing import NamedTuple, Union

import numpy as np
from numba import njit

from .nbtypes import NB_FLOAT64, NB_FLOAT64_ARRAY, NB_INT64, PY_FLOAT, PY_FLOAT_ARRAY, PY_INT
from .stride import StrideView, stride_len, stride_pos


@njit(NB_FLOAT64_ARRAY(NB_FLOAT64_ARRAY, NB_INT64, NB_FLOAT64, NB_FLOAT64), fastmath=True, boundscheck=False, cache=True)
def pick_between(sorted_values: PY_FLOAT_ARRAY,
                 step: PY_INT,
                 lower: PY_FLOAT,
                 upper: PY_FLOAT) -> PY_FLOAT_ARRAY:
    """Entries ``v`` of the stride view's matrix with ``lower < v < upper``.

    Row-major order. The upper pointer advances monotonically across rows as
    in the rank counters; from it each row is scanned only while entries stay
    above ``lower``, so the cost is O(n + len(result)).
    """
    total = sorted_values.shape[0]
    n = stride_len(total, step)

    # Counting pass, sizes the output
    size = 0
    column = 0
    for row in range(n):
        lhs = sorted_values[stride_pos(total, step, row)]
        while column < n and lhs - sorted_values[stride_pos(total, step, column)] >= upper:
            column += 1
        inner = column
        while inner < n and lhs - sorted_values[stride_pos(total, step, inner)] > lower:
            inner += 1
        size += inner - column

    # Extraction pass over the same view
    picked = np.empty(size, dtype=np.float64)
    fill = 0
    column = 0
    for row in range(n):
        lhs = sorted_values[stride_pos(total, step, row)]
        while column < n and lhs - sorted_values[stride_pos(total, step, column)] >= upper:
            column += 1
        inner = column
        while inner < n:
            value = lhs - sorted_values[stride_pos(total, step, inner)]
            if value <= lower:
                break
            picked[fill] = value
            fill += 1
            inner += 1
    return picked


class _Unbuilt(NamedTuple):
    view: StrideView
    lower: float
    upper: float


class LazyCandidateList:
    """Two-state holder for ``L``.

    Starts unbuilt, holding the view and both bounds. The first
    :meth:`build` materializes the list and drops the source; every later
    call returns that same array.
    """

    __slots__ = ("_state",)

    def __init__(self, view: StrideView, lower: float, upper: float) -> None:
        self._state: Union[_Unbuilt, PY_FLOAT_ARRAY] = _Unbuilt(view, lower, upper)

    @property
    def is_built(self) -> bool:
        return not isinstance(self._state, _Unbuilt)

    def build(self) -> PY_FLOAT_ARRAY:
        state = self._state
        if isinstance(state, _Unbuilt):
            self._state = pick_between(state.view.base, state.view.step, state.lower, state.upper)
        return self._state


__all__ = ["LazyCandidateList", "pick_between"]
