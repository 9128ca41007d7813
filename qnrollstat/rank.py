"""Rank counting over the implicit difference matrix ``A[i][j] = S[i] - S[j]``.

**The sorted values must be ascending.** Then every row of ``A`` is
non-increasing left to right and every column is non-decreasing top to
bottom, so the boundary between entries above and below a pivot moves only
to the right as the row index grows. One column pointer sweeps each row
boundary once and the whole count is O(n). An unsorted input is not detected
and yields wrong counts.

Both counters work on the stride view ``(sorted_values, step)`` directly, so
the coarser sub-matrices of the selection are never copied.
"""
from numba import njit

from .nbtypes import NB_FLOAT64, NB_FLOAT64_ARRAY, NB_INT64, PY_FLOAT, PY_FLOAT_ARRAY, PY_INT
from .stride import stride_len, stride_pos


@njit(NB_INT64(NB_FLOAT64_ARRAY, NB_INT64, NB_FLOAT64), fastmath=True, boundscheck=False, cache=True)
def count_greater(sorted_values: PY_FLOAT_ARRAY, step: PY_INT, pivot: PY_FLOAT) -> PY_INT:
    """Number of matrix entries strictly greater than ``pivot`` (``rank+``)."""
    total = sorted_values.shape[0]
    n = stride_len(total, step)
    count = 0
    column = 0
    for row in range(n):
        lhs = sorted_values[stride_pos(total, step, row)]
        # entries of this row left of the pointer are all > pivot
        while column < n and lhs - sorted_values[stride_pos(total, step, column)] > pivot:
            column += 1
        count += column
    return count


@njit(NB_INT64(NB_FLOAT64_ARRAY, NB_INT64, NB_FLOAT64), fastmath=True, boundscheck=False, cache=True)
def count_less(sorted_values: PY_FLOAT_ARRAY, step: PY_INT, pivot: PY_FLOAT) -> PY_INT:
    """Number of matrix entries strictly less than ``pivot`` (``rank-``)."""
    total = sorted_values.shape[0]
    n = stride_len(total, step)
    count = 0
    column = 0
    for row in range(n):
        lhs = sorted_values[stride_pos(total, step, row)]
        while column < n and lhs - sorted_values[stride_pos(total, step, column)] >= pivot:
            column += 1
        count += n - column
    return count


__all__ = ["count_greater", "count_less"]
