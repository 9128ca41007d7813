"""Selection of order statistics in the implicit difference matrix.

For an ascending window ``S`` of length ``n`` the matrix is
``A[i][j] = S[i] - S[j]``. :func:`select` returns its ``k``-th smallest entry
(``k`` counted from 1) in O(n log n) without building ``A``, following
Mirzaian & Arjomandi, "Selection in X + Y and matrices with sorted rows and
columns" (1985).

Each level picks two candidates from the sub-matrix made of every other row
and column (``StrideView.doubled``), ranks them in the current matrix, and
either returns a candidate directly or selects inside the short list of
entries lying strictly between them.
"""
import math
from typing import Tuple

import numpy as np
from numba import njit

from .candidates import LazyCandidateList
from .logutil import get_logger
from .nbtypes import NB_BOOL, NB_FLOAT64, NB_FLOAT64_ARRAY, NB_INT64, PY_FLOAT, PY_FLOAT_ARRAY, PY_INT
from .rank import count_greater, count_less
from .stride import StrideView


@njit(NB_BOOL(NB_FLOAT64_ARRAY), cache=True)
def _has_non_finite(values: PY_FLOAT_ARRAY) -> bool:
    for value in values:
        if not math.isfinite(value):
            return True
    return False


@njit(NB_FLOAT64(NB_FLOAT64_ARRAY, NB_INT64), cache=True)
def select_nth(buffer: PY_FLOAT_ARRAY, index: PY_INT) -> PY_FLOAT:
    """``index``-th smallest (0-based) element of ``buffer``, by partitioning."""
    if index < 0 or index >= buffer.shape[0]:
        raise ValueError('Should be: 0 <= index < len(buffer)')
    for value in buffer:
        if value != value:
            raise ValueError('NaN cannot be ordered')
    return np.partition(buffer, index)[index]


def _as_sorted_array(sorted_values) -> PY_FLOAT_ARRAY:
    values = np.ascontiguousarray(sorted_values, dtype=np.float64)
    if values.ndim != 1:
        raise ValueError("Input data must be a 1D array.")
    if values.shape[0] == 0:
        raise ValueError("Should be: at least one sample")
    # NaN cannot be ordered, and inf - inf is NaN
    if _has_non_finite(values):
        raise ValueError("Should be: finite sample values")
    return values


def _check_ranks(n: int, k1: int, k2: int) -> bool:
    # Lemma 5.1 (Mirzaian & Arjomandi)
    return n * n >= k1 >= k2 >= 1 and k1 - k2 <= 4 * n - 4


def select(sorted_values, k: int) -> float:
    """``k``-th smallest entry (``1 <= k <= n*n``) of the difference matrix.

    ``sorted_values`` must be ascending; this is not checked.
    """
    values = _as_sorted_array(sorted_values)
    n = values.shape[0]
    if not 1 <= k <= n * n:
        raise ValueError(f"Should be: 1 <= k <= {n * n}, got k={k}")
    if n == 1:
        return values[0] - values[0]
    return _select_pair(StrideView(values), k, k)[0]


def select_pair(sorted_values, k1: int, k2: int) -> Tuple[float, float]:
    """The ``k1``-th and ``k2``-th smallest entries, sharing one recursion.

    Requires ``n*n >= k1 >= k2 >= 1`` and ``k1 - k2 <= 4n - 4``.
    """
    values = _as_sorted_array(sorted_values)
    n = values.shape[0]
    if not _check_ranks(n, k1, k2):
        raise ValueError(f"Should be: n*n >= k1 >= k2 >= 1 and k1 - k2 <= 4n - 4, "
                         f"got n={n}, k1={k1}, k2={k2}")
    if n == 1:
        zero = values[0] - values[0]
        return zero, zero
    return _select_pair(StrideView(values), k1, k2)


def _select_pair(view: StrideView, k1: int, k2: int) -> Tuple[float, float]:
    n = len(view)
    if not _check_ranks(n, k1, k2):
        raise RuntimeError(f"Lemma 5.1 violated: n={n}, k1={k1}, k2={k2}")

    if n == 2:
        return _select_trivial(view, k1), _select_trivial(view, k2)

    if n % 2 == 0:
        k1_dash = n + 1 + (k1 + 3) // 4
    else:
        # ceil((k1 + 2n + 1) / 4)
        k1_dash = (2 * n + k1) // 4 + 1
    k2_dash = (k2 + 3) // 4

    max_candidate, min_candidate = _select_pair(view.doubled(), k1_dash, k2_dash)
    if not min_candidate <= max_candidate:
        raise RuntimeError(f"Candidates out of order: {min_candidate} > {max_candidate}")

    rank_max = count_less(view.base, view.step, max_candidate)
    rank_min = count_greater(view.base, view.step, min_candidate)
    candidates = LazyCandidateList(view, min_candidate, max_candidate)

    return (
        _resolve(k1, view, max_candidate, min_candidate, rank_max, rank_min, candidates),
        _resolve(k2, view, max_candidate, min_candidate, rank_max, rank_min, candidates),
    )


def _resolve(k: int,
             view: StrideView,
             max_candidate: float,
             min_candidate: float,
             rank_max: int,
             rank_min: int,
             candidates: LazyCandidateList) -> float:
    n = len(view)
    if rank_max < k:
        return max_candidate
    if k + rank_min <= n * n:
        return min_candidate
    # strictly between the candidates: entries <= min_candidate come first
    first_build = not candidates.is_built
    between = candidates.build()
    if first_build:
        get_logger().debug("candidate list: n=%d step=%d size=%d",
                           n, view.step, between.shape[0])
    return select_nth(between, k + rank_min - n * n - 1)


def _select_trivial(view: StrideView, k: int) -> float:
    """Rank ``k`` in the 2x2 matrix ``[[0, a - b], [b - a, 0]]`` with ``a <= b``."""
    first, second = view[0], view[1]
    if k == 1:
        return first - second
    if k in (2, 3):
        return first - first
    if k == 4:
        return second - first
    raise ValueError(f"Should be: 1 <= k <= 4, got k={k}")


__all__ = ["select", "select_nth", "select_pair"]
