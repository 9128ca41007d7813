"""Stride views over a sorted window.

A stride view with step ``s`` over ``n`` values keeps positions
``0, s, 2s, ...`` and always ends with position ``n - 1``, so both extremes of
the difference matrix survive every coarsening step of the selection.
"""
from typing import Iterator

import numpy as np
from numba import njit

from .nbtypes import NB_INT64, PY_FLOAT_ARRAY, PY_INT


@njit(NB_INT64(NB_INT64, NB_INT64), cache=True)
def stride_len(n: PY_INT, step: PY_INT) -> PY_INT:
    if n <= 0:
        return 0
    # first element, then every step, rounded up for the trailing element
    return 1 + (n - 1 + step - 1) // step


@njit(NB_INT64(NB_INT64, NB_INT64, NB_INT64), cache=True)
def stride_pos(n: PY_INT, step: PY_INT, index: PY_INT) -> PY_INT:
    pos = index * step
    if pos < n - 1:
        return pos
    return n - 1


class StrideView:
    """Lazy, re-traversable view of every ``step``-th element of ``base``.

    Nothing is copied: indexing maps straight into ``base``. Iterating twice
    gives the same sequence, which the rank counter and the candidate list
    rely on when they sweep the same view.
    """

    __slots__ = ("base", "step")

    def __init__(self, base: PY_FLOAT_ARRAY, step: int = 1) -> None:
        if step < 1:
            raise ValueError('Should be: step >= 1')
        self.base = base
        self.step = int(step)

    def __len__(self) -> int:
        return stride_len(len(self.base), self.step)

    def __getitem__(self, index: int) -> float:
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError('stride view index out of range')
        return self.base[stride_pos(len(self.base), self.step, index)]

    def __iter__(self) -> Iterator[float]:
        total = len(self.base)
        for index in range(len(self)):
            yield self.base[stride_pos(total, self.step, index)]

    def __repr__(self) -> str:
        return f"StrideView(len={len(self)}, step={self.step})"

    def doubled(self) -> "StrideView":
        """View of the next, twice coarser, sub-matrix over the same base."""
        return StrideView(self.base, self.step * 2)

    def to_array(self) -> PY_FLOAT_ARRAY:
        return np.array(list(self), dtype=np.float64)


__all__ = ["StrideView", "stride_len", "stride_pos"]
