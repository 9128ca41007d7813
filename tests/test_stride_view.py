import math

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from qnrollstat import StrideView, stride_len, stride_pos

WINDOW_16 = np.arange(1, 17, dtype=np.float64)


@pytest.mark.parametrize("n", [1, 2, 3, 7, 16, 33])
@pytest.mark.parametrize("step", [1, 2, 3, 4, 100])
def test_stride_len_law(n: int, step: int):
    view = StrideView(np.arange(n, dtype=np.float64), step)
    expected_len = 1 + math.ceil((n - 1) / step)
    assert stride_len(n, step) == expected_len
    assert len(view) == expected_len
    items = view.to_array()
    assert len(items) == expected_len
    assert items[0] == 0
    assert items[-1] == n - 1


def test_stride_len_empty():
    assert stride_len(0, 2) == 0


@pytest.mark.parametrize("step, expected", [
    (2, [1, 3, 5, 7, 9, 11, 13, 15, 16]),
    (3, [1, 4, 7, 10, 13, 16]),
    (4, [1, 5, 9, 13, 16]),
    (100, [1, 16]),
])
def test_stride_view_items(step: int, expected: list):
    assert_array_equal(StrideView(WINDOW_16, step).to_array(), expected)


def test_doubled_matches_stride_of_stride():
    # 1 3 5 7 9 11 13 15 16 -> 1 5 9 13 16
    view = StrideView(WINDOW_16, 2)
    nested = StrideView(view.to_array(), 2)
    assert_array_equal(view.doubled().to_array(), nested.to_array())
    assert view.doubled().step == 4


def test_single_element_view():
    view = StrideView(np.array([1.0]), 2)
    assert len(view) == 1
    assert view.to_array().tolist() == [1.0]


def test_view_is_retraversable():
    view = StrideView(WINDOW_16, 3)
    assert list(view) == list(view)


def test_view_indexing():
    view = StrideView(WINDOW_16, 3)
    assert view[0] == 1
    assert view[-1] == 16
    assert view[2] == WINDOW_16[stride_pos(16, 3, 2)] == 7
    with pytest.raises(IndexError):
        view[len(view)]


def test_view_rejects_bad_step():
    with pytest.raises(ValueError):
        StrideView(WINDOW_16, 0)
