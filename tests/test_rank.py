import numpy as np
import pytest

from qnrollstat import count_greater, count_less


def brute_matrix(sorted_values: np.ndarray) -> np.ndarray:
    return np.subtract.outer(sorted_values, sorted_values).ravel()


@pytest.mark.parametrize("window, pivot, expected", [
    # 0, -1
    # 1,  0
    ([1, 2], -2, 4),
    ([1, 2], -1, 3),
    ([1, 2], 0, 1),
    ([1, 2], 1, 0),
    # 0, -1, -1
    # 1,  0,  0
    # 1,  0,  0
    ([1, 2, 2], -2, 9),
    ([1, 2, 2], -1, 7),
    ([1, 2, 2], 0, 2),
    ([1, 2, 2], 1, 0),
    # 0, -1, -2
    # 1,  0, -1
    # 2,  1,  0
    ([1, 2, 3], -3, 9),
    ([1, 2, 3], -2, 8),
    ([1, 2, 3], -1, 6),
    ([1, 2, 3], 0, 3),
    ([1, 2, 3], 1, 1),
    ([1, 2, 3], 2, 0),
])
def test_count_greater_small(window: list, pivot: float, expected: int):
    assert count_greater(np.array(window, dtype=np.float64), 1, pivot) == expected


def test_count_less_small():
    window = np.array([1, 2, 3], dtype=np.float64)
    assert count_less(window, 1, -2) == 0
    assert count_less(window, 1, -1) == 1
    assert count_less(window, 1, 0) == 3
    assert count_less(window, 1, 2) == 8
    assert count_less(window, 1, 3) == 9


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("n", [2, 5, 12, 31])
def test_rank_partition(seed: int, n: int):
    rng = np.random.default_rng(seed)
    # small integer range to force plenty of ties
    window = np.sort(rng.integers(0, 8, size=n).astype(np.float64))
    entries = brute_matrix(window)
    for pivot in np.concatenate([np.unique(entries), [-100.0, 0.5, 100.0]]):
        greater = count_greater(window, 1, pivot)
        less = count_less(window, 1, pivot)
        equal = int(np.count_nonzero(entries == pivot))
        assert greater == np.count_nonzero(entries > pivot)
        assert less == np.count_nonzero(entries < pivot)
        assert greater + equal + less == n * n


@pytest.mark.parametrize("step", [2, 3, 4])
def test_rank_on_stride_view(step: int):
    rng = np.random.default_rng(7)
    window = np.sort(rng.normal(size=23))
    positions = sorted(set(list(range(0, 23, step)) + [22]))
    sub = window[positions]
    entries = brute_matrix(sub)
    for pivot in entries[::5]:
        assert count_greater(window, step, pivot) == np.count_nonzero(entries > pivot)
        assert count_less(window, step, pivot) == np.count_nonzero(entries < pivot)
