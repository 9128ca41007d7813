import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_array_almost_equal

from qnrollstat import rolling_qn

# --- Test Parameters ---
WINDOW_SIZES_FOR_QN_TEST = [2, 5, 9, 16]

INPUT_DATA_LIST = [
    -1.0, 0.0, 5.0, -7.0, 10.0, -4.0, 22.0, 4.0, 71.0, 10004.0, -0.0001,
    10.0, 20.0, 5.0, 15.0, 25.0,  8.0, 12.0, 30.0, 22.0, 18.0,
    3.0, 7.0, 28.0, 19.0, 2.0, 25.0, 10.0, 17.0, 9.0, 11.0
]
INPUT_DATA_NP = np.array(INPUT_DATA_LIST, dtype=np.float64)


def brute_qn(window: np.ndarray, corrected: bool = True) -> float:
    """Qn from the sorted full difference matrix."""
    n = len(window)
    h = n // 2 + 1
    k = h * (h - 1) // 2 + n + n * (n - 1) // 2
    statistic = np.sort(np.subtract.outer(window, window).ravel())[k - 1]
    if not corrected:
        return statistic
    if n % 2:
        d_n = 1.0 - 1.594 / n + 3.22 / n ** 2
    else:
        d_n = 1.0 - 3.672 / n + 11.087 / n ** 2
    return 2.2191444659851 * d_n * statistic


@pytest.mark.parametrize("window_size", WINDOW_SIZES_FOR_QN_TEST)
@pytest.mark.parametrize("raw", [False, True])
def test_rolling_qn_matches_pandas(window_size: int, raw: bool):
    # 1. Arrange
    expected = (
        pd.Series(INPUT_DATA_NP)
        .rolling(window_size, min_periods=1)
        .apply(lambda w: brute_qn(w, corrected=not raw), raw=True)
        .to_numpy()
    )

    # 2. Act
    actual = rolling_qn(INPUT_DATA_NP, window_size, raw=raw)

    # 3. Assert
    assert_array_almost_equal(actual, expected, decimal=9,
                              err_msg=f"rolling Qn mismatch for window_size={window_size}, raw={raw}")


def test_rolling_qn_random_walk():
    np.random.seed(42)
    data = np.cumsum(np.random.randn(400))
    window_size = 50
    actual = rolling_qn(data, window_size, raw=True)
    for i in range(0, len(data), 37):
        window = data[max(0, i - window_size + 1): i + 1]
        assert actual[i] == brute_qn(window, corrected=False)


def test_rolling_qn_empty_input():
    assert rolling_qn(np.array([], dtype=np.float64), 5).shape == (0,)


def test_rolling_qn_rejects_bad_window():
    with pytest.raises(ValueError):
        rolling_qn(INPUT_DATA_NP, 0)
