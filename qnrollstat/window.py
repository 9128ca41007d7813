import math
import numpy as np
from numba import njit, types
import numpy.typing as npt
from typing import Tuple, TypeAlias

from .nbtypes import (NB_FLOAT64, NB_FLOAT64_ARRAY, NB_INT64, NB_INT64_ARRAY, NB_VOID,
                      PY_FLOAT, PY_FLOAT_ARRAY, PY_INT)

# Python-compatible type for the state bundle
PyWindowStateType: TypeAlias = Tuple[
    npt.NDArray[np.float64],    # cyclic_window_values
    npt.NDArray[np.float64],    # sorted_window_values
    npt.NDArray[np.int64]       # _state_arr
]

# =============================================================================
# Constants for _state array indices
# =============================================================================
IDX_STATE_HEAD = 0
IDX_STATE_TAIL = 1
IDX_STATE_FILL_SIZE = 2
IDX_STATE_K_WINDOW_SIZE = 3
STATE_LEN = 4

# =============================================================================
# Numba type for the state bundle
# =============================================================================
STATE_BUNDLE_TYPE = types.Tuple((
    NB_FLOAT64_ARRAY,           # cyclic_window_values
    NB_FLOAT64_ARRAY,           # sorted_window_values
    NB_INT64_ARRAY              # _state_arr
))

# =============================================================================
# Sorted buffer maintenance
# =============================================================================

@njit(NB_VOID(NB_FLOAT64_ARRAY, NB_INT64, NB_FLOAT64), boundscheck=False, cache=True)
def _insert_sorted(sorted_window_values: PY_FLOAT_ARRAY,
                   fill_size: PY_INT,
                   value_to_add: PY_FLOAT) -> None:
    # first position whose value is not < value_to_add
    lo = 0
    hi = fill_size
    while lo < hi:
        mid = (lo + hi) >> 1
        if sorted_window_values[mid] < value_to_add:
            lo = mid + 1
        else:
            hi = mid
    for i in range(fill_size, lo, -1):
        sorted_window_values[i] = sorted_window_values[i - 1]
    sorted_window_values[lo] = value_to_add


@njit(NB_VOID(NB_FLOAT64_ARRAY, NB_INT64, NB_FLOAT64), boundscheck=False, cache=True)
def _remove_sorted(sorted_window_values: PY_FLOAT_ARRAY,
                   fill_size: PY_INT,
                   value_to_remove: PY_FLOAT) -> None:
    # last position whose value is <= value_to_remove
    lo = 0
    hi = fill_size
    while lo < hi:
        mid = (lo + hi) >> 1
        if sorted_window_values[mid] <= value_to_remove:
            lo = mid + 1
        else:
            hi = mid
    idx_to_remove = lo - 1
    if idx_to_remove < 0 or sorted_window_values[idx_to_remove] != value_to_remove:
        raise RuntimeError('Evicted value is missing from the sorted window')
    for i in range(idx_to_remove, fill_size - 1):
        sorted_window_values[i] = sorted_window_values[i + 1]


# =============================================================================
# State bundle operations
# =============================================================================

@njit(STATE_BUNDLE_TYPE(NB_INT64), cache=True)
def _init_window_numba(window_size: PY_INT) -> PyWindowStateType:
    if window_size < 1:
        raise ValueError('Should be: window_size >= 1')
    _k = np.int64(window_size)
    cyclic_window_values_local = np.zeros(_k, dtype=np.float64)
    sorted_window_values_local = np.zeros(_k, dtype=np.float64)
    _state_arr_local = np.zeros(STATE_LEN, dtype=np.int64)
    _state_arr_local[IDX_STATE_K_WINDOW_SIZE] = _k
    return (cyclic_window_values_local,
            sorted_window_values_local,
            _state_arr_local)


def init_window(window_size: int = 1000) -> PyWindowStateType:
    if window_size < 1:
        raise ValueError("Should be: window_size >= 1")
    return _init_window_numba(np.int64(window_size))


@njit(NB_VOID(STATE_BUNDLE_TYPE, NB_FLOAT64), boundscheck=False, cache=True)
def _push_value(state_tuple: PyWindowStateType, new_value: PY_FLOAT) -> None:
    cyclic_window_values, sorted_window_values, _state_arr = state_tuple
    # NaN cannot be ordered, and inf - inf is NaN
    if not math.isfinite(new_value):
        raise ValueError('Should be: finite sample value')
    k_window_size = _state_arr[IDX_STATE_K_WINDOW_SIZE]
    fill_size = _state_arr[IDX_STATE_FILL_SIZE]
    if fill_size == k_window_size:
        _oldest_slot = _state_arr[IDX_STATE_HEAD]
        _remove_sorted(sorted_window_values, fill_size, cyclic_window_values[_oldest_slot])
        _state_arr[IDX_STATE_HEAD] = (_oldest_slot + 1) % k_window_size
        fill_size -= 1
    _new_slot = _state_arr[IDX_STATE_TAIL]
    cyclic_window_values[_new_slot] = new_value
    _state_arr[IDX_STATE_TAIL] = (_new_slot + 1) % k_window_size
    _insert_sorted(sorted_window_values, fill_size, new_value)
    _state_arr[IDX_STATE_FILL_SIZE] = fill_size + 1


def push_value(state_tuple: PyWindowStateType, new_value: float) -> None:
    _push_value(state_tuple, np.float64(new_value))


@njit(NB_VOID(STATE_BUNDLE_TYPE), cache=True)
def clear_window(state_tuple: PyWindowStateType) -> None:
    _, _, _state_arr = state_tuple
    _state_arr[IDX_STATE_HEAD] = 0
    _state_arr[IDX_STATE_TAIL] = 0
    _state_arr[IDX_STATE_FILL_SIZE] = 0


def window_len(state_tuple: PyWindowStateType) -> int:
    return int(state_tuple[2][IDX_STATE_FILL_SIZE])


def window_capacity(state_tuple: PyWindowStateType) -> int:
    return int(state_tuple[2][IDX_STATE_K_WINDOW_SIZE])


def sorted_view(state_tuple: PyWindowStateType) -> PY_FLOAT_ARRAY:
    """Ascending window contents. A view into the bundle: do not mutate."""
    return state_tuple[1][:window_len(state_tuple)]


def window_values(state_tuple: PyWindowStateType) -> PY_FLOAT_ARRAY:
    """Window contents, oldest first (a copy)."""
    cyclic_window_values, _, _state_arr = state_tuple
    head = _state_arr[IDX_STATE_HEAD]
    slots = (head + np.arange(_state_arr[IDX_STATE_FILL_SIZE])) % _state_arr[IDX_STATE_K_WINDOW_SIZE]
    return cyclic_window_values[slots]
