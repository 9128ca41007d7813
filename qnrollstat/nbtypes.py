import numpy as np
import numpy.typing as npt
from numba import float64, int64, types, void

# =============================================================================
# Numba types used in @njit signatures
# =============================================================================
NB_VOID = void
NB_INT64 = int64
NB_FLOAT64 = float64
NB_FLOAT64_ARRAY = float64[:]
NB_INT64_ARRAY = int64[:]
NB_BOOL = types.boolean

# =============================================================================
# Python-side aliases for annotations
# =============================================================================
PY_INT = int
PY_FLOAT = float
PY_FLOAT_ARRAY = npt.NDArray[np.float64]
PY_INT_ARRAY = npt.NDArray[np.int64]
