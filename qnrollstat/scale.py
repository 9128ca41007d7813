"""Raw Qn estimate and its finite-sample normalization."""
from dataclasses import dataclass
from typing import Optional

# Consistency factor for the normal distribution (Rousseeuw & Croux, 1993)
QN_CONSISTENCY_FACTOR = 2.2191444659851

# Finite-sample correction d_n = 1 - a / n + b / n**2
DN_ODD_COEFFICIENTS = (1.594, 3.22)
DN_EVEN_COEFFICIENTS = (3.672, 11.087)


@dataclass(frozen=True)
class ScaleEstimate:
    n_samples: int  # window length the statistic was computed on
    statistic: float  # raw order statistic, not normalized

    def normalization_constant(self) -> float:
        n = float(self.n_samples)
        a, b = DN_ODD_COEFFICIENTS if self.n_samples & 1 else DN_EVEN_COEFFICIENTS
        return QN_CONSISTENCY_FACTOR * (1.0 - a / n + b / (n * n))

    def __float__(self) -> float:
        return self.normalization_constant() * float(self.statistic)


def corrected_scale(estimate: Optional[ScaleEstimate]) -> Optional[float]:
    """Scale estimate: the raw statistic times the normalization constant.

    ``None`` (an empty window) passes through unchanged.
    """
    if estimate is None:
        return None
    return float(estimate)


def qn_rank(n: int) -> int:
    """1-based rank of the Qn statistic in the full signed difference matrix.

    The classical Qn takes the ``h(h-1)/2``-th smallest of ``|x_i - x_j|``,
    ``i < j``, with ``h = n // 2 + 1``. In the signed n x n matrix those
    differences sit above the ``n(n-1)/2`` negative ones and the ``n`` zeros
    of the diagonal.
    """
    h = n // 2 + 1
    return h * (h - 1) // 2 + n + n * (n - 1) // 2


__all__ = [
    "DN_EVEN_COEFFICIENTS",
    "DN_ODD_COEFFICIENTS",
    "QN_CONSISTENCY_FACTOR",
    "ScaleEstimate",
    "corrected_scale",
    "qn_rank",
]
