"""Sample median of the sorted window, kept as its one or two middle values."""
from dataclasses import dataclass
from typing import Optional, Union

from .nbtypes import PY_FLOAT_ARRAY


@dataclass(frozen=True)
class OddMedian:
    value: float


@dataclass(frozen=True)
class EvenMedian:
    low: float
    high: float


RawMedian = Union[OddMedian, EvenMedian]


def raw_median(sorted_values: PY_FLOAT_ARRAY) -> Optional[RawMedian]:
    n = len(sorted_values)
    if n == 0:
        return None
    half = n // 2
    if n & 1:
        return OddMedian(sorted_values[half])
    return EvenMedian(sorted_values[half - 1], sorted_values[half])


__all__ = ["EvenMedian", "OddMedian", "RawMedian", "raw_median"]
