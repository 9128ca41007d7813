from .candidates import LazyCandidateList, pick_between
from .estimator import QnScaleEstimator, get_qn, get_qn_raw, init_rolling_qn, rolling_qn
from .median import EvenMedian, OddMedian, RawMedian, raw_median
from .rank import count_greater, count_less
from .scale import QN_CONSISTENCY_FACTOR, ScaleEstimate, corrected_scale, qn_rank
from .select import select, select_nth, select_pair
from .stride import StrideView, stride_len, stride_pos
from .window import clear_window, init_window, push_value, sorted_view, window_values

__version__ = "0.1.0"
