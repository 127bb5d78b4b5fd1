# compass/availability.py
from typing import Iterable

import numpy as np
import pandas as pd

from .models import BusyInterval
from .validation import validate_busy_intervals


def _to_ns(ts) -> int:
    """Epoch nanoseconds (UTC) so mixed time zones compare correctly."""
    return pd.Timestamp(ts).value


class AvailabilityModel:
    """
    Read-only view over the busy intervals already on the calendar.

    Intervals are half-open [start, end) and may arrive unsorted, duplicated
    or overlapping; the free check is a plain mask over all of them.
    """

    def __init__(self, busy_intervals: Iterable[BusyInterval]):
        intervals = list(busy_intervals)
        validate_busy_intervals(intervals)

        self._starts = np.array([_to_ns(iv.start) for iv in intervals], dtype=np.int64)
        self._ends = np.array([_to_ns(iv.end) for iv in intervals], dtype=np.int64)

    def __len__(self) -> int:
        return len(self._starts)

    def is_free(self, start: pd.Timestamp, end: pd.Timestamp) -> bool:
        s, e = _to_ns(start), _to_ns(end)
        # zero-length candidates never intersect anything
        if s >= e or not len(self._starts):
            return True

        overlaps = (self._starts < e) & (s < self._ends)
        return not overlaps.any()
