# compass/validation.py
"""
Boundary checks for engine inputs.

Malformed input fails fast with a ValueError subclass; the engine itself
never raises for an unplaceable task.
"""
import numbers
from datetime import datetime
from typing import Iterable

import numpy as np
import pandas as pd

from .models import Task, BusyInterval


class SchedulingInputError(ValueError):
    """Base error for malformed engine input."""


class InvalidTaskError(SchedulingInputError):
    pass


class InvalidIntervalError(SchedulingInputError):
    pass


def _is_tz_aware(ts) -> bool:
    return isinstance(ts, datetime) and ts.tzinfo is not None


def validate_now(now) -> pd.Timestamp:
    if not _is_tz_aware(now):
        raise SchedulingInputError("now must be timezone-aware")
    return pd.Timestamp(now)


def validate_task(task: Task) -> None:
    if not isinstance(task, Task):
        raise InvalidTaskError(f"expected Task, got {type(task).__name__}")
    if not isinstance(task.id, str) or not task.id:
        raise InvalidTaskError("task id must be a non-empty string")

    dur = task.duration_minutes
    # bools are Integral too; True minutes is never meant
    if isinstance(dur, (bool, np.bool_)) or not isinstance(dur, numbers.Integral):
        raise InvalidTaskError(f"task {task.id}: duration_minutes must be an integer")
    if dur <= 0:
        raise InvalidTaskError(
            f"task {task.id}: duration_minutes must be positive (got {dur})"
        )

    if task.scheduled_start is not None and not _is_tz_aware(task.scheduled_start):
        raise InvalidTaskError(f"task {task.id}: scheduled_start must be timezone-aware")


def validate_busy_interval(interval: BusyInterval) -> None:
    if not isinstance(interval, BusyInterval):
        raise InvalidIntervalError(
            f"expected BusyInterval, got {type(interval).__name__}"
        )
    if not (_is_tz_aware(interval.start) and _is_tz_aware(interval.end)):
        raise InvalidIntervalError("busy interval endpoints must be timezone-aware")
    if interval.end < interval.start:
        raise InvalidIntervalError(
            f"busy interval ends before it starts ({interval.start} > {interval.end})"
        )


def validate_tasks(tasks: Iterable[Task]) -> None:
    """Completed tasks are never scheduled, so only their type is checked."""
    for t in tasks:
        if isinstance(t, Task) and t.completed:
            continue
        validate_task(t)


def validate_busy_intervals(intervals: Iterable[BusyInterval]) -> None:
    for iv in intervals:
        validate_busy_interval(iv)
