# compass/scheduler.py
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

import pandas as pd

from .availability import AvailabilityModel
from .models import Task, BusyInterval, SchedulingSuggestion
from .strategy import WindowStrategy, FirstFreeBlock
from .validation import validate_now, validate_tasks

logger = logging.getLogger(__name__)

# Search grid. Read at call time so tests can shrink the horizon.
STEP_MINUTES = 15
HORIZON_DAYS = 7


def horizon_attempts() -> int:
    """Number of probes per task: 672 for a 7-day horizon at 15 minutes."""
    return HORIZON_DAYS * 24 * 60 // STEP_MINUTES


def _find_window(task: Task,
                 cursor: pd.Timestamp,
                 availability: AvailabilityModel,
                 strategy: WindowStrategy) -> Optional[pd.Timestamp]:
    step = pd.Timedelta(minutes=STEP_MINUTES)
    duration = task.duration

    probe = cursor
    for _ in range(horizon_attempts()):
        end = probe + duration
        if availability.is_free(probe, end) and strategy.accepts(task, probe, end):
            return probe
        probe = probe + step
    return None


def suggest_schedule(tasks: Iterable[Task],
                     busy_intervals: Iterable[BusyInterval],
                     now: pd.Timestamp,
                     strategy: Optional[WindowStrategy] = None) -> List[SchedulingSuggestion]:
    """
    Propose a start time for every unfinished task, in input order.

    Each task is placed in the first free window at or after the cursor
    (which starts at `now` and moves to the end of every placement), probing
    forward in STEP_MINUTES increments for up to HORIZON_DAYS. Tasks with no
    free window in that range are left out of the result; this is not an error.
    Completed tasks are skipped without validating their other fields.

    Raises:
        SchedulingInputError: on malformed tasks, intervals or a naive `now`.
    """
    # Own snapshots; callers may keep mutating their lists.
    tasks = list(tasks)
    busy_intervals = list(busy_intervals)

    now = validate_now(now)
    validate_tasks(tasks)
    availability = AvailabilityModel(busy_intervals)
    strategy = strategy or FirstFreeBlock()

    suggestions: List[SchedulingSuggestion] = []
    cursor = now

    for task in tasks:
        if task.completed:
            continue

        start = _find_window(task, cursor, availability, strategy)
        if start is None:
            logger.debug("no free %d-minute window for task %s within %d days of %s",
                         task.duration_minutes, task.id, HORIZON_DAYS, cursor)
            continue

        suggestions.append(SchedulingSuggestion(
            task=task,
            proposed_start=start,
            reason=strategy.reason,
        ))
        cursor = start + task.duration
        logger.debug("task %s placed at %s", task.id, start)

    logger.debug("suggested %d of %d tasks (%d busy intervals)",
                 len(suggestions), len(tasks), len(availability))
    return suggestions


def suggestions_to_frame(suggestions: List[SchedulingSuggestion]) -> pd.DataFrame:
    """
    Returns:
        dataframe with columns: id, title, start, end, reason
    """
    return pd.DataFrame([{
        "id": s.task_id,
        "title": s.task.title,
        "start": s.proposed_start,
        "end": s.proposed_end,
        "reason": s.reason,
    } for s in suggestions], columns=["id", "title", "start", "end", "reason"])


def apply_suggestions(tasks: Iterable[Task],
                      suggestions: Iterable[SchedulingSuggestion]) -> List[Task]:
    """Return copies of `tasks` with accepted suggestions written to scheduled_start."""
    starts = {s.task_id: s.proposed_start for s in suggestions}
    return [
        replace(t, scheduled_start=starts[t.id]) if t.id in starts else t
        for t in tasks
    ]
