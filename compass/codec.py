# compass/codec.py
"""
JSON request/response shape for serving the engine over the wire.

Request:
    {"now": "2025-11-03T09:00:00-05:00",
     "tasks": [{"id", "title", "durationMinutes", "completed",
                "scheduledStart", "goalId"}, ...],
     "busyIntervals": [{"start", "end", "label"}, ...]}

Response:
    {"suggestions": [{"taskId", "title", "proposedStart",
                      "proposedEnd", "reason"}, ...]}

Naive timestamps are read in the user's time zone (UserPrefs.tz).
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from .models import UserPrefs, Task, BusyInterval, SchedulingSuggestion
from .scheduler import suggest_schedule
from .validation import SchedulingInputError


@dataclass(frozen=True)
class ScheduleRequest:
    tasks: List[Task]
    busy_intervals: List[BusyInterval]
    now: pd.Timestamp


def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(obj, dict):
        raise SchedulingInputError(f"{where}: expected an object")
    value = obj.get(key)
    if value is None:
        raise SchedulingInputError(f"{where}: missing '{key}'")
    return value


def _parse_ts(value: Any, prefs: UserPrefs, where: str) -> pd.Timestamp:
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise SchedulingInputError(f"{where}: bad timestamp {value!r}") from e
    if ts is pd.NaT:
        raise SchedulingInputError(f"{where}: bad timestamp {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize(prefs.tz)
    return ts


def _iso(ts: pd.Timestamp) -> str:
    return pd.Timestamp(ts).isoformat()


def task_from_dict(d: Dict[str, Any], prefs: UserPrefs) -> Task:
    task_id = str(_require(d, "id", "task"))
    where = f"task {task_id}"

    completed = d.get("completed", False)
    if not isinstance(completed, bool):
        raise SchedulingInputError(f"{where}: 'completed' must be true or false")

    scheduled = d.get("scheduledStart")
    goal_id = d.get("goalId")
    return Task(
        id=task_id,
        title=str(d.get("title") or ""),
        duration_minutes=d.get("durationMinutes", 60),
        completed=completed,
        scheduled_start=_parse_ts(scheduled, prefs, where) if scheduled else None,
        goal_id=str(goal_id) if goal_id is not None else None,
    )


def interval_from_dict(d: Dict[str, Any], prefs: UserPrefs) -> BusyInterval:
    return BusyInterval(
        start=_parse_ts(_require(d, "start", "busy interval"), prefs, "busy interval"),
        end=_parse_ts(_require(d, "end", "busy interval"), prefs, "busy interval"),
        label=str(d.get("label") or ""),
    )


def parse_request(payload: Dict[str, Any], prefs: Optional[UserPrefs] = None) -> ScheduleRequest:
    prefs = prefs or UserPrefs()
    now = _parse_ts(_require(payload, "now", "request"), prefs, "now")

    tasks = payload.get("tasks") or []
    busy = payload.get("busyIntervals") or []
    if not isinstance(tasks, list) or not isinstance(busy, list):
        raise SchedulingInputError("request: 'tasks' and 'busyIntervals' must be lists")

    return ScheduleRequest(
        tasks=[task_from_dict(t, prefs) for t in tasks],
        busy_intervals=[interval_from_dict(b, prefs) for b in busy],
        now=now,
    )


def suggestion_to_dict(s: SchedulingSuggestion) -> Dict[str, Any]:
    return {
        "taskId": s.task_id,
        "title": s.task.title,
        "proposedStart": _iso(s.proposed_start),
        "proposedEnd": _iso(s.proposed_end),
        "reason": s.reason,
    }


def handle_request(payload: Dict[str, Any], prefs: Optional[UserPrefs] = None) -> Dict[str, Any]:
    req = parse_request(payload, prefs)
    suggestions = suggest_schedule(req.tasks, req.busy_intervals, req.now)
    return {"suggestions": [suggestion_to_dict(s) for s in suggestions]}


def handle_request_json(text: str, prefs: Optional[UserPrefs] = None) -> str:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchedulingInputError(f"request is not valid JSON: {e}") from e
    return json.dumps(handle_request(payload, prefs))
