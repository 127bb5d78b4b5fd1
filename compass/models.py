# compass/models.py
from dataclasses import dataclass
from typing import Optional

import pandas as pd


@dataclass
class UserPrefs:
    tz: str = "America/New_York"   # used to localize naive input times


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    duration_minutes: int = 60
    completed: bool = False
    scheduled_start: Optional[pd.Timestamp] = None  # tz-aware or None
    goal_id: Optional[str] = None

    @property
    def duration(self) -> pd.Timedelta:
        return pd.Timedelta(minutes=self.duration_minutes)

    @property
    def scheduled_end(self) -> Optional[pd.Timestamp]:
        if self.scheduled_start is None:
            return None
        return self.scheduled_start + self.duration


@dataclass(frozen=True)
class BusyInterval:
    start: pd.Timestamp  # tz-aware, inclusive
    end: pd.Timestamp    # tz-aware, exclusive
    label: str = ""


@dataclass(frozen=True)
class SchedulingSuggestion:
    task: Task
    proposed_start: pd.Timestamp
    reason: str

    @property
    def task_id(self) -> str:
        return self.task.id

    @property
    def proposed_end(self) -> pd.Timestamp:
        return self.proposed_start + self.task.duration
