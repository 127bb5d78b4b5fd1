# compass/strategy.py
from typing import Protocol

import pandas as pd

from .models import Task


NEXT_FREE_BLOCK_REASON = "next available free block"


class WindowStrategy(Protocol):
    """
    Decides whether a free candidate window is acceptable for a task.

    Only consulted for windows the availability model already reported free.
    The reason string is attached to every suggestion the strategy accepts.
    """

    reason: str

    def accepts(self, task: Task, start: pd.Timestamp, end: pd.Timestamp) -> bool:
        ...


class FirstFreeBlock:
    """Take the first free window, whatever it looks like."""

    reason = NEXT_FREE_BLOCK_REASON

    def accepts(self, task: Task, start: pd.Timestamp, end: pd.Timestamp) -> bool:
        return True
