# demo.py
import logging

import pandas as pd
import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from compass.models import UserPrefs, BusyInterval, Task
from compass.scheduler import suggest_schedule, suggestions_to_frame


def _days(delta: pd.Timedelta) -> float:
    return delta / pd.Timedelta(days=1)


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    prefs = UserPrefs(tz="America/New_York")
    TZ = prefs.tz

    now = pd.Timestamp("2025-11-03 09:00").tz_localize(TZ)

    busy = [
        BusyInterval(
            label="Standup",
            start=pd.Timestamp("2025-11-03 09:00").tz_localize(TZ),
            end=pd.Timestamp("2025-11-03 09:30").tz_localize(TZ),
        ),
        BusyInterval(
            label="OS Class",
            start=pd.Timestamp("2025-11-03 12:50").tz_localize(TZ),
            end=pd.Timestamp("2025-11-03 14:45").tz_localize(TZ),
        ),
        BusyInterval(
            label="Team Sync",
            start=pd.Timestamp("2025-11-03 11:00").tz_localize(TZ),
            end=pd.Timestamp("2025-11-03 11:30").tz_localize(TZ),
        ),
    ]

    tasks = [
        Task(id="doc", title="Deep work: write strategy doc", duration_minutes=90),
        Task(id="goals", title="Review long-term goals", duration_minutes=45),
        Task(id="inbox", title="Process inbox", duration_minutes=30, completed=True),
        Task(id="code", title="Deep work block: coding", duration_minutes=120),
    ]

    suggestions = suggest_schedule(tasks, busy, now)
    suggested_df = suggestions_to_frame(suggestions)

    print("=== Suggestions ===")
    print(suggested_df)

    # Plot busy vs suggested blocks
    plt.figure(figsize=(10, 3))
    for iv in busy:
        plt.barh("busy", _days(iv.end - iv.start),
                 left=mdates.date2num(iv.start), color="#7f7f7f")
    for _, row in suggested_df.iterrows():
        plt.barh("suggested", _days(row["end"] - row["start"]),
                 left=mdates.date2num(row["start"]), color="#1f77b4")
        plt.text(mdates.date2num(row["start"]), "suggested", row["title"],
                 fontsize=7, va="center")
    plt.gca().xaxis_date(TZ)
    plt.title("Suggested Schedule")
    plt.xlabel("Time")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
