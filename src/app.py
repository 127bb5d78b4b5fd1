import logging
import uuid
from dataclasses import replace
from datetime import datetime

import streamlit as st
import pandas as pd
import plotly.express as px

from streamlit_calendar import calendar

from compass.models import UserPrefs, BusyInterval, Task
from compass.scheduler import suggest_schedule, suggestions_to_frame, apply_suggestions
from compass.metrics import get_metrics
from compass.validation import SchedulingInputError


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SUGGEST_TIME, SUGGEST_COUNTER = get_metrics()


def datetime_input(label: str, key: str):
    """
    Date + time picker pair.
    Returns a naive datetime (no timezone).
    """
    col_date, col_time = st.columns(2)
    with col_date:
        d = st.date_input(label + " date", key=key + "_date")
    with col_time:
        t = st.time_input(label + " time", key=key + "_time")
    return datetime.combine(d, t)


# Session State Setup
if "prefs" not in st.session_state:
    st.session_state.prefs = UserPrefs()

if "busy" not in st.session_state:
    st.session_state.busy = []          # list[BusyInterval]

if "tasks" not in st.session_state:
    st.session_state.tasks = []         # list[Task]

if "suggestions" not in st.session_state:
    st.session_state.suggestions = []   # list[SchedulingSuggestion]


# Sidebar: Inputs
st.sidebar.title("Compass")

# Add Busy Interval
st.sidebar.subheader("Add Calendar Block")
with st.sidebar.form("busy_form"):
    b_label = st.text_input("Label", key="b_label")
    b_start = datetime_input("Start", key="b_start")
    b_end = datetime_input("End", key="b_end")
    add_busy = st.form_submit_button("Add Block")
    if add_busy:
        if b_end > b_start:
            TZ = st.session_state.prefs.tz
            st.session_state.busy.append(
                BusyInterval(
                    label=b_label,
                    start=pd.Timestamp(b_start).tz_localize(TZ),
                    end=pd.Timestamp(b_end).tz_localize(TZ),
                )
            )
        else:
            st.sidebar.error("Please ensure end > start")

# Add Task
st.sidebar.subheader("Add Task")
with st.sidebar.form("task_form"):
    t_title = st.text_input("Task title", key="t_title")
    t_dur = st.number_input("Duration (minutes)", min_value=15, max_value=480, step=15, value=60)
    add_task = st.form_submit_button("Add Task")
    if add_task:
        if t_title:
            st.session_state.tasks.append(
                Task(id=str(uuid.uuid4()), title=t_title, duration_minutes=int(t_dur))
            )
        else:
            st.sidebar.error("Please enter a task title.")


# Main: To-do list
st.title("Today")

col1, col2 = st.columns(2)
with col1:
    st.markdown("### Calendar Blocks")
    if st.session_state.busy:
        st.dataframe(pd.DataFrame([{
            "label": b.label,
            "start": b.start,
            "end": b.end,
        } for b in st.session_state.busy]))
    else:
        st.write("No calendar blocks yet.")

with col2:
    st.markdown("### To-do")
    if st.session_state.tasks:
        updated = []
        for t in st.session_state.tasks:
            done = st.checkbox(f"{t.title} ({t.duration_minutes} min)",
                               value=t.completed, key=f"done_{t.id}")
            if done != t.completed:
                t = replace(t, completed=done)
            updated.append(t)
        st.session_state.tasks = updated
    else:
        st.write("No tasks yet.")


if st.button("Suggest Schedule"):
    now = pd.Timestamp.now(tz=st.session_state.prefs.tz).floor("min")
    # Hand the engine snapshots, not the live session lists
    tasks = list(st.session_state.tasks)
    busy = list(st.session_state.busy)

    try:
        with SUGGEST_TIME.time():
            suggestions = suggest_schedule(tasks, busy, now)
    except SchedulingInputError as e:
        logger.warning("rejected suggestion request: %s", e)
        st.error(str(e))
    else:
        open_count = sum(1 for t in tasks if not t.completed)
        SUGGEST_COUNTER.labels(outcome="placed").inc(len(suggestions))
        SUGGEST_COUNTER.labels(outcome="omitted").inc(open_count - len(suggestions))
        st.session_state.suggestions = suggestions


# Calendar view with FullCalendar
if st.session_state.suggestions:
    st.markdown("## Suggested Blocks")

    suggested_df = suggestions_to_frame(st.session_state.suggestions)
    st.dataframe(suggested_df)

    events = []
    for _, row in suggested_df.iterrows():
        events.append({
            "title": row["title"],
            "start": pd.Timestamp(row["start"]).isoformat(),
            "end": pd.Timestamp(row["end"]).isoformat(),
            "id": row["id"],
            "color": "#1f77b4",  # blue
        })

    for i, b in enumerate(st.session_state.busy):
        events.append({
            "title": b.label or "Busy",
            "start": b.start.isoformat(),
            "end": b.end.isoformat(),
            "id": f"busy{i}",
            "color": "#7f7f7f",  # grey
        })

    cal_options = {
        "initialView": "timeGridWeek",
        "slotMinTime": "06:00:00",
        "slotMaxTime": "23:00:00",
        "allDaySlot": False,
        "nowIndicator": True,
        "weekNumbers": False,
        "firstDay": 1,  # Monday
    }

    calendar(events=events, options=cal_options, key="calendar")

    st.markdown("### Timeline")
    fig = px.timeline(suggested_df, x_start="start", x_end="end", y="title")
    fig.update_yaxes(autorange="reversed")
    st.plotly_chart(fig, use_container_width=True)

    if st.button("Accept suggestions"):
        st.session_state.tasks = apply_suggestions(
            st.session_state.tasks, st.session_state.suggestions
        )
        st.session_state.suggestions = []
        st.success("Suggested start times saved to your tasks.")
else:
    st.info("Add some tasks and click **Suggest Schedule** to see proposals.")
