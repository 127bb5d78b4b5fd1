# compass/metrics.py
from typing import Tuple

import streamlit as st
from prometheus_client import start_http_server, Summary, Counter

METRICS_PORT = 8000


@st.cache_resource
def get_metrics() -> Tuple[Summary, Counter]:
    """
    Suggestion timing and outcome counters, plus the scrape endpoint.

    Cached per process: Streamlit reruns the app script for every session,
    and Prometheus refuses to register the same metric name twice.
    """
    suggest_time = Summary(
        "suggestion_generation_seconds",
        "Time spent computing schedule suggestions",
    )
    suggest_counter = Counter(
        "suggested_tasks_total",
        "Unfinished tasks seen by the suggestion engine, by outcome",
        ["outcome"],  # placed | omitted
    )
    start_http_server(METRICS_PORT)
    return suggest_time, suggest_counter
