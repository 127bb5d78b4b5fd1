"""
Test configuration: repo root on sys.path plus shared time fixtures.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

TZ = "America/New_York"


def at(hhmm: str, day: str = "2025-11-03") -> pd.Timestamp:
    """Tz-aware timestamp on the test day."""
    return pd.Timestamp(f"{day} {hhmm}").tz_localize(TZ)


@pytest.fixture
def now():
    return at("09:00")
