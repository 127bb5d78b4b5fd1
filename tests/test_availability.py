"""
Tests for AvailabilityModel: half-open intersection over busy intervals.
"""

import pandas as pd
import pytest

from compass.availability import AvailabilityModel
from compass.models import BusyInterval
from compass.validation import InvalidIntervalError

from conftest import at


def block(start: str, end: str) -> BusyInterval:
    return BusyInterval(start=at(start), end=at(end))


class TestIsFree:

    def test_no_busy_intervals_is_free(self):
        model = AvailabilityModel([])
        assert model.is_free(at("09:00"), at("10:00")) is True
        assert len(model) == 0

    def test_exact_overlap_is_busy(self):
        model = AvailabilityModel([block("09:00", "10:00")])
        assert model.is_free(at("09:00"), at("10:00")) is False

    def test_partial_overlap_is_busy(self):
        model = AvailabilityModel([block("09:00", "10:00")])
        assert model.is_free(at("09:45"), at("10:45")) is False
        assert model.is_free(at("08:30"), at("09:15")) is False

    def test_touching_end_is_free(self):
        # [09:00,10:00) and [10:00,11:00) share no instant
        model = AvailabilityModel([block("09:00", "10:00")])
        assert model.is_free(at("10:00"), at("11:00")) is True
        assert model.is_free(at("08:00"), at("09:00")) is True

    def test_candidate_containing_busy_is_busy(self):
        model = AvailabilityModel([block("09:15", "09:30")])
        assert model.is_free(at("09:00"), at("10:00")) is False

    def test_zero_length_candidate_always_free(self):
        model = AvailabilityModel([block("09:00", "10:00")])
        assert model.is_free(at("09:30"), at("09:30")) is True

    def test_zero_length_busy_blocks_containing_candidate(self):
        model = AvailabilityModel([block("09:30", "09:30")])
        assert model.is_free(at("09:00"), at("10:00")) is False

    def test_zero_length_busy_at_candidate_start_is_free(self):
        model = AvailabilityModel([block("09:30", "09:30")])
        assert model.is_free(at("09:30"), at("10:30")) is True


class TestInputTolerance:

    def test_unsorted_and_overlapping_intervals(self):
        model = AvailabilityModel([
            block("14:00", "15:00"),
            block("09:00", "11:00"),
            block("10:00", "12:00"),
            block("09:00", "11:00"),  # duplicate
        ])
        assert len(model) == 4
        assert model.is_free(at("11:30"), at("12:30")) is False
        assert model.is_free(at("12:00"), at("14:00")) is True
        assert model.is_free(at("13:30"), at("14:30")) is False

    def test_mixed_time_zones_compare_by_instant(self):
        utc_block = BusyInterval(
            start=pd.Timestamp("2025-11-03 14:00", tz="UTC"),
            end=pd.Timestamp("2025-11-03 15:00", tz="UTC"),
        )
        model = AvailabilityModel([utc_block])
        # 14:00 UTC is 09:00 in New York on this date
        assert model.is_free(at("09:00"), at("10:00")) is False
        assert model.is_free(at("10:00"), at("11:00")) is True

    def test_source_list_not_retained(self):
        intervals = [block("09:00", "10:00")]
        model = AvailabilityModel(intervals)
        intervals.append(block("10:00", "11:00"))
        assert model.is_free(at("10:00"), at("11:00")) is True


class TestMalformed:

    def test_inverted_interval_rejected(self):
        with pytest.raises(InvalidIntervalError):
            AvailabilityModel([block("10:00", "09:00")])

    def test_naive_interval_rejected(self):
        naive = BusyInterval(
            start=pd.Timestamp("2025-11-03 09:00"),
            end=pd.Timestamp("2025-11-03 10:00"),
        )
        with pytest.raises(InvalidIntervalError):
            AvailabilityModel([naive])
