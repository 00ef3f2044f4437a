"""
Unit tests for the per-day activity summary.
"""

from datetime import date, timedelta

import pytest

from services.activity_summary import ActivitySummaryService, summarize
from tests.fakes import FakeExerciseRepository
from tests.fakes.records import OTHER_USER_ID, TEST_USER_ID, make_exercise_row

DAY = date(2025, 3, 3)


@pytest.mark.unit
class TestSummarize:
    """Tests for summarize."""

    def test_aggregates_per_day(self):
        rows = [
            make_exercise_row(day=DAY, avg_sets=3, avg_reps=10, completed_reps=30),
            make_exercise_row(day=DAY, avg_sets=2, avg_reps=5, completed_reps=0),
        ]
        summary = summarize(rows)

        assert len(summary) == 1
        assert summary[0].date == DAY
        # 0.3 kcal/rep x (30 + 10) planned reps
        assert summary[0].total_calories_burnt == 12.0
        assert summary[0].completion_percent == 75.0

    def test_sorted_oldest_first(self):
        rows = [
            make_exercise_row(day=DAY),
            make_exercise_row(day=DAY - timedelta(days=2)),
        ]
        assert [s.date for s in summarize(rows)] == [DAY - timedelta(days=2), DAY]

    def test_zero_total_reps_gives_zero_percent(self):
        rows = [make_exercise_row(day=DAY, total_reps=0, completed_reps=0)]
        assert summarize(rows)[0].completion_percent == 0.0

    def test_percent_is_rounded(self):
        rows = [make_exercise_row(day=DAY, avg_sets=3, avg_reps=1, completed_reps=1)]
        assert summarize(rows)[0].completion_percent == 33.33

    def test_empty(self):
        assert summarize([]) == []


@pytest.mark.unit
class TestActivitySummaryService:
    """Tests for the trailing window."""

    def test_window_and_ownership(self):
        repo = FakeExerciseRepository()
        repo.seed([
            make_exercise_row(TEST_USER_ID, day=DAY),
            make_exercise_row(TEST_USER_ID, day=DAY - timedelta(days=29)),
            make_exercise_row(TEST_USER_ID, day=DAY - timedelta(days=30)),
            make_exercise_row(OTHER_USER_ID, day=DAY),
        ])

        summary = ActivitySummaryService(repo).daily_activity(TEST_USER_ID, today=DAY)

        assert [s.date for s in summary] == [DAY - timedelta(days=29), DAY]
        assert summary[1].total_calories_burnt == 9.0

    def test_custom_window(self):
        repo = FakeExerciseRepository()
        repo.seed([
            make_exercise_row(TEST_USER_ID, day=DAY),
            make_exercise_row(TEST_USER_ID, day=DAY - timedelta(days=7)),
        ])

        summary = ActivitySummaryService(repo).daily_activity(TEST_USER_ID, today=DAY, days=7)

        assert [s.date for s in summary] == [DAY]
