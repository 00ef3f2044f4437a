"""
Unit tests for the daily status reconciler.

Tests cover:
- merge_status semantics (absolute counters, clamping, terminal completion)
- Partial success: missing and foreign records are reported per id
- Optimistic concurrency retries and Conflict after the cap
- Storage failures reported as retryable
"""

from datetime import datetime, timezone

import pytest

from application.exceptions import StatusUpdateError
from models.exercise import StatusDelta, StatusFailureReason
from models.plan import StatusBlock
from services.status_reconciler import StatusReconciler, merge_status
from tests.fakes import FakeExerciseRepository
from tests.fakes.records import OTHER_USER_ID, TEST_USER_ID, make_exercise_row

NOW = datetime(2025, 3, 3, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def exercise_repo():
    repo = FakeExerciseRepository()
    repo.seed([
        make_exercise_row(TEST_USER_ID, exercise_id="ex-1", avg_sets=3, avg_reps=10),
        make_exercise_row(TEST_USER_ID, exercise_id="ex-2", avg_sets=2, avg_reps=8),
        make_exercise_row(OTHER_USER_ID, exercise_id="theirs"),
    ])
    return repo


@pytest.fixture
def reconciler(exercise_repo):
    return StatusReconciler(exercise_repo)


# ---------------------------------------------------------------------------
# merge_status
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestMergeStatus:
    """Tests for merge_status."""

    def test_counters_are_absolute(self):
        status = StatusBlock.fresh(3, 10)
        merged = merge_status(status, StatusDelta(exercise_id="x", completed_sets=1, completed_reps=10), NOW)
        merged = merge_status(merged, StatusDelta(exercise_id="x", completed_sets=2, completed_reps=20), NOW)
        assert merged.completed_sets == 2
        assert merged.completed_reps == 20
        assert merged.complete_percent == 66.67

    def test_missing_fields_keep_stored_values(self):
        status = StatusBlock.fresh(3, 10).model_copy(update={"completed_sets": 2, "completed_reps": 15})
        merged = merge_status(status, StatusDelta(exercise_id="x", completed_reps=25), NOW)
        assert merged.completed_sets == 2
        assert merged.completed_reps == 25

    def test_percent_is_clamped(self):
        status = StatusBlock.fresh(2, 10)
        merged = merge_status(status, StatusDelta(exercise_id="x", completed_reps=45), NOW)
        assert merged.complete_percent == 100

    def test_zero_total_reps_gives_zero_percent(self):
        status = StatusBlock(total_sets=0, total_reps=0)
        merged = merge_status(status, StatusDelta(exercise_id="x", completed_reps=5), NOW)
        assert merged.complete_percent == 0

    def test_completion_stamps_completed_at(self):
        status = StatusBlock.fresh(3, 10)
        merged = merge_status(
            status, StatusDelta(exercise_id="x", completed_reps=30, completed_by_user=True), NOW
        )
        assert merged.completed_by_user is True
        assert merged.completed_at == NOW

    def test_completed_is_terminal(self):
        status = StatusBlock.fresh(3, 10).model_copy(update={
            "completed_by_user": True,
            "completed_reps": 30,
            "complete_percent": 100.0,
            "completed_at": NOW,
        })
        merged = merge_status(
            status, StatusDelta(exercise_id="x", completed_reps=0, completed_by_user=False), NOW
        )
        assert merged == status


# ---------------------------------------------------------------------------
# StatusReconciler
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestApply:
    """Tests for batch application."""

    @pytest.mark.asyncio
    async def test_applies_valid_delta(self, reconciler, exercise_repo):
        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_sets=3, completed_reps=30, completed_by_user=True),
        ])

        assert report.applied == ["ex-1"]
        assert report.failed == []
        status = exercise_repo.get_by_id("ex-1")["status"]
        assert status["completed_by_user"] is True
        assert status["complete_percent"] == 100.0
        assert status["completed_at"] is not None

    @pytest.mark.asyncio
    async def test_missing_id_does_not_block_valid_one(self, reconciler, exercise_repo):
        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="does-not-exist", completed_sets=1),
            StatusDelta(exercise_id="ex-2", completed_sets=1, completed_reps=8),
        ])

        assert report.applied == ["ex-2"]
        assert len(report.failed) == 1
        assert report.failed[0].id == "does-not-exist"
        assert report.failed[0].reason == StatusFailureReason.NOT_FOUND
        assert report.failed[0].retryable is False
        assert exercise_repo.get_by_id("ex-2")["status"]["completed_reps"] == 8

    @pytest.mark.asyncio
    async def test_other_users_record_is_not_found(self, reconciler, exercise_repo):
        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="theirs", completed_sets=3),
        ])

        assert report.failed[0].reason == StatusFailureReason.NOT_FOUND
        assert exercise_repo.get_by_id("theirs")["status"]["completed_sets"] == 0

    @pytest.mark.asyncio
    async def test_repeated_delta_is_idempotent(self, reconciler, exercise_repo):
        delta = StatusDelta(exercise_id="ex-1", completed_sets=2, completed_reps=20)
        await reconciler.apply(TEST_USER_ID, [delta])
        first = exercise_repo.get_by_id("ex-1")

        report = await reconciler.apply(TEST_USER_ID, [delta])

        assert report.applied == ["ex-1"]
        assert exercise_repo.get_by_id("ex-1") == first

    @pytest.mark.asyncio
    async def test_completed_record_ignores_later_deltas(self, reconciler, exercise_repo):
        await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_reps=30, completed_by_user=True),
        ])
        completed = exercise_repo.get_by_id("ex-1")

        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_reps=5, completed_by_user=False),
        ])

        assert report.applied == ["ex-1"]
        assert exercise_repo.get_by_id("ex-1") == completed

    @pytest.mark.asyncio
    async def test_conflict_is_retried(self, reconciler, exercise_repo):
        exercise_repo.simulate_conflicts("ex-1", times=2)

        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_sets=1, completed_reps=10),
        ])

        assert report.applied == ["ex-1"]
        assert exercise_repo.get_by_id("ex-1")["status"]["completed_reps"] == 10

    @pytest.mark.asyncio
    async def test_conflict_after_retry_cap(self, reconciler, exercise_repo):
        exercise_repo.simulate_conflicts("ex-1", times=4)

        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_sets=1),
            StatusDelta(exercise_id="ex-2", completed_sets=1),
        ])

        assert report.applied == ["ex-2"]
        assert report.failed[0].id == "ex-1"
        assert report.failed[0].reason == StatusFailureReason.CONFLICT
        assert report.failed[0].retryable is True

    @pytest.mark.asyncio
    async def test_storage_error_is_retryable(self, reconciler, exercise_repo):
        exercise_repo.fail_reads()

        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_sets=1),
        ])

        assert report.applied == []
        assert report.failed[0].reason == StatusFailureReason.STORAGE
        assert report.failed[0].retryable is True

    @pytest.mark.asyncio
    async def test_corrupt_stored_status_fails_only_that_record(self, reconciler, exercise_repo):
        exercise_repo.seed([make_exercise_row(exercise_id="bad", complete_percent=150)])

        report = await reconciler.apply(TEST_USER_ID, [
            StatusDelta(exercise_id="ex-1", completed_reps=5),
            StatusDelta(exercise_id="bad", completed_reps=5),
        ])

        assert report.applied == ["ex-1"]
        assert report.failed[0].id == "bad"
        assert report.failed[0].reason == StatusFailureReason.INVALID_RECORD
        assert report.failed[0].retryable is False
        assert exercise_repo.get_by_id("ex-1")["status"]["completed_reps"] == 5
        assert exercise_repo.get_by_id("bad")["status"]["completed_reps"] == 0

    @pytest.mark.asyncio
    async def test_unexpected_error_is_reported_per_record(self, reconciler, exercise_repo, monkeypatch, caplog):
        get_by_id = exercise_repo.get_by_id

        def flaky_get_by_id(exercise_id):
            if exercise_id == "ex-2":
                raise RuntimeError("driver bug")
            return get_by_id(exercise_id)

        monkeypatch.setattr(exercise_repo, "get_by_id", flaky_get_by_id)

        with caplog.at_level("ERROR", logger="services.status_reconciler"):
            report = await reconciler.apply(TEST_USER_ID, [
                StatusDelta(exercise_id="ex-1", completed_sets=1),
                StatusDelta(exercise_id="ex-2", completed_sets=1),
            ])

        assert report.applied == ["ex-1"]
        assert report.failed[0].id == "ex-2"
        assert report.failed[0].reason == StatusFailureReason.STORAGE
        assert report.failed[0].retryable is True
        assert "Unexpected error updating exercise ex-2" in caplog.text


@pytest.mark.unit
class TestApplyOne:
    """Tests for the synchronous single-record path."""

    def test_returns_updated_row(self, reconciler):
        row = reconciler.apply_one(
            TEST_USER_ID, StatusDelta(exercise_id="ex-2", completed_sets=1, completed_reps=8)
        )
        assert row["status"]["complete_percent"] == 50.0

    def test_raises_not_found(self, reconciler):
        with pytest.raises(StatusUpdateError) as exc_info:
            reconciler.apply_one(TEST_USER_ID, StatusDelta(exercise_id="nope"))
        assert exc_info.value.reason == StatusFailureReason.NOT_FOUND

    def test_zero_retries_gives_immediate_conflict(self, exercise_repo):
        reconciler = StatusReconciler(exercise_repo, max_conflict_retries=0)
        exercise_repo.simulate_conflicts("ex-1", times=1)

        with pytest.raises(StatusUpdateError) as exc_info:
            reconciler.apply_one(TEST_USER_ID, StatusDelta(exercise_id="ex-1", completed_sets=1))
        assert exc_info.value.reason == StatusFailureReason.CONFLICT
