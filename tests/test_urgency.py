"""Tests for urgency scoring."""

import logging
from datetime import timedelta, timezone
from unittest.mock import patch

import pytest

from synaptik_mcp import Priority, TaskModel, TaskStatus, compute_urgency, urgency_or_default
from synaptik_mcp.utils.dates import format_stored_date
from synaptik_mcp.utils.urgency import _round_score


def make_task(now, **fields) -> TaskModel:
    """A task created exactly at ``now`` (age term 0) unless overridden."""
    fields.setdefault("title", "Task")
    fields.setdefault("created_at", format_stored_date(now))
    return TaskModel(**fields)


def due_in(now, **delta) -> str:
    return format_stored_date(now + timedelta(**delta))


class TestPriorityTerm:
    """Priority contributes a fixed amount."""

    @pytest.mark.parametrize(
        "priority,expected",
        [(Priority.HIGH, 6.0), (Priority.MEDIUM, 3.9), (Priority.LOW, 1.8), (Priority.NONE, 0.0)],
    )
    def test_priority_weights(self, now, priority, expected):
        assert compute_urgency(make_task(now, priority=priority), now) == expected

    def test_high_priority_new_pending_task_is_exactly_six(self, now):
        task = make_task(now, priority=Priority.HIGH, status=TaskStatus.PENDING)
        assert compute_urgency(task, now) == 6.00


class TestDueDateTerm:
    """Due-date proximity and overdue growth."""

    def test_one_day_overdue(self, now):
        task = make_task(now, due_date=due_in(now, days=-1))
        assert compute_urgency(task, now) == 12.20

    def test_overdue_grows_with_days_overdue(self, now):
        scores = [compute_urgency(make_task(now, due_date=due_in(now, days=-d)), now) for d in (1, 2, 5, 30)]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_due_partially_into_tomorrow_rounds_up_to_one_day(self, now):
        # 13.5 hours away counts as one day
        task = make_task(now, due_date=due_in(now, hours=13, minutes=30))
        assert compute_urgency(task, now) == 10.6

    def test_due_within_week(self, now):
        assert compute_urgency(make_task(now, due_date=due_in(now, days=7)), now) == 2.2

    def test_due_within_two_weeks(self, now):
        assert compute_urgency(make_task(now, due_date=due_in(now, days=10)), now) == 2.0
        assert compute_urgency(make_task(now, due_date=due_in(now, days=14)), now) == 0.8

    def test_due_far_away_adds_nothing(self, now):
        assert compute_urgency(make_task(now, due_date=due_in(now, days=20)), now) == 0.0

    def test_invalid_due_date_is_ignored_with_warning(self, now, caplog):
        task = make_task(now, priority=Priority.LOW, due_date="not-a-date")
        with caplog.at_level(logging.WARNING, logger="synaptik_mcp.utils.urgency"):
            assert compute_urgency(task, now) == 1.8
        assert "invalid due date" in caplog.text

    def test_utc_due_date_is_compared_in_local_time(self, now):
        local_due = now - timedelta(days=1)
        utc_due = local_due.astimezone(timezone.utc).isoformat()
        task = make_task(now, due_date=utc_due)
        assert compute_urgency(task, now) == 12.20


class TestAgeStatusAndTags:
    """Age, status and tag terms."""

    def test_age_adds_a_hundredth_per_day(self, now):
        task = make_task(now, created_at=format_stored_date(now - timedelta(days=10)))
        assert compute_urgency(task, now) == 0.1

    def test_missing_created_at_adds_nothing(self, now):
        task = TaskModel(title="Task", priority=Priority.MEDIUM)
        assert compute_urgency(task, now) == 3.9

    def test_active_boost(self, now):
        task = make_task(now, priority=Priority.HIGH, status=TaskStatus.ACTIVE)
        assert compute_urgency(task, now) == 10.0

    def test_waiting_penalty(self, now):
        task = make_task(now, priority=Priority.HIGH, status=TaskStatus.WAITING)
        assert compute_urgency(task, now) == 3.0

    @pytest.mark.parametrize("status", [TaskStatus.COMPLETED, TaskStatus.DELETED, TaskStatus.PENDING])
    def test_other_statuses_are_neutral(self, now, status):
        assert compute_urgency(make_task(now, priority=Priority.LOW, status=status), now) == 1.8

    def test_urgent_and_important_tags_stack(self, now):
        task = make_task(now, tags=["urgent", "important", "home"])
        assert compute_urgency(task, now) == 8.0

    def test_tags_match_regardless_of_case(self, now):
        task = make_task(now, tags=["URGENT"])
        assert compute_urgency(task, now) == 5.0


class TestBounds:
    """Clamping and the neutral fallback."""

    def test_never_below_zero(self, now):
        task = make_task(now, priority=Priority.LOW, status=TaskStatus.WAITING)
        assert compute_urgency(task, now) == 0.0

    def test_never_above_hundred(self, now):
        task = make_task(
            now,
            priority=Priority.HIGH,
            status=TaskStatus.ACTIVE,
            tags=["urgent", "important"],
            due_date=due_in(now, days=-1000),
        )
        assert compute_urgency(task, now) == 100.0

    def test_rounded_to_two_decimals(self, now):
        task = make_task(now, priority=Priority.MEDIUM, created_at=format_stored_date(now - timedelta(days=3)))
        assert compute_urgency(task, now) == 3.93

    def test_halves_round_up(self, now):
        task = make_task(now, tags=["urgent"])
        with patch.dict("synaptik_mcp.utils.urgency.TAG_WEIGHTS", {"urgent": 0.125}):
            assert compute_urgency(task, now) == 0.13

    @pytest.mark.parametrize("value,expected", [(0.125, 0.13), (0.625, 0.63), (6.0, 6.0), (12.2, 12.2)])
    def test_round_score(self, value, expected):
        assert _round_score(value) == expected

    def test_corrupt_created_at_raises_from_compute(self, now):
        task = make_task(now, created_at="garbage")
        with pytest.raises(ValueError):
            compute_urgency(task, now)

    def test_corrupt_created_at_falls_back_to_neutral_score(self, now, caplog):
        task = make_task(now, priority=Priority.HIGH, created_at="garbage")
        with caplog.at_level(logging.WARNING, logger="synaptik_mcp.utils.urgency"):
            assert urgency_or_default(task, now) == 5.0
        assert "error calculating urgency" in caplog.text

    def test_result_changes_with_reference_time(self, now):
        task = make_task(now, due_date=due_in(now, days=3))
        later = now + timedelta(days=2)
        assert compute_urgency(task, later) > compute_urgency(task, now)
