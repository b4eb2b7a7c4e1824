"""Tests for quick-capture parsing, date resolution and tag normalization."""

from datetime import datetime

import pytest

from synaptik_mcp import InvalidDateError, Priority, TaskDraft, parse_quick_capture, resolve_date
from synaptik_mcp.utils.dates import format_stored_date, is_plausible_date, parse_stored_date, start_of_day
from synaptik_mcp.utils.parsers import _parse_task
from synaptik_mcp.utils.tags import normalize_tags, parse_tag_input

# ============================================================================
# Quick Capture
# ============================================================================


class TestParseQuickCapture:
    """Tests for the TaskWarrior-style tokenizer."""

    def test_title_due_tag_and_priority(self, now):
        draft = parse_quick_capture("Buy milk due:tomorrow +shopping priority:H")
        assert draft.title == "Buy milk"
        assert draft.priority == Priority.HIGH
        assert draft.tags == ["shopping"]
        assert draft.due == "tomorrow"
        assert resolve_date(draft.due, now) == datetime(2025, 1, 16)

    def test_all_attributes(self):
        draft = parse_quick_capture(
            "Deploy release project:webapp assignee:alice scheduled:monday wait:3d depends:a1,b2 priority:m"
        )
        assert draft.title == "Deploy release"
        assert draft.project == "webapp"
        assert draft.assignee == "alice"
        assert draft.scheduled == "monday"
        assert draft.wait == "3d"
        assert draft.depends == ["a1", "b2"]
        assert draft.priority == Priority.MEDIUM

    def test_unknown_priority_is_dropped_and_not_part_of_title(self):
        draft = parse_quick_capture("Fix bug priority:X")
        assert draft.title == "Fix bug"
        assert draft.priority is None

    def test_tags_keep_order_and_duplicates(self):
        draft = parse_quick_capture("+b Task +a +b")
        assert draft.tags == ["b", "a", "b"]
        assert draft.title == "Task"

    def test_attribute_tokens_can_appear_anywhere(self):
        draft = parse_quick_capture("project:home Call the plumber due:friday")
        assert draft.title == "Call the plumber"
        assert draft.project == "home"
        assert draft.due == "friday"

    def test_extra_whitespace_collapses_in_title(self):
        assert parse_quick_capture("  Call \t  mom  ").title == "Call mom"

    def test_blank_input_gives_empty_draft(self):
        draft = parse_quick_capture("  ")
        assert draft == TaskDraft()
        assert draft.title == ""
        assert draft.tags == []
        assert draft.priority is None
        assert draft.due is None

    def test_later_attribute_wins(self):
        assert parse_quick_capture("x project:a project:b").project == "b"

    def test_parsing_is_idempotent(self):
        text = "Write report due:eom +work +writing priority:L depends:abc"
        assert parse_quick_capture(text) == parse_quick_capture(text)

    def test_tokens_that_only_look_like_attributes_stay_in_title(self):
        draft = parse_quick_capture("Read about project management")
        assert draft.title == "Read about project management"
        assert draft.project is None


# ============================================================================
# Date Resolution
# ============================================================================


class TestResolveDate:
    """Tests for TaskWarrior-style date expressions (reference: Wed 2025-01-15 10:30)."""

    @pytest.mark.parametrize(
        "expr,expected",
        [
            ("today", datetime(2025, 1, 15)),
            ("tomorrow", datetime(2025, 1, 16)),
            ("yesterday", datetime(2025, 1, 14)),
            ("TOMORROW", datetime(2025, 1, 16)),
            ("eom", datetime(2025, 1, 31)),
            ("eoy", datetime(2025, 12, 31)),
            ("2025-03-01", datetime(2025, 3, 1)),
            ("3d", datetime(2025, 1, 18)),
            ("0d", datetime(2025, 1, 15)),
            ("2w", datetime(2025, 1, 29)),
        ],
    )
    def test_keywords_and_offsets(self, now, expr, expected):
        assert resolve_date(expr, now) == expected

    def test_weekday_is_next_occurrence(self, now):
        assert resolve_date("friday", now) == datetime(2025, 1, 17, 10, 30)
        assert resolve_date("monday", now) == datetime(2025, 1, 20, 10, 30)

    def test_same_weekday_means_next_week(self, now):
        assert resolve_date("wednesday", now) == datetime(2025, 1, 22, 10, 30)

    def test_friday_on_a_friday_is_seven_days_later(self):
        friday = datetime(2025, 1, 17, 9, 0)
        assert resolve_date("friday", friday) == datetime(2025, 1, 24, 9, 0)

    def test_end_of_month_in_leap_february(self):
        assert resolve_date("eom", datetime(2024, 2, 10, 8, 0)) == datetime(2024, 2, 29)

    def test_generic_date_string(self, now):
        assert resolve_date("March 5 2025", now) == datetime(2025, 3, 5)

    def test_unparseable_expression_raises(self, now):
        with pytest.raises(InvalidDateError) as exc_info:
            resolve_date("xyzzy", now)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.expression == "xyzzy"

    def test_impossible_calendar_date_raises(self, now):
        with pytest.raises(InvalidDateError):
            resolve_date("2025-13-45", now)

    @pytest.mark.parametrize("expr", ["99999999d", "9999999999w", "999999999999999999999d"])
    def test_offset_out_of_range_raises(self, now, expr):
        with pytest.raises(InvalidDateError) as exc_info:
            resolve_date(expr, now)
        assert exc_info.value.expression == expr

    def test_empty_expression_raises(self, now):
        with pytest.raises(InvalidDateError):
            resolve_date("   ", now)


class TestStoredDates:
    """Tests for stored ISO date helpers."""

    def test_start_of_day(self, now):
        assert start_of_day(now) == datetime(2025, 1, 15)

    def test_format_and_parse(self, now):
        assert parse_stored_date(format_stored_date(now)) == now

    def test_zulu_suffix_is_accepted(self):
        assert parse_stored_date("2025-01-15T00:00:00Z").tzinfo is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2025-01-15T00:00:00", True),
            ("2025-01-15", True),
            ("1999-12-31", False),
            ("2101-01-01", False),
            ("garbage", False),
        ],
    )
    def test_is_plausible_date(self, value, expected):
        assert is_plausible_date(value) is expected


# ============================================================================
# Tags and Stored Documents
# ============================================================================


class TestTags:
    """Tests for tag normalization."""

    def test_normalize_lowercases_trims_and_dedupes(self):
        assert normalize_tags([" Work", "work", "URGENT", "home"]) == ["work", "urgent", "home"]

    def test_invalid_tags_are_dropped(self):
        assert normalize_tags(["ok", "has space", "", "x" * 51, "semi;colon"]) == ["ok"]

    def test_none_is_empty(self):
        assert normalize_tags(None) == []

    def test_parse_tag_input(self):
        assert parse_tag_input("work, +urgent,,Home") == ["work", "urgent", "home"]
        assert parse_tag_input("  ") == []


class TestParseStoredTasks:
    """Tests for validating stored task documents."""

    def test_parse_task(self):
        task = _parse_task({"id": "abc", "title": "Stored", "status": "active", "priority": "M", "tags": ["A"]})
        assert task.title == "Stored"
        assert task.status.value == "active"
        assert task.priority == Priority.MEDIUM
        assert task.tags == ["a"]
