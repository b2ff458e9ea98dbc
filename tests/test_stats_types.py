from datetime import datetime, timedelta, timezone

import pytest

from samedi.stats_types import (
    DailyStats,
    PlanStats,
    TimeRange,
    TotalStats,
    time_range_all,
    time_range_since,
    time_range_this_month,
    time_range_this_week,
    time_range_today,
)

NOW = datetime.now()


@pytest.mark.parametrize(
    "stats",
    [
        TotalStats(
            total_hours=10.5,
            total_sessions=5,
            active_plans=2,
            completed_plans=1,
            current_streak=3,
            longest_streak=5,
            average_session=126.0,
            last_session_date=NOW,
        ),
        TotalStats(),
    ],
)
def test_total_stats_valid(stats):
    assert stats.validate() is None


@pytest.mark.parametrize(
    "stats, message",
    [
        (TotalStats(total_hours=-1.0, total_sessions=5), "total hours cannot be negative"),
        (TotalStats(total_hours=10.0, total_sessions=-1), "total sessions cannot be negative"),
        (TotalStats(active_plans=-1), "active plans cannot be negative"),
        (TotalStats(completed_plans=-1), "completed plans cannot be negative"),
        (TotalStats(current_streak=-1), "current streak cannot be negative"),
        (TotalStats(longest_streak=-1), "longest streak cannot be negative"),
        (
            TotalStats(current_streak=10, longest_streak=5),
            "current streak (10) cannot exceed longest streak (5)",
        ),
        (TotalStats(average_session=-1.0), "average session cannot be negative"),
        (
            TotalStats(total_sessions=5, average_session=0),
            "average session should be > 0 when sessions exist",
        ),
        (
            TotalStats(total_sessions=0, total_hours=5.0),
            "total hours should be 0 when no sessions exist",
        ),
    ],
)
def test_total_stats_invalid(stats, message):
    with pytest.raises(ValueError) as info:
        stats.validate()
    assert message in str(info.value)


def test_plan_stats_valid():
    stats = PlanStats(
        plan_id="rust-async",
        plan_title="Rust Async Programming",
        total_hours=10.5,
        planned_hours=40.0,
        session_count=12,
        completed_chunks=10,
        total_chunks=40,
        progress=0.25,
        status="in-progress",
        last_session=NOW,
    )
    assert stats.validate() is None


@pytest.mark.parametrize(
    "stats, message",
    [
        (PlanStats(plan_title="Test", status="active"), "plan ID cannot be empty"),
        (PlanStats(plan_id="test", status="active"), "plan title cannot be empty"),
        (
            PlanStats(plan_id="test", plan_title="Test", total_hours=-1.0, status="active"),
            "total hours cannot be negative",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", planned_hours=-1.0, status="active"),
            "planned hours cannot be negative",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", session_count=-1, status="active"),
            "session count cannot be negative",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", completed_chunks=-1, status="active"),
            "completed chunks cannot be negative",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", total_chunks=-1, status="active"),
            "total chunks cannot be negative",
        ),
        (
            PlanStats(
                plan_id="test",
                plan_title="Test",
                completed_chunks=10,
                total_chunks=5,
                status="active",
            ),
            "completed chunks (10) cannot exceed total chunks (5)",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", progress=-0.1, status="active"),
            "progress must be between 0 and 1",
        ),
        (
            PlanStats(plan_id="test", plan_title="Test", progress=1.5, status="active"),
            "progress must be between 0 and 1",
        ),
        (PlanStats(plan_id="test", plan_title="Test"), "status cannot be empty"),
    ],
)
def test_plan_stats_invalid(stats, message):
    with pytest.raises(ValueError) as info:
        stats.validate()
    assert message in str(info.value)


@pytest.mark.parametrize(
    "progress, expected",
    [(0.0, 0), (0.25, 25), (0.50, 50), (0.75, 75), (1.0, 100), (0.33, 33)],
)
def test_progress_percent(progress, expected):
    assert PlanStats(progress=progress).progress_percent() == expected


DATE = datetime(2024, 10, 8, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "stats",
    [
        DailyStats(date=DATE, duration=120, session_count=2, plans=["plan-1", "plan-2"]),
        DailyStats(date=DATE, duration=0, session_count=0, plans=[]),
    ],
)
def test_daily_stats_valid(stats):
    assert stats.validate() is None


@pytest.mark.parametrize(
    "stats, message",
    [
        (DailyStats(duration=60, session_count=1), "date cannot be zero"),
        (DailyStats(date=DATE, duration=-1, session_count=1), "duration cannot be negative"),
        (
            DailyStats(date=DATE, duration=60, session_count=-1),
            "session count cannot be negative",
        ),
        (
            DailyStats(date=DATE, duration=0, session_count=1),
            "duration should be > 0 when sessions exist",
        ),
        (
            DailyStats(date=DATE, duration=60, session_count=0),
            "session count should be > 0 when duration exists",
        ),
    ],
)
def test_daily_stats_invalid(stats, message):
    with pytest.raises(ValueError) as info:
        stats.validate()
    assert message in str(info.value)


@pytest.mark.parametrize(
    "duration, expected", [(60, 1.0), (90, 1.5), (120, 2.0), (30, 0.5), (0, 0.0)]
)
def test_daily_stats_hours(duration, expected):
    assert DailyStats(duration=duration).hours() == expected


def test_time_range_valid():
    assert TimeRange(start=NOW - timedelta(days=1), end=NOW).validate() is None
    assert TimeRange(start=NOW, end=NOW).validate() is None


@pytest.mark.parametrize(
    "time_range, message",
    [
        (TimeRange(start=None, end=NOW), "start time cannot be zero"),
        (TimeRange(start=NOW, end=None), "end time cannot be zero"),
        (
            TimeRange(start=NOW + timedelta(days=1), end=NOW - timedelta(days=1)),
            "end time cannot be before start time",
        ),
    ],
)
def test_time_range_invalid(time_range, message):
    with pytest.raises(ValueError) as info:
        time_range.validate()
    assert message in str(info.value)


_START = datetime(2024, 10, 1, tzinfo=timezone.utc)
_END = datetime(2024, 10, 31, 23, 59, 59, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "moment, expected",
    [
        (datetime(2024, 9, 30, 12, tzinfo=timezone.utc), False),
        (_START, True),
        (datetime(2024, 10, 15, 12, tzinfo=timezone.utc), True),
        (_END, True),
        (datetime(2024, 11, 1, tzinfo=timezone.utc), False),
    ],
)
def test_time_range_contains(moment, expected):
    assert TimeRange(start=_START, end=_END).contains(moment) is expected


def _close_to_now(moment):
    return abs(datetime.now() - moment) < timedelta(seconds=1)


def test_time_range_today():
    time_range = time_range_today()
    time_range.validate()
    now = datetime.now()
    assert time_range.start.date() == now.date()
    assert time_range.start.hour == 0
    assert _close_to_now(time_range.end)


def test_time_range_this_week():
    time_range = time_range_this_week()
    time_range.validate()
    assert time_range.start.weekday() == 0
    assert time_range.start.hour == 0
    assert time_range.start.minute == 0
    assert _close_to_now(time_range.end)


def test_time_range_this_month():
    time_range = time_range_this_month()
    time_range.validate()
    now = datetime.now()
    assert time_range.start.year == now.year
    assert time_range.start.month == now.month
    assert time_range.start.day == 1
    assert time_range.start.hour == 0
    assert _close_to_now(time_range.end)


def test_time_range_since():
    since = datetime(2024, 1, 1)
    time_range = time_range_since(since)
    time_range.validate()
    assert time_range.start == since
    assert _close_to_now(time_range.end)


def test_time_range_all():
    time_range = time_range_all()
    time_range.validate()
    assert time_range.start.timestamp() == 0
    assert _close_to_now(time_range.end)