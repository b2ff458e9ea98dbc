"""Statistics records and time ranges used to filter them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


@dataclass
class TotalStats:
    """Aggregate statistics across all learning activity."""

    total_hours: float = 0.0
    total_sessions: int = 0
    active_plans: int = 0
    completed_plans: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    average_session: float = 0.0
    last_session_date: datetime | None = None

    def validate(self) -> None:
        """Raise ValueError if the values are inconsistent."""
        if self.total_hours < 0:
            raise ValueError(f"total hours cannot be negative: {self.total_hours:.2f}")
        if self.total_sessions < 0:
            raise ValueError(f"total sessions cannot be negative: {self.total_sessions}")
        if self.active_plans < 0:
            raise ValueError(f"active plans cannot be negative: {self.active_plans}")
        if self.completed_plans < 0:
            raise ValueError(
                f"completed plans cannot be negative: {self.completed_plans}"
            )
        if self.current_streak < 0:
            raise ValueError(f"current streak cannot be negative: {self.current_streak}")
        if self.longest_streak < 0:
            raise ValueError(f"longest streak cannot be negative: {self.longest_streak}")
        if self.current_streak > self.longest_streak and self.longest_streak > 0:
            raise ValueError(
                f"current streak ({self.current_streak}) cannot exceed "
                f"longest streak ({self.longest_streak})"
            )
        if self.average_session < 0:
            raise ValueError(
                f"average session cannot be negative: {self.average_session:.2f}"
            )
        if self.total_sessions > 0 and self.average_session == 0:
            raise ValueError("average session should be > 0 when sessions exist")
        if self.total_sessions == 0 and self.total_hours > 0:
            raise ValueError("total hours should be 0 when no sessions exist")


@dataclass
class PlanStats:
    """Statistics for one learning plan."""

    plan_id: str = ""
    plan_title: str = ""
    total_hours: float = 0.0
    planned_hours: float = 0.0
    session_count: int = 0
    completed_chunks: int = 0
    total_chunks: int = 0
    progress: float = 0.0
    status: str = ""
    last_session: datetime | None = None

    def validate(self) -> None:
        """Raise ValueError if the values are inconsistent."""
        if not self.plan_id:
            raise ValueError("plan ID cannot be empty")
        if not self.plan_title:
            raise ValueError("plan title cannot be empty")
        if self.total_hours < 0:
            raise ValueError(f"total hours cannot be negative: {self.total_hours:.2f}")
        if self.planned_hours < 0:
            raise ValueError(
                f"planned hours cannot be negative: {self.planned_hours:.2f}"
            )
        if self.session_count < 0:
            raise ValueError(f"session count cannot be negative: {self.session_count}")
        if self.completed_chunks < 0:
            raise ValueError(
                f"completed chunks cannot be negative: {self.completed_chunks}"
            )
        if self.total_chunks < 0:
            raise ValueError(f"total chunks cannot be negative: {self.total_chunks}")
        if self.completed_chunks > self.total_chunks:
            raise ValueError(
                f"completed chunks ({self.completed_chunks}) cannot exceed "
                f"total chunks ({self.total_chunks})"
            )
        if self.progress < 0 or self.progress > 1.0:
            raise ValueError(
                f"progress must be between 0 and 1, got {self.progress:.2f}"
            )
        if not self.status:
            raise ValueError("status cannot be empty")

    def progress_percent(self) -> int:
        """Completion as a whole percentage, truncated."""
        return int(self.progress * 100)


@dataclass
class DailyStats:
    """Statistics for a single day."""

    date: datetime | None = None
    duration: int = 0
    session_count: int = 0
    plans: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError if the values are inconsistent."""
        if self.date is None:
            raise ValueError("date cannot be zero")
        if self.duration < 0:
            raise ValueError(f"duration cannot be negative: {self.duration}")
        if self.session_count < 0:
            raise ValueError(f"session count cannot be negative: {self.session_count}")
        if self.session_count > 0 and self.duration == 0:
            raise ValueError("duration should be > 0 when sessions exist")
        if self.session_count == 0 and self.duration > 0:
            raise ValueError("session count should be > 0 when duration exists")

    def hours(self) -> float:
        """The day's duration in hours."""
        return self.duration / 60.0


@dataclass
class TimeRange:
    """An inclusive range of time for filtering statistics."""

    start: datetime | None = None
    end: datetime | None = None

    def validate(self) -> None:
        """Raise ValueError unless both ends are set and in order."""
        if self.start is None:
            raise ValueError("start time cannot be zero")
        if self.end is None:
            raise ValueError("end time cannot be zero")
        if self.end < self.start:
            raise ValueError("end time cannot be before start time")

    def contains(self, moment: datetime) -> bool:
        """Return True if the moment lies within the range, ends included."""
        return not moment < self.start and not moment > self.end


def time_range_today() -> TimeRange:
    """From midnight today until now."""
    now = datetime.now()
    return TimeRange(start=_midnight(now), end=now)


def time_range_this_week() -> TimeRange:
    """From midnight on Monday of this week until now."""
    now = datetime.now()
    monday = now - timedelta(days=now.weekday())
    return TimeRange(start=_midnight(monday), end=now)


def time_range_this_month() -> TimeRange:
    """From midnight on the first of this month until now."""
    now = datetime.now()
    return TimeRange(start=_midnight(now).replace(day=1), end=now)


def time_range_since(since: datetime) -> TimeRange:
    """From the given moment until now."""
    return TimeRange(start=since, end=datetime.now())


def time_range_all() -> TimeRange:
    """From the Unix epoch until now."""
    return TimeRange(start=datetime.fromtimestamp(0), end=datetime.now())