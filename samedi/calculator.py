"""Aggregate statistics computed from learning sessions and plans."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, Protocol

from samedi.stats_types import DailyStats, PlanStats, TimeRange, TotalStats
from samedi.streak import calculate_streak

_ACTIVE_STATUSES = frozenset({"not-started", "in-progress"})
_COMPLETED_STATUS = "completed"


class _Session(Protocol):
    plan_id: str
    start_time: datetime
    duration: int


class _Chunk(Protocol):
    status: Any


class _Plan(Protocol):
    id: str
    title: str
    total_hours: float
    status: Any
    chunks: Sequence[_Chunk]

    def progress(self) -> float: ...


def _status(value: Any) -> str:
    """The plain string form of a status, whether a str or an enum member."""
    return str(getattr(value, "value", value))


def _count_completed_chunks(chunks: Iterable[_Chunk]) -> int:
    return sum(1 for chunk in chunks if _status(chunk.status) == _COMPLETED_STATUS)


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def calculate_total_stats(
    sessions: Iterable[_Session], plans: Iterable[_Plan]
) -> TotalStats:
    """Compute aggregate statistics across all sessions and plans.

    Plans that are not started or in progress count as active; completed
    plans count as completed; other statuses are not counted.
    """
    sessions = list(sessions)
    stats = TotalStats()

    for plan in plans:
        status = _status(plan.status)
        if status in _ACTIVE_STATUSES:
            stats.active_plans += 1
        elif status == _COMPLETED_STATUS:
            stats.completed_plans += 1

    if not sessions:
        return stats

    total_minutes = sum(session.duration for session in sessions)
    stats.total_hours = total_minutes / 60.0
    stats.total_sessions = len(sessions)
    stats.average_session = total_minutes / len(sessions)
    stats.last_session_date = max(session.start_time for session in sessions)
    stats.current_streak, stats.longest_streak = calculate_streak(sessions)
    return stats


def calculate_plan_stats(
    plan_id: str, sessions: Iterable[_Session], plan: _Plan
) -> PlanStats:
    """Compute statistics for one plan from the sessions that belong to it."""
    stats = PlanStats(
        plan_id=plan_id,
        plan_title=plan.title,
        planned_hours=plan.total_hours,
        total_chunks=len(plan.chunks),
        status=_status(plan.status),
        progress=plan.progress(),
        completed_chunks=_count_completed_chunks(plan.chunks),
    )

    plan_sessions = [session for session in sessions if session.plan_id == plan_id]
    if not plan_sessions:
        return stats

    stats.total_hours = sum(session.duration for session in plan_sessions) / 60.0
    stats.session_count = len(plan_sessions)
    stats.last_session = max(session.start_time for session in plan_sessions)
    return stats


def calculate_daily_stats(
    sessions: Iterable[_Session], time_range: TimeRange
) -> list[DailyStats]:
    """Group the sessions inside the range by start day, sorted by date."""
    days: dict[str, DailyStats] = {}

    for session in sessions:
        if not time_range.contains(session.start_time):
            continue

        key = session.start_time.strftime("%Y-%m-%d")
        day = days.get(key)
        if day is None:
            day = days[key] = DailyStats(date=_midnight(session.start_time))

        day.duration += session.duration
        day.session_count += 1
        if session.plan_id not in day.plans:
            day.plans.append(session.plan_id)

    return sorted(days.values(), key=lambda day: day.date)


def aggregate_by_plan(
    sessions: Iterable[_Session], plans: Iterable[_Plan]
) -> dict[str, PlanStats]:
    """Map each plan's ID to its statistics."""
    sessions = list(sessions)
    return {plan.id: calculate_plan_stats(plan.id, sessions, plan) for plan in plans}