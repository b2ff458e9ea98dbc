"""Statistics over stored plans and sessions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import timedelta
from typing import Any, Protocol

from samedi.calculator import (
    aggregate_by_plan,
    calculate_daily_stats,
    calculate_plan_stats,
    calculate_total_stats,
)
from samedi.repository import PlanFilter, PlanRecord
from samedi.stats_types import DailyStats, PlanStats, TimeRange, TotalStats
from samedi.streak import calculate_streak, get_active_days


class PlanService(Protocol):
    """The plan operations the statistics service needs."""

    def get(self, plan_id: str) -> Any: ...

    def list(self, filter: PlanFilter | None) -> Sequence[PlanRecord]: ...


class SessionService(Protocol):
    """The session operations the statistics service needs."""

    def list(self, plan_id: str, limit: int) -> Sequence[Any]: ...

    def list_all(self) -> Sequence[Any]: ...


@contextmanager
def _context(message: str) -> Iterator[None]:
    try:
        yield
    except Exception as exc:
        exc.add_note(message)
        raise


def _checked(time_range: TimeRange) -> None:
    try:
        time_range.validate()
    except ValueError as exc:
        raise ValueError(f"invalid time range: {exc}") from exc


class StatsService:
    """Loads plans and sessions and computes statistics from them."""

    def __init__(
        self, plan_service: PlanService, session_service: SessionService
    ) -> None:
        self._plans = plan_service
        self._sessions = session_service

    def _load_plans(self) -> list[Any]:
        with _context("failed to list plans"):
            records = self._plans.list(None)
        plans = []
        for record in records:
            with _context(f"failed to load plan {record.id}"):
                plans.append(self._plans.get(record.id))
        return plans

    def _all_sessions(self) -> list[Any]:
        with _context("failed to list sessions"):
            return list(self._sessions.list_all())

    def get_total_stats(self, time_range: TimeRange) -> TotalStats:
        """Aggregate statistics over all plans and the sessions in the range."""
        _checked(time_range)
        plans = self._load_plans()
        sessions = [
            s for s in self._all_sessions() if time_range.contains(s.start_time)
        ]
        return calculate_total_stats(sessions, plans)

    def get_plan_stats(self, plan_id: str, time_range: TimeRange) -> PlanStats:
        """Statistics for one plan from its sessions in the range."""
        _checked(time_range)
        with _context("failed to load plan"):
            plan = self._plans.get(plan_id)
        with _context("failed to list sessions"):
            sessions = self._sessions.list(plan_id, 0)
        in_range = [s for s in sessions if time_range.contains(s.start_time)]
        return calculate_plan_stats(plan_id, in_range, plan)

    def get_daily_stats(self, time_range: TimeRange) -> list[DailyStats]:
        """Per-day statistics for sessions in the range."""
        _checked(time_range)
        return calculate_daily_stats(self._all_sessions(), time_range)

    def get_streak_info(self) -> tuple[int, int]:
        """Return (current streak, longest streak) in days."""
        return calculate_streak(self._all_sessions())

    def get_active_days(self) -> list[DailyStats]:
        """Per-day statistics for every day with at least one session."""
        sessions = self._all_sessions()
        result = []
        for day in get_active_days(sessions):
            daily = calculate_daily_stats(
                sessions, TimeRange(start=day, end=day + timedelta(days=1))
            )
            if daily:
                result.append(daily[0])
        return result

    def get_all_plan_stats(self, time_range: TimeRange) -> dict[str, PlanStats]:
        """Statistics for every plan, keyed by plan ID."""
        _checked(time_range)
        plans = self._load_plans()
        sessions = [
            s for s in self._all_sessions() if time_range.contains(s.start_time)
        ]
        return aggregate_by_plan(sessions, plans)