"""Learning streaks: runs of consecutive days with at least one session."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Protocol


class _Session(Protocol):
    start_time: datetime


_DAY = timedelta(days=1)


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _days_between(earlier: datetime, later: datetime) -> int:
    return int((later - earlier) / _DAY)


def get_active_days(sessions: Iterable[_Session]) -> list[datetime]:
    """Return the sorted unique days on which sessions started.

    Each day is midnight in the time zone of the session's start time.
    """
    days = {}
    for session in sessions:
        day = _midnight(session.start_time)
        days[day.date()] = day
    return sorted(days.values())


def _find_streaks(active_days: list[datetime]) -> list[int]:
    if not active_days:
        return []
    streaks = []
    current = 1
    for previous, day in zip(active_days, active_days[1:]):
        if _days_between(previous, day) == 1:
            current += 1
        else:
            streaks.append(current)
            current = 1
    streaks.append(current)
    return streaks


def calculate_streak(
    sessions: Iterable[_Session], now: datetime | None = None
) -> tuple[int, int]:
    """Return (current streak, longest streak) in days as of ``now``.

    The current streak counts only if the last active day is today or
    yesterday. ``now`` defaults to the present moment.
    """
    active_days = get_active_days(sessions)
    if not active_days:
        return 0, 0

    streaks = _find_streaks(active_days)
    longest = max(streaks)

    if now is None:
        now = datetime.now()
    today = _midnight(now).date()
    yesterday = today - _DAY

    current = 0
    if active_days[-1].date() in (today, yesterday):
        current = streaks[-1]
    return current, longest


def detect_streak_breaks(sessions: Iterable[_Session]) -> list[datetime]:
    """Return every day missing between the first and last active day."""
    active_days = get_active_days(sessions)
    breaks = []
    for day, next_day in zip(active_days, active_days[1:]):
        gap = _days_between(day, next_day)
        breaks.extend(day + timedelta(days=offset) for offset in range(1, gap))
    return breaks