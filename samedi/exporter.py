"""Markdown reports of learning statistics."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Sequence
from datetime import datetime
from string import Formatter

from samedi.database import StorageError
from samedi.stats_types import DailyStats, PlanStats, TotalStats

_DATE_FORMAT = "%Y-%m-%d"


class Exporter:
    """Renders statistics as markdown, optionally through a custom template.

    A custom template uses ``str.format`` fields named after the
    attributes of :class:`TotalStats`, e.g. ``"Total: {total_hours} hours"``.
    """

    def __init__(self) -> None:
        self._template: str | None = None

    def with_template(self, template: str) -> None:
        """Use a custom template for total statistics.

        Raises ValueError if the template cannot be parsed.
        """
        try:
            list(Formatter().parse(template))
        except ValueError as exc:
            raise ValueError(f"failed to parse template: {exc}") from exc
        self._template = template

    def export_total_stats(self, stats: TotalStats) -> str:
        """Render total statistics as markdown."""
        try:
            stats.validate()
        except ValueError as exc:
            raise ValueError(f"invalid stats: {exc}") from exc

        if self._template is not None:
            fields = {
                field.name: getattr(stats, field.name)
                for field in dataclasses.fields(stats)
            }
            try:
                return self._template.format_map(fields)
            except (KeyError, IndexError, ValueError, AttributeError) as exc:
                raise ValueError(f"failed to execute template: {exc}") from exc

        lines = ["# Learning Statistics\n\n", "## Summary\n\n"]

        if stats.total_sessions == 0:
            lines.append("No sessions recorded yet.\n")
            return "".join(lines)

        lines += [
            f"**Total Hours:** {stats.total_hours:.1f} hours\n",
            f"**Total Sessions:** {stats.total_sessions}\n",
            f"**Average Session:** {stats.average_session:.1f} minutes\n",
            "\n",
            "## Plans\n\n",
            f"**Active Plans:** {stats.active_plans}\n",
            f"**Completed Plans:** {stats.completed_plans}\n",
            "\n",
            "## Streaks\n\n",
            f"**Current Streak:** {stats.current_streak} days\n",
            f"**Longest Streak:** {stats.longest_streak} days\n",
            "\n",
        ]

        if stats.last_session_date is not None:
            lines.append(
                f"**Last Session:** {self.format_date(stats.last_session_date)}\n"
            )

        return "".join(lines)

    def export_plan_stats(self, stats: PlanStats) -> str:
        """Render statistics for one plan as markdown."""
        try:
            stats.validate()
        except ValueError as exc:
            raise ValueError(f"invalid plan stats: {exc}") from exc

        lines = [
            f"# Plan: {stats.plan_title}\n\n",
            f"**Plan ID:** {stats.plan_id}\n",
            f"**Status:** {stats.status}\n",
            "\n",
            "## Progress\n\n",
            f"**Completion:** {self.format_progress(stats.progress)}\n",
            f"**Chunks:** {stats.completed_chunks}/{stats.total_chunks} completed\n",
            f"{self.generate_progress_bar(stats.progress, 30)}\n",
            "\n",
            "## Time\n\n",
            f"**Actual Hours:** {stats.total_hours:.1f} hours\n",
            f"**Planned Hours:** {stats.planned_hours:.1f} hours\n",
            f"**Session Count:** {stats.session_count} sessions\n",
            "\n",
        ]

        if stats.session_count == 0:
            lines.append("No sessions recorded yet.\n")
        elif stats.last_session is not None:
            lines.append(f"**Last Session:** {self.format_date(stats.last_session)}\n")

        return "".join(lines)

    def export_daily_stats(self, daily_stats: Sequence[DailyStats]) -> str:
        """Render per-day statistics as markdown."""
        lines = ["# Daily Statistics\n\n"]

        if not daily_stats:
            lines.append("No daily statistics available.\n")
            return "".join(lines)

        total_minutes = sum(day.duration for day in daily_stats)
        total_sessions = sum(day.session_count for day in daily_stats)
        lines.append(
            f"**Total:** {total_minutes / 60.0:.1f} hours "
            f"across {total_sessions} sessions\n\n"
        )
        lines.append("## Breakdown\n\n")

        for day in daily_stats:
            lines.append(f"### {self.format_date(day.date)}\n\n")
            lines.append(f"- **Duration:** {day.hours():.1f} hours\n")
            lines.append(f"- **Sessions:** {day.session_count} sessions\n")
            if day.plans:
                lines.append(f"- **Plans:** {', '.join(day.plans)}\n")
            lines.append("\n")

        return "".join(lines)

    def export_full_report(
        self,
        total_stats: TotalStats,
        plan_stats: Sequence[PlanStats],
        daily_stats: Sequence[DailyStats],
    ) -> str:
        """Render a complete report with summary, plans and daily breakdown."""
        generated = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        lines = [
            "# Learning Statistics Report\n\n",
            f"*Generated: {generated}*\n\n",
        ]

        if total_stats.total_sessions == 0 and not plan_stats and not daily_stats:
            lines.append("No data available.\n")
            return "".join(lines)

        lines.append("## Summary\n\n")
        if total_stats.total_sessions > 0:
            lines += [
                f"- **Total Hours:** {total_stats.total_hours:.1f} hours\n",
                f"- **Total Sessions:** {total_stats.total_sessions}\n",
                f"- **Average Session:** {total_stats.average_session:.1f} minutes\n",
                f"- **Active Plans:** {total_stats.active_plans}\n",
                f"- **Completed Plans:** {total_stats.completed_plans}\n",
                f"- **Current Streak:** {total_stats.current_streak} days\n",
                f"- **Longest Streak:** {total_stats.longest_streak} days\n",
            ]
            if total_stats.last_session_date is not None:
                lines.append(
                    "- **Last Session:** "
                    f"{self.format_date(total_stats.last_session_date)}\n"
                )
        else:
            lines.append("No sessions recorded.\n")
        lines.append("\n")

        if plan_stats:
            lines.append("## Plans\n\n")
            lines.append(self.generate_markdown_table(plan_stats))
            lines.append("\n")

        if daily_stats:
            lines.append("## Daily Breakdown\n\n")
            for day in daily_stats:
                lines.append(
                    f"- **{self.format_date(day.date)}:** {day.hours():.1f} hours "
                    f"({day.session_count} sessions)\n"
                )
            lines.append("\n")

        lines.append("---\n")
        lines.append("*Report generated by Samedi*\n")
        return "".join(lines)

    def format_duration(self, minutes: float) -> str:
        """Minutes below an hour as minutes, otherwise as hours."""
        if minutes < 60:
            return f"{minutes:.0f} minutes"
        return f"{minutes / 60.0:.1f} hours"

    def format_date(self, date: datetime | None) -> str:
        """The date as YYYY-MM-DD, or "N/A" when there is none."""
        if date is None:
            return "N/A"
        return date.strftime(_DATE_FORMAT)

    def format_progress(self, progress: float) -> str:
        """A 0.0-1.0 fraction as a truncated whole percentage."""
        return f"{int(progress * 100)}%"

    def export_to_file(self, stats: TotalStats, path: str | os.PathLike) -> None:
        """Write the markdown for total statistics to a file."""
        try:
            content = self.export_total_stats(stats)
        except ValueError as exc:
            raise ValueError(f"failed to export stats: {exc}") from exc

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            raise StorageError(f"failed to write file: {exc}") from exc

    def read_file(self, path: str | os.PathLike) -> str:
        """Return the text of a file."""
        try:
            with open(path, encoding="utf-8") as handle:
                return handle.read()
        except OSError as exc:
            raise StorageError(f"failed to read file: {exc}") from exc

    def validate_stats(self, stats: TotalStats) -> None:
        """Raise ValueError if the statistics are inconsistent."""
        stats.validate()

    def generate_markdown_table(self, plan_stats: Sequence[PlanStats]) -> str:
        """A markdown table with one row per plan."""
        lines = [
            "| Plan | Hours | Sessions | Progress | Status |\n",
            "|------|-------|----------|----------|--------|\n",
        ]
        lines += [
            f"| {ps.plan_title} | {ps.total_hours:.1f} | {ps.session_count} | "
            f"{self.format_progress(ps.progress)} | {ps.status} |\n"
            for ps in plan_stats
        ]
        return "".join(lines)

    def generate_progress_bar(self, progress: float, width: int) -> str:
        """A bar of the given width, filled in proportion to progress."""
        progress = min(max(progress, 0.0), 1.0)
        width = max(width, 0)
        filled = int(progress * width)
        return "[" + "█" * filled + "░" * (width - filled) + "]"