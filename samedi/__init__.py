"""Local storage, learning statistics, streaks and Markdown reports for study plans and sessions."""

__version__ = "0.1.0"