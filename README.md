# samedi

A library for local storage and statistics for self-directed learning. It
keeps plan and card files in a data directory and session data in a SQLite
database. It also reports on hours studied, daily activity and streaks.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Storage

`samedi.paths.Paths` is a dataclass that describes where data lives.
`default_paths()` puts everything under `~/.samedi`: the `plans`, `cards`
and `templates` directories, `sessions.db` and `config.toml`. Backups go in
`~/samedi-backups`.

`Paths` has these methods:

- `ensure_directories()` creates the data directories.
- `exists()` checks for the base, plans and cards directories.
- `clean()` removes the base directory.
- `plan_path(plan_id)` gives `<plans_dir>/<plan_id>.md`.
- `cards_path(plan_id)` gives `<cards_dir>/<plan_id>.cards.md`.
- `template_path(name)` gives `<templates_dir>/<name>.md`.

`samedi.filesystem.FilesystemStorage` reads and writes plan and card files.
It offers `initialize`, `read_file`, `write_file`, `delete_file` and
`file_exists`. Files are written with owner-only permissions.

`samedi.database.SQLiteDB` is one SQLite connection in WAL mode with a
five-second busy timeout. It has these methods:

- `execute`
- `query`, which returns all rows
- `query_row`, which returns the first row or `None`
- `transaction()`, a context manager that commits on success and rolls back on an exception
- `close()`

It can also be used as a context manager.

`samedi.migrator.Migrator` applies migrations from a directory of files
named `NNN_description.sql`:

- They are applied in version order, each in its own transaction.
- Each applied version is recorded in a `schema_migrations` table, unless the migration records itself.
- `current_version()` returns the highest applied version.
- `load_migrations(directory)` lists the migrations without applying them.

`samedi.repository.Storage` puts these together. It opens the database,
migrates it and creates the data directories:

```python
from samedi.paths import default_paths
from samedi.repository import Storage

paths = default_paths()
with Storage(paths.database_path, paths, "path/to/migrations") as storage:
    rows = storage.db.query("SELECT version FROM schema_migrations")
```

`samedi.repository` also defines these record and filter dataclasses:

- `PlanRecord`
- `PlanFilter`
- `SessionRecord`
- `SessionFilter`
- `CardRecord`
- `CardFilter`

Storage failures raise `samedi.database.StorageError`.

## Statistics

`samedi.stats_types` defines `TotalStats`, `PlanStats`, `DailyStats` and
`TimeRange`. Each has a `validate()` method that raises `ValueError` on
inconsistent values. Other members:

- `PlanStats.progress_percent()`
- `DailyStats.hours()`
- `TimeRange.contains(moment)`, which includes both ends of the range

The module also builds ranges: `time_range_today()`,
`time_range_this_week()` (from Monday), `time_range_this_month()`,
`time_range_since(since)` and `time_range_all()` (from the Unix epoch).

The calculators take plain objects.

A session needs these attributes:

- `plan_id`
- `start_time` (a `datetime`)
- `duration` (in minutes)

A plan needs these members:

- `id`
- `title`
- `total_hours`
- `status`
- `chunks`, each with a `status`
- a `progress()` method

Statuses may be strings or enum members whose values are `"not-started"`,
`"in-progress"` or `"completed"`.

- `samedi.calculator` provides `calculate_total_stats`,
  `calculate_plan_stats`, `calculate_daily_stats` and `aggregate_by_plan`.
- `samedi.streak` provides the following. A streak is a run of consecutive
  days with at least one session.
  - `calculate_streak(sessions, now=None)` returns the current and longest
    streaks. The current streak counts only if the last active day is today
    or yesterday.
  - `get_active_days(sessions)`
  - `detect_streak_breaks(sessions)`
- `samedi.stats_service.StatsService(plan_service, session_service)` loads
  plans and sessions from the services you pass in. The plan service needs
  `get(id)` and `list(filter)`. The session service needs
  `list(plan_id, limit)` and `list_all()`. The calculators then do the work
  through these methods:
  - `get_total_stats`
  - `get_plan_stats`
  - `get_daily_stats`
  - `get_streak_info`
  - `get_active_days`
  - `get_all_plan_stats`

## Reports

`samedi.exporter.Exporter` renders statistics as Markdown:

```python
from samedi.exporter import Exporter
from samedi.stats_types import TotalStats

total = TotalStats(total_hours=2.0, total_sessions=2, average_session=60.0)
exporter = Exporter()
print(exporter.export_total_stats(total))
exporter.export_to_file(total, "report.md")
```

It can also render the following:

- plan reports with `export_plan_stats`
- daily breakdowns with `export_daily_stats`
- full reports with `export_full_report`
- plan tables with `generate_markdown_table`
- text progress bars with `generate_progress_bar`

For total statistics you can set a custom template with `with_template`.
It is a `str.format` string with fields named after `TotalStats`
attributes, for example `"Total: {total_hours} hours"`.

## What it does not do

- There is no command-line program.
- There are no plan or session services.
- No SQL schema is included, so you supply the migrations directory.
- There is no code for reading or writing plan and card documents beyond
  raw file access.
- Nothing here reads or writes the records in the database tables.