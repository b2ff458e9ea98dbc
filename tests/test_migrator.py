import pytest

from samedi.database import SQLiteDB, StorageError
from samedi.migrator import Migration, Migrator, load_migrations

INITIAL_SCHEMA = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    applied_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE plans (id TEXT PRIMARY KEY, title TEXT NOT NULL);
CREATE TABLE sessions (id TEXT PRIMARY KEY, plan_id TEXT NOT NULL);
CREATE TABLE cards (id TEXT PRIMARY KEY, plan_id TEXT NOT NULL);
INSERT INTO schema_migrations (version) VALUES (1);
"""


@pytest.fixture
def migrations_dir(tmp_path):
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "001_initial_schema.sql").write_text(INITIAL_SCHEMA)
    return directory


@pytest.fixture
def db(tmp_path):
    database = SQLiteDB(tmp_path / "test.db")
    yield database
    database.close()


def table_exists(db, name):
    (exists,) = db.query_row(
        "SELECT COUNT(*) > 0 FROM sqlite_master WHERE type='table' AND name=?", name
    )
    return bool(exists)


def test_migrate(db, migrations_dir):
    Migrator(db, migrations_dir).migrate()

    assert db.query_row("SELECT MAX(version) FROM schema_migrations") == (1,)
    for table in ("plans", "sessions", "cards", "schema_migrations"):
        assert table_exists(db, table), table


def test_migrate_idempotent(db, migrations_dir):
    migrator = Migrator(db, migrations_dir)
    migrator.migrate()
    migrator.migrate()

    assert db.query_row("SELECT MAX(version) FROM schema_migrations") == (1,)
    assert db.query_row("SELECT COUNT(*) FROM schema_migrations") == (1,)


def test_current_version_on_fresh_database(db, migrations_dir):
    assert Migrator(db, migrations_dir).current_version() == 0


def test_unrecorded_migration_gets_recorded(db, migrations_dir):
    (migrations_dir / "002_add_notes.sql").write_text(
        "CREATE TABLE notes (id INTEGER PRIMARY KEY);"
    )
    migrator = Migrator(db, migrations_dir)
    migrator.migrate()

    assert migrator.current_version() == 2
    assert table_exists(db, "notes")


def test_failing_migration_rolls_back(db, migrations_dir):
    (migrations_dir / "002_broken.sql").write_text(
        "CREATE TABLE half_done (id INTEGER);\nTHIS IS NOT SQL;"
    )
    migrator = Migrator(db, migrations_dir)

    with pytest.raises(StorageError, match="failed to apply migration 2"):
        migrator.migrate()

    assert migrator.current_version() == 1
    assert not table_exists(db, "half_done")
    assert db.connection.in_transaction is False


def test_missing_migrations_directory(db, tmp_path):
    with pytest.raises(StorageError, match="failed to load migrations"):
        Migrator(db, tmp_path / "absent").migrate()


def test_load_migrations_filters_and_sorts(tmp_path):
    (tmp_path / "10_later.sql").write_text("SELECT 10;")
    (tmp_path / "9_earlier.sql").write_text("SELECT 9;")
    (tmp_path / "readme.txt").write_text("ignored")
    (tmp_path / "abc_bad.sql").write_text("ignored")
    (tmp_path / "noversion.sql").write_text("ignored")
    (tmp_path / "3_dir.sql").mkdir()

    migrations = load_migrations(tmp_path)

    assert migrations == [
        Migration(version=9, name="earlier", sql="SELECT 9;"),
        Migration(version=10, name="later", sql="SELECT 10;"),
    ]


def test_load_migrations_keeps_rest_of_name(tmp_path):
    (tmp_path / "001_initial_schema.sql").write_text("SELECT 1;")
    (migration,) = load_migrations(tmp_path)
    assert migration.version == 1
    assert migration.name == "initial_schema"


def test_load_migrations_missing_directory(tmp_path):
    with pytest.raises(StorageError, match="failed to read migrations directory"):
        load_migrations(tmp_path / "absent")