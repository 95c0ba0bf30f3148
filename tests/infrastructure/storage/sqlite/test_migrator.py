"""Unit tests for database migrator."""

from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import src.infrastructure.storage.sqlite.migrations.migrator as migrator
from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    apply_migration,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
)


class TestMigrationInfo:
    """Tests for MigrationInfo dataclass."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert info.path == migration_file
        assert len(info.checksum) == 16

    def test_from_file_rejects_bad_name(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")
        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(bad)

    def test_checksum_tracks_content(self, tmp_path: Path):
        first = tmp_path / "v001_a.sql"
        first.write_text("SELECT 1;")
        second = tmp_path / "v002_b.sql"
        second.write_text("SELECT 2;")
        assert MigrationInfo.from_file(first).checksum != MigrationInfo.from_file(second).checksum


class TestDiscoverMigrations:
    def test_ships_initial_schema(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)

    def test_skips_invalid_files(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 3;")
        assert [m.name for m in discover_migrations(tmp_path)] == ["first", "second"]


class TestInitializeDatabase:
    async def test_creates_every_table(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"
        results = await initialize_database(db_path, create_backup_before=False)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)

        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
            applied = await get_applied_migrations(conn)
        assert set(REQUIRED_TABLES) <= tables
        assert "001" in applied

    async def test_second_run_is_a_no_op(self, tmp_path: Path):
        db_path = tmp_path / "again.db"
        await initialize_database(db_path, create_backup_before=False)
        assert await initialize_database(db_path, create_backup_before=False) == []

    async def test_backup_removed_after_success(self, tmp_path: Path):
        db_path = tmp_path / "backed.db"
        await initialize_database(db_path, create_backup_before=False)
        await initialize_database(db_path, create_backup_before=True)
        assert list(tmp_path.glob("backed.backup_*.db")) == []

    async def test_failed_migration_is_reported(self, tmp_path: Path):
        migrations_dir = tmp_path / "migrations"
        migrations_dir.mkdir()
        (migrations_dir / "v001_broken.sql").write_text("CREATE TABLE (;")

        with patch.object(
            migrator, "discover_migrations",
            return_value=discover_migrations(migrations_dir),
        ):
            results = await initialize_database(tmp_path / "broken.db", create_backup_before=False)

        assert len(results) == 1
        assert results[0].success is False
        assert results[0].error


class TestApplyMigration:
    async def test_records_checksum(self, tmp_path: Path):
        migration_file = tmp_path / "v001_tracking.sql"
        migration_file.write_text(
            """
            CREATE TABLE schema_migrations (
                version TEXT PRIMARY KEY, name TEXT NOT NULL, checksum TEXT,
                applied_at TEXT DEFAULT (datetime('now')), execution_time_ms INTEGER
            );
            """
        )
        info = MigrationInfo.from_file(migration_file)

        async with aiosqlite.connect(tmp_path / "apply.db") as conn:
            result = await apply_migration(conn, info)
            applied = await get_applied_migrations(conn)

        assert result.success is True
        assert applied == {"001": info.checksum}

    async def test_applied_migrations_on_fresh_db(self, tmp_path: Path):
        async with aiosqlite.connect(tmp_path / "empty.db") as conn:
            assert await get_applied_migrations(conn) == {}


class TestBackup:
    def test_create_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "data.db"
        db_path.write_bytes(b"original")

        backup_path = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup_path)

        assert backup_path.exists()
        assert db_path.read_bytes() == b"original"


class TestMigrationStatus:
    async def test_missing_database(self, tmp_path: Path):
        status = await get_migration_status(tmp_path / "absent.db")
        assert status["exists"] is False
        assert status["current_version"] is None
        assert "001" in status["pending_migrations"]
        assert status["missing_tables"] == list(REQUIRED_TABLES)

    async def test_migrated_database(self, tmp_path: Path):
        db_path = tmp_path / "status.db"
        await initialize_database(db_path, create_backup_before=False)

        status = await get_migration_status(db_path)

        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []
        assert status["missing_tables"] == []
