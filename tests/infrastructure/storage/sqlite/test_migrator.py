"""Unit tests for database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestMigrationInfo:
    """Tests for MigrationInfo dataclass."""

    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v002_add_orders_index.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "002"
        assert info.name == "add_orders_index"
        assert len(info.checksum) == 16

    def test_from_file_invalid_filename_raises(self, tmp_path: Path):
        invalid_file = tmp_path / "orders.sql"
        invalid_file.write_text("SELECT 1;")

        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(invalid_file)


def test_discover_finds_initial_schema():
    versions = [m.version for m in discover_migrations()]
    assert versions[0] == "001"


class TestInitializeDatabase:
    async def test_fresh_database(self, tmp_path: Path):
        db_path = tmp_path / "fresh.db"

        results = await initialize_database(db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        checks = {c["check"]: c for c in await verify_schema_integrity(db_path)}
        assert checks["required_tables"]["missing"] == []
        assert checks["integrity"]["status"] == "PASS"

    async def test_second_run_is_noop(self, tmp_path: Path):
        db_path = tmp_path / "again.db"
        await initialize_database(db_path, create_backup_before=False)

        assert await initialize_database(db_path) == []
        assert not list(tmp_path.glob("*.backup_*"))

    async def test_status(self, tmp_path: Path):
        db_path = tmp_path / "status.db"
        assert (await get_migration_status(db_path))["exists"] is False

        await initialize_database(db_path, create_backup_before=False)
        status = await get_migration_status(db_path)

        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_line_item_shape_enforced_by_schema(self, tmp_path: Path):
        db_path = tmp_path / "shape.db"
        await initialize_database(db_path, create_backup_before=False)

        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("INSERT INTO customers (name) VALUES ('C')")
            await conn.execute(
                "INSERT INTO quotes (quote_number, customer_id, quote_date, expiry_date) "
                "VALUES ('QTE-1', 1, '2026-01-01', '2026-01-31')"
            )
            with pytest.raises(aiosqlite.IntegrityError):
                await conn.execute(
                    "INSERT INTO quote_line_items "
                    "(quote_id, is_custom_part, part_id, custom_part_name, "
                    "custom_part_description, quantity, unit_price, total_price) "
                    "VALUES (1, 1, NULL, 'Custom', NULL, 1, '1', '1')"
                )


def test_required_tables_cover_schema():
    assert {"quotes", "orders", "part_categories", "exchange_rates"} <= set(REQUIRED_TABLES)
