"""
Versioned schema migrations for the GoParts database.

Migration files live next to this module as ``vNNN_name.sql`` and are applied
in version order. Each applied file is recorded in ``schema_migrations`` with
a checksum; a file edited after it was applied stops the run instead of being
re-executed. An existing database file is copied aside before migrating and
restored if the run raises.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "schema_migrations",
    "part_categories",
    "parts",
    "part_price_history",
    "customers",
    "suppliers",
    "quotes",
    "quote_line_items",
    "orders",
    "order_line_items",
    "exchange_rates",
    "user_preferences",
)


@dataclass(frozen=True)
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=match[1], name=match[2], path=path, checksum=digest[:16])


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in version order; badly named files are skipped."""
    found = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("migration_file_ignored", path=str(path))
    return found


class Migrator:
    """Applies and inspects migrations for a single database file."""

    def __init__(self, db_path: Path | None = None, directory: Path = MIGRATIONS_DIR):
        self.db_path = Path(db_path) if db_path else get_settings().storage.db_path
        self.directory = directory

    async def _applied(self, conn: aiosqlite.Connection) -> dict[str, str]:
        try:
            cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
        except aiosqlite.OperationalError:
            return {}
        return {version: checksum for version, checksum in await cursor.fetchall()}

    async def _apply(
        self, conn: aiosqlite.Connection, migration: MigrationInfo
    ) -> MigrationResult:
        started = time.monotonic()
        try:
            await conn.executescript(migration.path.read_text(encoding="utf-8"))
            elapsed = int((time.monotonic() - started) * 1000)
            await conn.execute(
                "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
                "VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error("migration_failed", version=migration.version, error=str(e))
            return MigrationResult(
                migration.version,
                migration.name,
                success=False,
                execution_time_ms=int((time.monotonic() - started) * 1000),
                error=str(e),
            )

        cursor = await conn.execute("PRAGMA foreign_key_check")
        if await cursor.fetchall():
            logger.error("migration_left_fk_violations", version=migration.version)
            return MigrationResult(
                migration.version,
                migration.name,
                success=False,
                execution_time_ms=elapsed,
                error="foreign key violations after migration",
            )

        logger.info(
            "migration_applied",
            version=migration.version,
            name=migration.name,
            execution_time_ms=elapsed,
        )
        return MigrationResult(migration.version, migration.name, True, elapsed)

    async def migrate(self, backup: bool = True) -> list[MigrationResult]:
        """Apply pending migrations; stop at the first failure."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        backup_path = self.backup() if backup and self.db_path.exists() else None
        results: list[MigrationResult] = []

        try:
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute("PRAGMA journal_mode=WAL")
                await conn.execute("PRAGMA foreign_keys=ON")
                applied = await self._applied(conn)

                for migration in discover_migrations(self.directory):
                    if migration.version in applied:
                        if applied[migration.version] != migration.checksum:
                            logger.error("migration_checksum_changed", version=migration.version)
                            break
                        continue
                    result = await self._apply(conn, migration)
                    results.append(result)
                    if not result.success:
                        break
        except Exception:
            if backup_path:
                shutil.copy2(backup_path, self.db_path)
                logger.warning("database_restored", backup_path=str(backup_path))
            raise

        if backup_path and all(r.success for r in results):
            backup_path.unlink()
        logger.info("database_migrated", db_path=str(self.db_path), applied=len(results))
        return results

    def backup(self) -> Path:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = self.db_path.with_suffix(f".backup_{stamp}.db")
        shutil.copy2(self.db_path, backup_path)
        logger.info("database_backup_created", backup_path=str(backup_path))
        return backup_path

    async def status(self) -> dict[str, Any]:
        discovered = discover_migrations(self.directory)
        if not self.db_path.exists():
            return {
                "exists": False,
                "current_version": None,
                "applied_migrations": [],
                "pending_migrations": [m.version for m in discovered],
            }
        async with aiosqlite.connect(self.db_path) as conn:
            applied = sorted(await self._applied(conn))
        return {
            "exists": True,
            "current_version": applied[-1] if applied else None,
            "applied_migrations": applied,
            "pending_migrations": [m.version for m in discovered if m.version not in applied],
        }

    async def verify(self) -> list[dict[str, Any]]:
        """Foreign key, SQLite integrity and required-table checks."""
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute("PRAGMA foreign_key_check")
            violations = len(await cursor.fetchall())
            cursor = await conn.execute("PRAGMA integrity_check")
            integrity = (await cursor.fetchone())[0]
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            tables = {row[0] for row in await cursor.fetchall()}

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        return [
            {
                "check": "foreign_keys",
                "status": "FAIL" if violations else "PASS",
                "violations": violations,
            },
            {
                "check": "integrity",
                "status": "PASS" if integrity == "ok" else "FAIL",
                "result": integrity,
            },
            {
                "check": "required_tables",
                "status": "FAIL" if missing else "PASS",
                "missing": missing,
            },
        ]


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """Apply pending migrations to db_path (settings path by default)."""
    return await Migrator(db_path).migrate(backup=create_backup_before)


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict[str, Any]:
    return await Migrator(db_path).status()


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict[str, Any]]:
    return await Migrator(db_path).verify()
