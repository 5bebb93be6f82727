#!/usr/bin/env python3
"""
GoParts management CLI.

Usage:
    python manage.py serve           Start the API server (foreground)
    python manage.py migrate         Apply pending database migrations
    python manage.py migrate --status
    python manage.py refresh-rates   Fetch and store the latest exchange rates
    python manage.py status          Check whether the server port is taken
"""

import argparse
import asyncio
import json
import socket
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


def _is_port_free(host: str, port: int) -> bool:
    """Check if a port is available for binding."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((host, port))
        return True
    except OSError:
        return False


def cmd_serve(args: argparse.Namespace) -> None:
    """Run uvicorn in the foreground."""
    import uvicorn

    if not _is_port_free(args.host, args.port):
        print(f"Error: port {args.port} is already in use.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=None if args.reload else args.workers,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply migrations or report their status."""
    from src.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        initialize_database,
    )

    if args.status:
        status = asyncio.run(get_migration_status(args.db_path))
        print(f"Database exists: {status['exists']}")
        print(f"Current version: {status.get('current_version', 'N/A')}")
        print(f"Pending migrations: {status.get('pending_migrations', [])}")
        return

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
    for result in results:
        label = "SUCCESS" if result.success else "FAILED"
        print(f"[{label}] v{result.version}: {result.name}")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_refresh_rates(args: argparse.Namespace) -> None:
    """Run the exchange-rate refresh job once and print its envelope."""
    from src.application.use_cases.exchange_rates import RefreshExchangeRatesUseCase
    from src.config import configure_logging
    from src.infrastructure.storage.sqlite import close_pool
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    configure_logging()

    async def run() -> dict:
        await initialize_database(create_backup_before=False)
        try:
            result = await RefreshExchangeRatesUseCase().execute(args.currencies or None)
        finally:
            await close_pool()
        return result.to_envelope()

    envelope = asyncio.run(run())
    print(json.dumps(envelope, indent=2))
    if not envelope["success"]:
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    if _is_port_free(args.host, args.port):
        print(f"Server is not running (port {args.port} is free).")
    else:
        print(f"Port {args.port} is in use; the server is probably running.")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="GoParts management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.add_argument("--workers", type=int, default=1, help="Number of uvicorn workers")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply database migrations")
    p_migrate.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_migrate.add_argument("--status", action="store_true", help="Show migration status only")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    p_migrate.set_defaults(func=cmd_migrate)

    # refresh-rates
    p_rates = sub.add_parser("refresh-rates", help="Fetch and store exchange rates")
    p_rates.add_argument(
        "currencies",
        nargs="*",
        help="Target currencies (default from settings, e.g. JPY USD)",
    )
    p_rates.set_defaults(func=cmd_refresh_rates)

    # status
    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--host", default="127.0.0.1")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
