#!/usr/bin/env python3
"""
Second Brain management CLI.

Usage:
    python manage.py start       Start the API server
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Show migration status and schema checks
    python manage.py export      Write every collection as one JSON snapshot
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from second_brain.config import configure_logging, get_settings


def cmd_start(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port

    print(f"Starting server on {host}:{port}...")
    uvicorn.run(
        "second_brain.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def cmd_migrate(args: argparse.Namespace) -> None:
    from second_brain.infrastructure.storage.sqlite.migrations.migrator import (
        initialize_database,
    )

    db_path = Path(args.db) if args.db else None
    results = asyncio.run(
        initialize_database(db_path, create_backup_before=not args.no_backup)
    )

    if not results:
        print("Database is up to date.")
        return

    for r in results:
        mark = "OK  " if r.success else "FAIL"
        print(f"  [{mark}] v{r.version} {r.name} ({r.execution_time_ms}ms)")
        if r.error:
            print(f"         {r.error}")

    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    from second_brain.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        verify_schema_integrity,
    )

    db_path = Path(args.db) if args.db else get_settings().storage.db_path
    status = asyncio.run(get_migration_status(db_path))

    print(f"Database: {db_path}")
    if not status["exists"]:
        print("  not created yet")
        print(f"  pending: {', '.join(status['pending_migrations']) or '-'}")
        return

    print(f"  current version: {status['current_version'] or '-'}")
    print(f"  applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"  pending: {', '.join(status['pending_migrations']) or '-'}")

    failed = False
    for check in asyncio.run(verify_schema_integrity(db_path)):
        print(f"  {check['check']}: {check['status']}")
        if check.get("missing"):
            print(f"    missing tables: {', '.join(check['missing'])}")
        failed = failed or check["status"] != "PASS"

    if failed:
        sys.exit(1)


async def _export(db_path: Path) -> dict:
    from second_brain.application.use_cases import ExportDatasetUseCase
    from second_brain.infrastructure.storage.sqlite import ConnectionPool, SQLiteRecordStore

    pool = ConnectionPool(db_path, pool_size=1)
    try:
        dataset = await ExportDatasetUseCase(SQLiteRecordStore(pool)).execute()
    finally:
        await pool.close()
    return dataset.to_wire()


def cmd_export(args: argparse.Namespace) -> None:
    db_path = Path(args.db) if args.db else get_settings().storage.db_path
    if not db_path.exists():
        print(f"Error: database not found at {db_path}. Run 'migrate' first.")
        sys.exit(1)

    content = json.dumps(asyncio.run(_export(db_path)), indent=2)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        print(f"Snapshot written -> {args.output}")
    else:
        print(content)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Second Brain management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # start
    p_start = sub.add_parser("start", help="Start the API server")
    p_start.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_start.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_start.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_start.set_defaults(func=cmd_start)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_status.set_defaults(func=cmd_status)

    # export
    p_export = sub.add_parser("export", help="Export all collections as JSON")
    p_export.add_argument("--db", default=None, help="Database path (default: from settings)")
    p_export.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    p_export.set_defaults(func=cmd_export)

    args = parser.parse_args()
    if args.command != "export" or args.output:
        configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
