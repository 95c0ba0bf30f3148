#!/usr/bin/env python3
"""
Shop Ledger management CLI.

Usage:
    python manage.py migrate     Apply pending schema migrations
    python manage.py db-status   Show applied and pending migrations
    python manage.py start       Start the API server in the background
    python manage.py stop        Graceful shutdown
    python manage.py dev         Start the API server with auto-reload
    python manage.py status      Check if server is running
"""

import argparse
import asyncio
import os
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".shopledger.pid"


def _read_pid() -> int | None:
    """Read PID from the PID file, return None if missing or stale."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
    except (ValueError, OSError):
        return None
    if _is_pid_alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def _is_pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


def _is_port_free(port: int) -> bool:
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False


def _db_path(args: argparse.Namespace) -> Path | None:
    return Path(args.db) if args.db else None


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations, backing up an existing database first."""
    from src.config import configure_logging
    from src.infrastructure.storage.sqlite.migrations import initialize_database

    configure_logging()
    results = asyncio.run(
        initialize_database(_db_path(args), create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
        return
    for result in results:
        state = "ok" if result.success else f"FAILED: {result.error}"
        print(f"  v{result.version} {result.name} ({result.execution_time_ms} ms) {state}")
    if not all(r.success for r in results):
        sys.exit(1)


def cmd_db_status(args: argparse.Namespace) -> None:
    """Print the migration status of the database."""
    from src.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status(_db_path(args)))
    if not status["exists"]:
        print("Database does not exist yet. Run 'migrate'.")
    else:
        print(f"Current version: {status['current_version']}")
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")
    if status["missing_tables"]:
        print(f"Missing tables: {', '.join(status['missing_tables'])}")


def _uvicorn_cmd(args: argparse.Namespace, reload: bool = False) -> list[str]:
    cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if reload:
        cmd.append("--reload")
    return cmd


def cmd_start(args: argparse.Namespace) -> None:
    """Start the server in the background and record its PID."""
    existing_pid = _read_pid()
    if existing_pid is not None:
        print(f"Server already running (PID {existing_pid}). Use 'stop' first.")
        sys.exit(1)

    if not _is_port_free(args.port):
        print(f"Error: Port {args.port} is in use.")
        sys.exit(1)

    print(f"Starting server on {args.host}:{args.port}...")
    proc = subprocess.Popen(_uvicorn_cmd(args), cwd=str(ROOT_DIR))
    PID_FILE.write_text(str(proc.pid))
    print(f"Server started (PID {proc.pid}).")
    print(f"  API:      http://{args.host}:{args.port}/api")
    print(f"  PID file: {PID_FILE}")


def cmd_stop(args: argparse.Namespace) -> None:
    """Stop the running server."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return

    print(f"Stopping server (PID {pid})...")
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError as e:
        print(f"Error: Could not signal PID {pid}: {e}")
        sys.exit(1)

    for _ in range(30):
        if not _is_pid_alive(pid):
            break
        time.sleep(0.1)
    else:
        print("Warning: Process did not exit within 3 seconds.")

    PID_FILE.unlink(missing_ok=True)
    print("Server stopped." if not _is_pid_alive(pid) else "Warning: Server may still be running.")


def cmd_dev(args: argparse.Namespace) -> None:
    """Run the server in the foreground with --reload."""
    print(f"Starting server on {args.host}:{args.port} (reload mode)...")
    try:
        subprocess.run(_uvicorn_cmd(args, reload=True), cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_status(args: argparse.Namespace) -> None:
    """Check if the server is running."""
    pid = _read_pid()
    if pid is not None:
        print(f"Server is running (PID {pid}).")
    elif not _is_port_free(args.port):
        print(f"No PID file. Port {args.port} is in use by another process.")
    else:
        print(f"Server is not running (port {args.port} is free).")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Shop Ledger management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db", help="Database file (default from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # db-status
    p_db_status = sub.add_parser("db-status", help="Show migration status")
    p_db_status.add_argument("--db", help="Database file (default from settings)")
    p_db_status.set_defaults(func=cmd_db_status)

    # start
    p_start = sub.add_parser("start", help="Start the server")
    p_start.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    p_start.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_start.set_defaults(func=cmd_start)

    # stop
    p_stop = sub.add_parser("stop", help="Stop the server")
    p_stop.set_defaults(func=cmd_stop)

    # dev
    p_dev = sub.add_parser("dev", help="Start the server with auto-reload")
    p_dev.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    p_dev.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    p_dev.set_defaults(func=cmd_dev)

    # status
    p_status = sub.add_parser("status", help="Check if server is running")
    p_status.add_argument("--port", type=int, default=8000, help="Port to check (default: 8000)")
    p_status.set_defaults(func=cmd_status)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
