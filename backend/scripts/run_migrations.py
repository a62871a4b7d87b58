"""Bring the essay grader schema up to date before the API starts serving.

Deploys call this ahead of the web process. It waits for the database to
answer a trivial query, then runs ``alembic upgrade``. With ``--sql`` it only
renders the migration SQL and never connects.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError

LOGGER = logging.getLogger("essay_grader.migrations")
URL_PLACEHOLDER = "%(ESSAY_DATABASE_URL)s"
DEFAULT_TIMEOUT = int(os.getenv("ESSAY_DB_MIGRATION_TIMEOUT", "60"))
DEFAULT_POLL_INTERVAL = float(os.getenv("ESSAY_DB_MIGRATION_POLL_INTERVAL", "2"))
BACKEND_ROOT = Path(__file__).resolve().parent.parent


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upgrade the essay grader database schema.")
    parser.add_argument(
        "--revision",
        default=os.getenv("ESSAY_DB_MIGRATION_REVISION", "head"),
        help="Target revision (default: head).",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds to wait for the database (default: {DEFAULT_TIMEOUT}).",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between connection attempts (default: {DEFAULT_POLL_INTERVAL}).",
    )
    parser.add_argument(
        "--config",
        default=str(BACKEND_ROOT / "alembic.ini"),
        help="Path to alembic.ini.",
    )
    parser.add_argument(
        "--sql",
        action="store_true",
        help="Print the migration SQL instead of applying it.",
    )
    return parser.parse_args(argv)


def load_config(config_path: str) -> Config:
    config = Config(config_path)
    config.set_main_option("script_location", str(BACKEND_ROOT / "alembic"))
    return config


def resolve_database_url(config: Config) -> str:
    configured = config.get_main_option("sqlalchemy.url")
    if configured and configured != URL_PLACEHOLDER:
        return configured
    env_url = os.getenv("ESSAY_DATABASE_URL")
    if not env_url:
        raise RuntimeError("ESSAY_DATABASE_URL must be set before running migrations.")
    config.set_main_option("sqlalchemy.url", env_url.replace("%", "%%"))
    return env_url


def wait_for_database(database_url: str, *, timeout: int, poll_interval: float) -> None:
    """Retry ``SELECT 1`` until it succeeds; give up after ``timeout`` seconds."""
    deadline = time.monotonic() + timeout
    last_error: Optional[Exception] = None
    engine: Engine = create_engine(database_url, future=True, pool_pre_ping=True)
    try:
        while True:
            try:
                with engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
                LOGGER.info("Database answered the readiness check.")
                return
            except OperationalError as exc:
                last_error = exc
                LOGGER.warning("Database not reachable yet: %s", exc)
            except SQLAlchemyError as exc:
                last_error = exc
                LOGGER.error("Readiness check failed permanently: %s", exc)
                break
            if time.monotonic() + poll_interval >= deadline:
                break
            time.sleep(poll_interval)
    finally:
        engine.dispose()

    raise RuntimeError(f"Database was not ready within {timeout}s.") from last_error


def run_migrations(
    revision: str,
    *,
    timeout: int,
    poll_interval: float,
    config: Optional[Config] = None,
    sql_only: bool = False,
) -> None:
    config = config or load_config(str(BACKEND_ROOT / "alembic.ini"))
    database_url = resolve_database_url(config)
    if sql_only:
        LOGGER.info("Rendering migration SQL up to %s", revision)
        command.upgrade(config, revision, sql=True)
        return
    LOGGER.info("Upgrading schema to %s (timeout=%ss poll=%ss)", revision, timeout, poll_interval)
    wait_for_database(database_url, timeout=timeout, poll_interval=poll_interval)
    command.upgrade(config, revision)
    LOGGER.info("Schema is at %s.", revision)


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(
        level=os.getenv("ESSAY_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    args = parse_args(argv)
    try:
        run_migrations(
            args.revision,
            timeout=args.timeout,
            poll_interval=args.poll_interval,
            config=load_config(args.config),
            sql_only=args.sql,
        )
    except (CommandError, RuntimeError, SQLAlchemyError) as exc:
        LOGGER.exception("Migration run failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
