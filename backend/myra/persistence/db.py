"""SQLite connection handling + schema initialisation."""
from __future__ import annotations
import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

_MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")

logger = logging.getLogger(__name__)


class Database:
    """
    Handle on one SQLite database file.

    Connections run in autocommit mode; the only multi-statement atomicity is
    what callers ask for through transaction().
    """

    def __init__(self, path: str):
        self.path = path

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, check_same_thread=False, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    @contextmanager
    def connection(self, conn: Optional[sqlite3.Connection] = None) -> Iterator[sqlite3.Connection]:
        """Reuse the caller's connection (e.g. an open transaction) or open a short-lived one."""
        if conn is not None:
            yield conn
            return
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """BEGIN / COMMIT around the block, ROLLBACK and re-raise on any failure."""
        conn = self.connect()
        try:
            conn.execute("BEGIN")
            yield conn
            conn.execute("COMMIT")
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()


def init_db(database: Database) -> None:
    """Apply every pending migration SQL file, then seed the default admin."""
    directory = os.path.dirname(database.path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    conn = database.connect()
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name       TEXT PRIMARY KEY,
                applied_at TEXT NOT NULL
            )
            """
        )
        applied = {row["name"] for row in conn.execute("SELECT name FROM schema_migrations")}
        for name in sorted(os.listdir(_MIGRATIONS_DIR)):
            if not name.endswith(".sql") or name in applied:
                continue
            with open(os.path.join(_MIGRATIONS_DIR, name), "r", encoding="utf-8") as f:
                sql = f.read()
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_migrations (name, applied_at) VALUES (?, ?)",
                (name, datetime.now(timezone.utc).isoformat()),
            )
            logger.info("Applied migration %s", name)
        _seed_default_user(conn)
    finally:
        conn.close()


def _seed_default_user(conn: sqlite3.Connection) -> None:
    """Insert a default admin user so a fresh database can be logged into."""
    from myra.core.config import DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD
    from myra.core.security import hash_password
    from myra.domain.access.rules import ROLE_ADMIN

    count = conn.execute("SELECT COUNT(*) FROM user_account").fetchone()[0]
    if count:
        return

    hashed = hash_password(DEFAULT_ADMIN_PASSWORD)
    conn.execute(
        """
        INSERT INTO user_account (username, given_name, family_name, role, password_hash)
        VALUES (?, ?, ?, ?, ?)
        """,
        (DEFAULT_ADMIN_USERNAME, "Default", "Administrator", ROLE_ADMIN, hashed),
    )
    logger.info("Seeded default administrator '%s'", DEFAULT_ADMIN_USERNAME)
