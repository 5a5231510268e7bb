"""
PostgreSQL repository adapter - Implements RegistrantStore protocol.

This module provides the PostgreSQL implementation of the domain's
store port using psycopg3 with raw SQL.

Uniqueness
----------
Duplicate prevention lives in the database, not in the read that the
domain service performs before inserting:

1. **registrants_email_key**: unique index on ``lower(email)``, created by
   the migrations. Always present.

2. **registrants_phone_key**: unique index on ``phone``. ``apply_phone_policy``
   creates it at startup when phone uniqueness is enabled and drops it
   when disabled, so the index always follows the current setting.

An insert that violates either index raises ``UniqueViolation``; the
adapter translates it into ``DuplicateRegistrant`` using the name of the
violated constraint.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateRegistrant
from src.domain.ports import Registrant

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "registrants_email_key"
PHONE_CONSTRAINT = "registrants_phone_key"

_CONSTRAINT_FIELDS = {
    EMAIL_CONSTRAINT: "email",
    PHONE_CONSTRAINT: "phone",
}

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

_COLUMNS = "id, first_name, last_name, email, phone, created_at"


def _row_to_registrant(row: tuple) -> Registrant:
    return Registrant(
        id=str(row[0]),
        first_name=row[1],
        last_name=row[2],
        email=row[3],
        phone=row[4],
        created_at=row[5],
    )


class PostgresRegistrantStore:
    """
    Implements RegistrantStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Registrant | None:
        """Fetch the registrant whose email matches case-insensitively."""
        sql = f"SELECT {_COLUMNS} FROM registrants WHERE lower(email) = lower(%s)"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()
        return _row_to_registrant(row) if row is not None else None

    def find_by_phone(self, phone: str) -> Registrant | None:
        sql = f"SELECT {_COLUMNS} FROM registrants WHERE phone = %s LIMIT 1"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (phone,))
            row = cursor.fetchone()
        return _row_to_registrant(row) if row is not None else None

    def insert(self, first_name: str, last_name: str, email: str, phone: str) -> Registrant:
        """
        Insert a registrant and return the stored row.

        The id and created_at are assigned by the database.

        Raises:
            DuplicateRegistrant: If a unique index rejects the row
        """
        sql = f"""
            INSERT INTO registrants (first_name, last_name, email, phone)
            VALUES (%s, %s, %s, %s)
            RETURNING {_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (first_name, last_name, email, phone))
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            field = _CONSTRAINT_FIELDS.get(e.diag.constraint_name or "", "email")
            raise DuplicateRegistrant((field,)) from e

        return _row_to_registrant(row)

    def ping(self) -> None:
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


def apply_phone_policy(pool: ConnectionPool, enabled: bool) -> None:
    """
    Create or drop the unique phone index to match the phone policy.

    Enabling fails if the table already holds duplicate phone numbers.
    """
    if enabled:
        sql = f"CREATE UNIQUE INDEX IF NOT EXISTS {PHONE_CONSTRAINT} ON registrants (phone)"
        logger.info("Enforcing unique phone numbers")
    else:
        sql = f"DROP INDEX IF EXISTS {PHONE_CONSTRAINT}"
        logger.info("Phone numbers may repeat")

    try:
        with pool.connection() as conn:
            conn.execute(sql)
    except errors.UniqueViolation as e:
        raise RuntimeError("Cannot enforce unique phones: duplicates already stored") from e


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding the *.sql files

    Raises:
        RuntimeError: If no migrations are found or one fails
    """
    sql_files = sorted(migrations_dir.glob("*.sql")) if migrations_dir.is_dir() else []

    if not sql_files:
        raise RuntimeError(f"No database migrations found in {migrations_dir}")

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
