"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Integrity rules enforced here:
- UNIQUE(email): concurrent registrations of one email cannot both insert.
  The losing INSERT surfaces as EmailAlreadyClaimed.
- Forward-only status: update() refuses to move an EMAIL_VALIDATED account
  back to AWAITING_VALIDATION (the WHERE clause matches no row).
"""

import logging
from pathlib import Path
from typing import Any

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyClaimed
from src.domain.ports import Account, AccountStatus

logger = logging.getLogger(__name__)

_COLUMNS = "id::text, name, email, phone, password_hash, status, created_at, updated_at"

# Account field -> SQL expression usable in a WHERE clause
_FILTER_COLUMNS = {
    "id": "id::text",
    "name": "name",
    "email": "email",
    "phone": "phone",
    "password_hash": "password_hash",
    "status": "status",
}


def _row_to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        name=row[1],
        email=row[2],
        phone=row[3],
        password_hash=row[4],
        status=AccountStatus(row[5]),
        created_at=row[6],
        updated_at=row[7],
    )


def _where(filters: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build a parameterized WHERE clause from whitelisted filters."""
    clauses = []
    params: list[Any] = []
    for key, value in filters.items():
        column = _FILTER_COLUMNS.get(key)
        if column is None:
            raise ValueError(f"Unknown account filter: {key}")
        clauses.append(f"{column} = %s")
        params.append(value.value if isinstance(value, AccountStatus) else value)
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create(self, account: Account) -> Account:
        """
        Insert a new account row.

        Raises:
            EmailAlreadyClaimed: If the UNIQUE(email) constraint rejects the row
        """
        sql = f"""
            INSERT INTO accounts (name, email, phone, password_hash, status)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
        """

        logger.info("Saving account %s", account.email)
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (
                        account.name,
                        account.email,
                        account.phone,
                        account.password_hash,
                        account.status.value,
                    ),
                )
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            raise EmailAlreadyClaimed(account.email) from e
        return _row_to_account(row)

    def exists(self, **filters: Any) -> bool:
        where, params = _where(filters)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT EXISTS (SELECT 1 FROM accounts{where})", params)
            return bool(cursor.fetchone()[0])

    def find_one(self, **filters: Any) -> Account | None:
        where, params = _where(filters)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_COLUMNS} FROM accounts{where} LIMIT 1", params)
            row = cursor.fetchone()
        return _row_to_account(row) if row is not None else None

    def find_all(self, **filters: Any) -> list[Account]:
        where, params = _where(filters)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_COLUMNS} FROM accounts{where} ORDER BY created_at", params)
            return [_row_to_account(row) for row in cursor.fetchall()]

    def update(self, account: Account) -> Account:
        """
        Save the mutable columns of an account, matched by id.

        The status guard only lets a row stay where it is or move forward
        from AWAITING_VALIDATION.

        Raises:
            LookupError: If no row matched (unknown id or backward transition)
        """
        sql = f"""
            UPDATE accounts
            SET name = %s, phone = %s, password_hash = %s, status = %s, updated_at = NOW()
            WHERE id::text = %s
              AND (status = %s OR status = %s)
            RETURNING {_COLUMNS}
        """

        logger.info("Updating account %s", account.email)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    account.name,
                    account.phone,
                    account.password_hash,
                    account.status.value,
                    account.id,
                    account.status.value,
                    AccountStatus.AWAITING_VALIDATION.value,
                ),
            )
            row = cursor.fetchone()
            conn.commit()
        if row is None:
            raise LookupError(f"Account {account.id} not updated to {account.status.value}")
        return _row_to_account(row)

    def delete_all(self) -> None:
        logger.info("Deleting all accounts")
        with self._pool.connection() as conn:
            conn.execute("DELETE FROM accounts")
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
