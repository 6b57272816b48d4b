"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Atomicity Design - Single-Use Codes:
-----------------------------------
Redeeming a pending code (verification or password reset) is a
read-check-write. Both consume_* methods run it inside one transaction:

1. **SELECT ... FOR UPDATE**: Locks the account row. A concurrent
   redemption of the same code blocks here until the first commits.

2. **Decision in Python**: Account.check_pending_code() compares the
   code in constant time (secrets.compare_digest) and checks expiry.

3. **Conditional UPDATE**: On success the pending code, expiry and
   action are cleared in the same transaction. The blocked request then
   reads the cleared row and fails with INVALID_CODE or ALREADY_VERIFIED.

Email uniqueness is the table's UNIQUE constraint; create() relies on
INSERT ... ON CONFLICT DO NOTHING rather than a prior lookup.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from campusconnect.domain.models import Account, CodeCheck, PendingAction, Role
from campusconnect.domain.session import PROFILE_FIELDS

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, email, password_hash, name, phone, whatsapp, role, access_code, is_verified, "
    "pending_code, pending_code_expires_at, pending_action, created_at, updated_at"
)


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

    def create(self, account: Account) -> bool:
        """
        Insert the full account row in one statement.

        Returns:
            True if inserted, False if the email already exists
        """
        insert_sql = f"""
            INSERT INTO accounts ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
        """
        params = (
            account.id,
            account.email,
            account.password_hash,
            account.name,
            account.phone,
            account.whatsapp,
            account.role.value,
            account.access_code,
            account.is_verified,
            account.pending_code,
            account.pending_code_expires_at,
            account.pending_action.value if account.pending_action else None,
            account.created_at,
            account.updated_at,
        )

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(insert_sql, params)
            conn.commit()
            return cursor.rowcount == 1

    def get_by_email(self, email: str) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s", (email,))

    def get_by_id(self, account_id: str) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE id = %s", (account_id,))

    def set_pending_code(
        self,
        email: str,
        code: str,
        expires_at: datetime,
        action: PendingAction,
        *,
        unverified_only: bool = False,
    ) -> bool:
        """
        Overwrite the pending code slot in a single UPDATE.

        With unverified_only the WHERE clause also requires
        is_verified = FALSE, so a resend racing a verify cannot
        re-arm a verification code on a verified account.
        """
        update_sql = """
            UPDATE accounts
            SET pending_code = %s,
                pending_code_expires_at = %s,
                pending_action = %s,
                updated_at = NOW()
            WHERE email = %s
        """
        if unverified_only:
            update_sql += " AND is_verified = FALSE"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(update_sql, (code, expires_at, action.value, email))
            conn.commit()
            return cursor.rowcount == 1

    def consume_verification_code(self, email: str, code: str, now: datetime) -> CodeCheck:
        """
        Redeem a verification code under a row lock.

        Args:
            email: Normalized email address
            code: Submitted code (trimmed)
            now: Current time, compared against the stored expiry

        Returns:
            CodeCheck indicating success or the specific failure
        """
        verify_sql = """
            UPDATE accounts
            SET is_verified = TRUE,
                pending_code = NULL,
                pending_code_expires_at = NULL,
                pending_action = NULL,
                updated_at = NOW()
            WHERE email = %s AND is_verified = FALSE
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s FOR UPDATE", (email,))
            row = cursor.fetchone()

            if row is None:
                conn.commit()
                return CodeCheck.NOT_FOUND

            account = _row_to_account(row)
            if account.is_verified:
                conn.commit()
                return CodeCheck.ALREADY_VERIFIED

            result = account.check_pending_code(code, now, PendingAction.VERIFY)
            if result == CodeCheck.SUCCESS:
                cursor.execute(verify_sql, (email,))
            conn.commit()
            return result

    def consume_reset_code(
        self, email: str, code: str, now: datetime, password_hash: str
    ) -> CodeCheck:
        """
        Redeem a reset code and store the new password hash under a row lock.

        Returns:
            CodeCheck indicating success or the specific failure
        """
        reset_sql = """
            UPDATE accounts
            SET password_hash = %s,
                pending_code = NULL,
                pending_code_expires_at = NULL,
                pending_action = NULL,
                updated_at = NOW()
            WHERE email = %s
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s FOR UPDATE", (email,))
            row = cursor.fetchone()

            if row is None:
                conn.commit()
                return CodeCheck.NOT_FOUND

            result = _row_to_account(row).check_pending_code(code, now, PendingAction.RESET)
            if result == CodeCheck.SUCCESS:
                cursor.execute(reset_sql, (password_hash, email))
            conn.commit()
            return result

    def update_profile(self, account_id: str, changes: dict[str, str]) -> Account | None:
        """
        Update contact fields and return the updated row.

        Only name, phone and whatsapp can be written here.
        """
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Not a profile field: {', '.join(sorted(unknown))}")

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in changes
        )
        update_sql = sql.SQL(
            "UPDATE accounts SET {}, updated_at = NOW() WHERE id = %s RETURNING {}"
        ).format(assignments, sql.SQL(_COLUMNS))

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(update_sql, (*changes.values(), account_id))
            row = cursor.fetchone()
            conn.commit()
        return _row_to_account(row) if row else None

    def _fetch_one(self, query: str, params: tuple[Any, ...]) -> Account | None:
        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(query, params)
            row = cursor.fetchone()
        return _row_to_account(row) if row else None


def _row_to_account(row: dict[str, Any]) -> Account:
    return Account(
        id=str(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        name=row["name"],
        phone=row["phone"],
        whatsapp=row["whatsapp"],
        access_code=row["access_code"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        role=Role(row["role"]),
        is_verified=row["is_verified"],
        pending_code=row["pending_code"],
        pending_code_expires_at=row["pending_code_expires_at"],
        pending_action=PendingAction(row["pending_action"]) if row["pending_action"] else None,
    )


def run_migrations(pool: ConnectionPool, migrations_dir: Path | None = None) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Override for the default repository-root migrations/
    """
    # Structure: campusconnect/adapters/repository/postgres.py -> migrations/
    if migrations_dir is None:
        migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
