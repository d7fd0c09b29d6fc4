r"""
Database error classification.

Two steps, kept apart so the policy stays a pure function:

1. `extract_error_info(exc)` reads whatever the driver raised (psycopg, asyncpg,
   sqlite3, usually wrapped by SQLAlchemy) into a flat `DatabaseErrorInfo`
   record: SQLSTATE code plus the optional constraint / table / column / detail
   diagnostics.

2. `classify_database_error(info)` maps that record to an application error:

| SQLSTATE | Meaning               | Category          | Message                                   |
| -------- | --------------------- | ----------------- | ----------------------------------------- |
| `23505`  | unique_violation      | `ConflictError`   | email-specific or "Duplicate record"      |
| `23503`  | foreign_key_violation | `BadRequestError` | "Foreign key violation"                   |
| `23502`  | not_null_violation    | `BadRequestError` | "Null value in non-nullable column"       |
| `42P01`  | undefined_table       | `NotFoundError`   | "Table not found"                         |
| other    | -                     | `InternalError`   | "Database error"                          |

Every input maps to exactly one category; unknown codes (or no code at all)
fall through to InternalError.

Email detection is a substring check: the unique violation is reported as a
duplicate email when the detail or the constraint name contains `email`. This
is a heuristic, not a schema lookup; a constraint such as `uq_users_backup_email`
or a detail mentioning an `email`-like value in another column also matches, and
that is accepted.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .base import AppError, BadRequestError, ConflictError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

EMAIL_CONFLICT_MESSAGE = "A user with this email already exists."
DUPLICATE_MESSAGE = "Duplicate record"
FOREIGN_KEY_MESSAGE = "Foreign key violation"
NOT_NULL_MESSAGE = "Null value in non-nullable column"
UNDEFINED_TABLE_MESSAGE = "Table not found"
DATABASE_ERROR_MESSAGE = "Database error"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    FOREIGN_KEY_VIOLATION = "23503"
    NOT_NULL_VIOLATION = "23502"
    UNDEFINED_TABLE = "42P01"


@dataclass(frozen=True)
class DatabaseErrorInfo:
    """Raw, driver-neutral description of a failed database operation."""

    code: str | None = None
    detail: str | None = None
    constraint: str | None = None
    table: str | None = None
    column: str | None = None


# =================================================================================================================
# Classification (pure)
# =================================================================================================================

def _is_email_violation(info: DatabaseErrorInfo) -> bool:
    detail = info.detail or ""
    return "email" in detail or "email" in (info.constraint or "")


def classify_database_error(info: DatabaseErrorInfo) -> AppError:
    """
    Map a raw database error to its application error category.

    The returned exception is not raised; the caller decides (`raise err from exc`).
    """
    code = str(info.code) if info.code is not None else None

    if code == PostgresErrorCodes.UNIQUE_VIOLATION:
        message = EMAIL_CONFLICT_MESSAGE if _is_email_violation(info) else DUPLICATE_MESSAGE
        return ConflictError(message, detail=info.detail, constraint=info.constraint, table=info.table)

    if code == PostgresErrorCodes.FOREIGN_KEY_VIOLATION:
        return BadRequestError(FOREIGN_KEY_MESSAGE, detail=info.detail, constraint=info.constraint, table=info.table)

    if code == PostgresErrorCodes.NOT_NULL_VIOLATION:
        return BadRequestError(NOT_NULL_MESSAGE, column=info.column, table=info.table, detail=info.detail)

    if code == PostgresErrorCodes.UNDEFINED_TABLE:
        return NotFoundError(UNDEFINED_TABLE_MESSAGE, table=info.table, detail=info.detail)

    return InternalError(DATABASE_ERROR_MESSAGE, code=code, detail=info.detail)


# =================================================================================================================
# Extraction from driver exceptions
# =================================================================================================================

def _first_attr(obj: Any, *names: str) -> Any:
    for name in names:
        value = getattr(obj, name, None)
        if value:
            return value
    return None


def _from_postgres_driver(err: Any) -> DatabaseErrorInfo | None:
    """
    Read SQLSTATE and diagnostics from a PostgreSQL driver error.

    - psycopg / psycopg2: `sqlstate` or `pgcode`, diagnostics under `err.diag`
    - asyncpg: `sqlstate`, diagnostics as plain attributes
    """
    code = _first_attr(err, "sqlstate", "pgcode")
    if not code:
        return None

    diag = getattr(err, "diag", None)
    if diag is not None:
        return DatabaseErrorInfo(
            code=str(code),
            detail=getattr(diag, "message_detail", None),
            constraint=getattr(diag, "constraint_name", None),
            table=getattr(diag, "table_name", None),
            column=getattr(diag, "column_name", None),
        )

    return DatabaseErrorInfo(
        code=str(code),
        detail=getattr(err, "detail", None),
        constraint=getattr(err, "constraint_name", None),
        table=getattr(err, "table_name", None),
        column=getattr(err, "column_name", None),
    )


# SQLite reports constraint failures as messages only:
#   'UNIQUE constraint failed: users.email'
#   'NOT NULL constraint failed: users.name'
#   'FOREIGN KEY constraint failed'
#   'no such table: users'
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<cols>.+)$", re.IGNORECASE)
_SQLITE_NOT_NULL = re.compile(r"NOT NULL constraint failed: (?P<table>[^.\s]+)\.(?P<col>\S+)", re.IGNORECASE)
_SQLITE_FOREIGN_KEY = re.compile(r"FOREIGN KEY constraint failed", re.IGNORECASE)
_SQLITE_NO_TABLE = re.compile(r"no such table: (?P<table>\S+)", re.IGNORECASE)


def _from_message(msg: str) -> DatabaseErrorInfo:
    """Fallback for dialects without SQLSTATE codes (SQLite)."""
    msg = (msg or "").strip()

    m = _SQLITE_UNIQUE.search(msg)
    if m:
        targets = [c.strip() for c in m.group("cols").split(",")]
        table = targets[0].split(".")[0] if "." in targets[0] else None
        columns = [t.split(".")[-1] for t in targets]
        return DatabaseErrorInfo(
            code=PostgresErrorCodes.UNIQUE_VIOLATION.value,
            detail=msg,
            constraint=", ".join(targets),
            table=table,
            column=", ".join(columns),
        )

    m = _SQLITE_NOT_NULL.search(msg)
    if m:
        return DatabaseErrorInfo(
            code=PostgresErrorCodes.NOT_NULL_VIOLATION.value,
            detail=msg,
            table=m.group("table"),
            column=m.group("col"),
        )

    if _SQLITE_FOREIGN_KEY.search(msg):
        return DatabaseErrorInfo(code=PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value, detail=msg)

    m = _SQLITE_NO_TABLE.search(msg)
    if m:
        return DatabaseErrorInfo(code=PostgresErrorCodes.UNDEFINED_TABLE.value, detail=msg, table=m.group("table"))

    logger.warning("Unrecognized database error message", extra={"message_snippet": msg[:200]})
    return DatabaseErrorInfo(detail=msg or None)


_INFO_FIELDS = ("code", "detail", "constraint", "table", "column")


def extract_error_info(exc: BaseException) -> DatabaseErrorInfo:
    """
    Best-effort extraction of a `DatabaseErrorInfo` from any database exception.

    SQLAlchemy's DBAPIError is unwrapped to the driver error (`.orig`). The asyncpg
    adapter wraps the real asyncpg error once more, reachable via `__cause__`.
    """
    orig = getattr(exc, "orig", None) or exc

    # The adapter error has the SQLSTATE and detail but not the constraint, table
    # or column; those live on the asyncpg error. Each field comes from the first
    # candidate that has it.
    infos = []
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is not None and (info := _from_postgres_driver(candidate)) is not None:
            infos.append(info)

    if infos:
        merged = {name: next((getattr(i, name) for i in infos if getattr(i, name)), None) for name in _INFO_FIELDS}
        info = DatabaseErrorInfo(**merged)
        # Driver diagnostics may carry schema details; keep them at DEBUG.
        logger.debug("Database error diagnostic", extra={"db_code": info.code, "constraint_name": info.constraint})
        return info

    return _from_message(str(orig))


def map_database_error(exc: BaseException) -> AppError:
    """Extract and classify in one call."""
    return classify_database_error(extract_error_info(exc))


__all__ = [
    "PostgresErrorCodes",
    "DatabaseErrorInfo",
    "classify_database_error",
    "extract_error_info",
    "map_database_error",
    "EMAIL_CONFLICT_MESSAGE",
    "DUPLICATE_MESSAGE",
]
