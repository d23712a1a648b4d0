"""
Persistence Error Classification for NetOps

Stores let SQLAlchemy errors propagate untouched. This module maps them onto the
API error taxonomy in one place, keyed by SQLSTATE. PostgreSQL drivers expose the
code directly; SQLite errors are translated from their extended error name or,
on older interpreters, from the message text.
"""

import logging
from typing import Optional

from sqlalchemy.exc import DBAPIError

from netops_core.exceptions import (
    ConflictError,
    InvalidIdentifierError,
    NetOpsError,
    ReferentialError,
    RequiredFieldError,
    ServerError,
    ValidationError,
)

log = logging.getLogger(__name__)

UNIQUE_VIOLATION = '23505'
FOREIGN_KEY_VIOLATION = '23503'
NOT_NULL_VIOLATION = '23502'
CHECK_VIOLATION = '23514'
INVALID_TEXT_REPRESENTATION = '22P02'

_SQLITE_ERROR_NAMES = {
    'SQLITE_CONSTRAINT_UNIQUE': UNIQUE_VIOLATION,
    'SQLITE_CONSTRAINT_PRIMARYKEY': UNIQUE_VIOLATION,
    'SQLITE_CONSTRAINT_FOREIGNKEY': FOREIGN_KEY_VIOLATION,
    'SQLITE_CONSTRAINT_NOTNULL': NOT_NULL_VIOLATION,
    'SQLITE_CONSTRAINT_CHECK': CHECK_VIOLATION,
}

_SQLITE_MESSAGES = {
    'unique constraint failed': UNIQUE_VIOLATION,
    'foreign key constraint failed': FOREIGN_KEY_VIOLATION,
    'not null constraint failed': NOT_NULL_VIOLATION,
    'check constraint failed': CHECK_VIOLATION,
}


def sqlstate(exc: DBAPIError) -> Optional[str]:
    """Return the SQLSTATE code behind a SQLAlchemy DBAPIError, if known."""
    orig = exc.orig

    # psycopg2 uses pgcode, psycopg 3 uses sqlstate
    code = getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None)
    if code:
        return code

    error_name = getattr(orig, 'sqlite_errorname', None)
    if error_name in _SQLITE_ERROR_NAMES:
        return _SQLITE_ERROR_NAMES[error_name]

    message = str(orig).lower()
    for fragment, code in _SQLITE_MESSAGES.items():
        if fragment in message:
            return code

    if 'invalid input syntax for type uuid' in message:
        return INVALID_TEXT_REPRESENTATION

    return None


def _is_delete(exc: DBAPIError) -> bool:
    statement = (exc.statement or '').lstrip().upper()
    return statement.startswith('DELETE')


def classify_db_error(exc: DBAPIError) -> NetOpsError:
    """
    Map a persistence error onto the API error taxonomy.

    Args:
        exc: The error raised by SQLAlchemy

    Returns:
        A NetOpsError subclass instance ready to render
    """
    code = sqlstate(exc)

    if code == UNIQUE_VIOLATION:
        return ConflictError()

    if code == FOREIGN_KEY_VIOLATION:
        if _is_delete(exc):
            return ReferentialError(
                'Resource is still referenced by other records (foreign key constraint)'
            )
        return ReferentialError()

    if code == NOT_NULL_VIOLATION:
        return RequiredFieldError()

    if code == CHECK_VIOLATION:
        return ValidationError('Validation failed (check constraint)')

    if code == INVALID_TEXT_REPRESENTATION:
        return InvalidIdentifierError()

    log.error(f"Unclassified database error (code={code}): {exc.orig}")
    return ServerError(str(exc.orig))
