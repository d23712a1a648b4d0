"""
Tests for persistence error classification and the error envelope.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from netops_core.db.errors import classify_db_error, sqlstate
from netops_core.exceptions import (
    ConflictError,
    InvalidIdentifierError,
    NotFoundError,
    ReferentialError,
    RequiredFieldError,
    ServerError,
    ValidationError,
)


class PgError(Exception):
    """Stand-in for a psycopg2 error carrying a SQLSTATE code."""

    def __init__(self, pgcode, message="error"):
        super().__init__(message)
        self.pgcode = pgcode


class SqliteError(Exception):
    """Stand-in for sqlite3.IntegrityError on Python 3.11+."""

    def __init__(self, errorname, message):
        super().__init__(message)
        self.sqlite_errorname = errorname


def integrity_error(orig, statement="INSERT INTO sites (name) VALUES (?)"):
    return IntegrityError(statement, {}, orig)


class TestSqlState:
    """Test SQLSTATE extraction."""

    def test_postgres_code(self):
        assert sqlstate(integrity_error(PgError("23505"))) == "23505"

    def test_sqlite_error_name(self):
        orig = SqliteError("SQLITE_CONSTRAINT_FOREIGNKEY", "FOREIGN KEY constraint failed")
        assert sqlstate(integrity_error(orig)) == "23503"

    def test_sqlite_message_fallback(self):
        orig = Exception("NOT NULL constraint failed: sites.name")
        assert sqlstate(integrity_error(orig)) == "23502"

    def test_unknown(self):
        assert sqlstate(integrity_error(Exception("disk I/O error"))) is None


class TestClassifyDbError:
    """Test mapping onto the API error taxonomy."""

    @pytest.mark.parametrize("code,expected", [
        ("23505", ConflictError),
        ("23503", ReferentialError),
        ("23502", RequiredFieldError),
        ("23514", ValidationError),
        ("22P02", InvalidIdentifierError),
    ])
    def test_postgres_codes(self, code, expected):
        error = classify_db_error(integrity_error(PgError(code)))
        assert isinstance(error, expected)
        assert error.status_code == 400

    def test_foreign_key_on_insert_is_dangling_reference(self):
        error = classify_db_error(integrity_error(PgError("23503")))
        assert error.message == "Referenced resource not found (foreign key constraint)"

    def test_foreign_key_on_delete_is_still_referenced(self):
        error = classify_db_error(
            integrity_error(PgError("23503"), statement="DELETE FROM sites WHERE sites.id = ?")
        )
        assert "still referenced" in error.message

    def test_unclassified_is_server_error_with_raw_message(self):
        exc = OperationalError("SELECT 1", {}, Exception("connection refused"))
        error = classify_db_error(exc)

        assert isinstance(error, ServerError)
        assert error.status_code == 500
        assert error.message == "connection refused"


class TestErrorEnvelope:
    """Test exception rendering."""

    def test_validation_error_lists_fields(self):
        error = ValidationError(field_errors=[{"field": "ipAddress", "message": "bad"}])
        assert error.to_dict() == {
            "success": False,
            "error": "Validation failed",
            "error_code": "VALIDATION_ERROR",
            "details": [{"field": "ipAddress", "message": "bad"}],
        }

    def test_not_found_details(self):
        body = NotFoundError("Site not found", "site", "abc").to_dict()
        assert body["error"] == "Site not found"
        assert body["details"] == {"resource_type": "site", "resource_id": "abc"}

    def test_no_details_key_when_empty(self):
        assert "details" not in ConflictError().to_dict()
