"""
Unit tests for mapping storage constraint failures onto HTTP errors
"""
from sqlalchemy.exc import IntegrityError

from trip_planner.core.error_handlers import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    classify_integrity_error,
    map_integrity_error,
)
from trip_planner.core.exceptions import ConflictError, ReferenceConstraintError


class PostgresDriverError(Exception):
    def __init__(self, message, sqlstate):
        super().__init__(message)
        self.sqlstate = sqlstate


class SqliteDriverError(Exception):
    def __init__(self, message, sqlite_errorname):
        super().__init__(message)
        self.sqlite_errorname = sqlite_errorname


def integrity_error(orig):
    return IntegrityError("INSERT INTO days ...", {}, orig)


def test_sqlstate_codes_take_priority_over_message():
    exc = integrity_error(PostgresDriverError("FOREIGN KEY constraint failed", "23505"))
    assert classify_integrity_error(exc) == UNIQUE_VIOLATION
    exc = integrity_error(PostgresDriverError("whatever", "23503"))
    assert classify_integrity_error(exc) == FOREIGN_KEY_VIOLATION


def test_sqlite_extended_error_names():
    unique = integrity_error(SqliteDriverError("UNIQUE constraint failed: days.trip_id, days.day_no", "SQLITE_CONSTRAINT_UNIQUE"))
    primary = integrity_error(SqliteDriverError("UNIQUE constraint failed: trips.id", "SQLITE_CONSTRAINT_PRIMARYKEY"))
    foreign = integrity_error(SqliteDriverError("FOREIGN KEY constraint failed", "SQLITE_CONSTRAINT_FOREIGNKEY"))
    check = integrity_error(SqliteDriverError("CHECK constraint failed: ck_trips_status", "SQLITE_CONSTRAINT_CHECK"))
    assert classify_integrity_error(unique) == UNIQUE_VIOLATION
    assert classify_integrity_error(primary) == UNIQUE_VIOLATION
    assert classify_integrity_error(foreign) == FOREIGN_KEY_VIOLATION
    assert classify_integrity_error(check) is None


def test_message_fallback_without_codes():
    assert classify_integrity_error(integrity_error(Exception("UNIQUE constraint failed: days.trip_id, days.date"))) == UNIQUE_VIOLATION
    assert classify_integrity_error(integrity_error(Exception("FOREIGN KEY constraint failed"))) == FOREIGN_KEY_VIOLATION
    assert classify_integrity_error(integrity_error(Exception("NOT NULL constraint failed: trips.title"))) is None


def test_mapping_to_http_errors():
    conflict = map_integrity_error(integrity_error(Exception("UNIQUE constraint failed: days.trip_id, days.day_no")))
    assert isinstance(conflict, ConflictError)
    assert conflict.status_code == 409
    assert "UNIQUE constraint failed" in conflict.message

    reference = map_integrity_error(integrity_error(Exception("FOREIGN KEY constraint failed")))
    assert isinstance(reference, ReferenceConstraintError)
    assert reference.status_code == 400

    assert map_integrity_error(integrity_error(Exception("disk I/O error"))) is None
