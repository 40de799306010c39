from datetime import datetime

import pytest

from fakes import make_result
from teacher_performance.core.exceptions import CommitConflictError
from teacher_performance.performance.model import RecalculationScope
from teacher_performance.performance.mysql_performance_repository import MySQLPerformanceRepository


class _Database:
    """Scripted MySQL server: every session writes into one shared event log."""

    def __init__(self, lock_result=1, fail_insert=False, fail_release=False):
        self.lock_result = lock_result
        self.fail_insert = fail_insert
        self.fail_release = fail_release
        self.events = []
        self.params = []
        self.sessions = []

    def connect(self, with_database=True):
        conn = _Connection(self)
        self.sessions.append(conn)
        return conn


class _Cursor:
    def __init__(self, db):
        self._db = db
        self.rowcount = 0
        self._last = ""

    def execute(self, sql, params=None):
        sql = " ".join(sql.split())
        self._last = sql
        if "RELEASE_LOCK" in sql and self._db.fail_release:
            raise RuntimeError("server gone away")
        self._db.events.append(sql)
        self._db.params.append(params)
        if sql.startswith("DELETE"):
            self.rowcount = 2

    def executemany(self, sql, rows):
        if self._db.fail_insert:
            raise RuntimeError("duplicate key")
        self._db.events.append(" ".join(sql.split()))
        self._db.params.append(list(rows))

    def fetchone(self):
        if "GET_LOCK" in self._last:
            return {"acquired": self._db.lock_result}
        return None

    def fetchall(self):
        return []

    def close(self):
        pass


class _Connection:
    def __init__(self, db):
        self._db = db
        self.closed = False

    def cursor(self, dictionary=False):
        return _Cursor(self._db)

    def commit(self):
        self._db.events.append("COMMIT")

    def rollback(self):
        self._db.events.append("ROLLBACK")

    def close(self):
        self.closed = True


SCOPE = RecalculationScope(1, 3, 2024)
NOW = datetime(2024, 4, 1, 9, 0)


def _position(events, prefix):
    return next(i for i, e in enumerate(events) if e.startswith(prefix))


def test_replace_scope_commits_before_releasing_the_named_lock():
    db = _Database()
    repo = MySQLPerformanceRepository(db)

    saved = repo.replace_scope(SCOPE, [make_result(1, "Alice", 12.0)], created_by="admin", created_at=NOW)

    events = db.events
    assert saved == 1
    assert _position(events, "SELECT GET_LOCK") < _position(events, "DELETE") < _position(events, "INSERT")
    assert _position(events, "INSERT") < _position(events, "COMMIT") < _position(events, "SELECT RELEASE_LOCK")
    assert all(conn.closed for conn in db.sessions)


def test_replace_scope_deletes_whole_scope_and_stamps_audit_columns():
    db = _Database()
    repo = MySQLPerformanceRepository(db)

    repo.replace_scope(SCOPE, [make_result(1, "Alice", 12.0)], created_by="admin", created_at=NOW)

    delete_at = _position(db.events, "DELETE")
    assert db.events[delete_at].startswith("DELETE tp FROM teacher_performances tp")
    assert "is_active" not in db.events[delete_at]
    assert db.params[delete_at] == (3, 2024, 1)
    inserted = db.params[_position(db.events, "INSERT")][0]
    assert inserted[-2:] == ("admin", NOW)


def test_lock_not_granted_is_a_conflict():
    db = _Database(lock_result=0)
    repo = MySQLPerformanceRepository(db)

    with pytest.raises(CommitConflictError):
        repo.replace_scope(SCOPE, [make_result(1, "Alice", 12.0)], created_by="admin", created_at=NOW)

    assert not any(e.startswith("DELETE") for e in db.events)
    assert "COMMIT" not in db.events
    assert all(conn.closed for conn in db.sessions)


def test_insert_failure_rolls_back_before_releasing_the_lock():
    db = _Database(fail_insert=True)
    repo = MySQLPerformanceRepository(db)

    with pytest.raises(RuntimeError, match="duplicate key"):
        repo.replace_scope(SCOPE, [make_result(1, "Alice", 12.0)], created_by="admin", created_at=NOW)

    assert "COMMIT" not in db.events
    assert _position(db.events, "ROLLBACK") < _position(db.events, "SELECT RELEASE_LOCK")


def test_failed_release_does_not_hide_the_insert_error():
    db = _Database(fail_insert=True, fail_release=True)
    repo = MySQLPerformanceRepository(db)

    with pytest.raises(RuntimeError, match="duplicate key"):
        repo.replace_scope(SCOPE, [make_result(1, "Alice", 12.0)], created_by="admin", created_at=NOW)

    assert all(conn.closed for conn in db.sessions)


def test_all_campus_scope_has_no_campus_filter():
    db = _Database()
    repo = MySQLPerformanceRepository(db)

    repo.replace_scope(RecalculationScope(None, 3, 2024), [], created_by="System", created_at=NOW)

    assert "campus_id" not in db.events[_position(db.events, "DELETE")]
    assert not any(e.startswith("INSERT") for e in db.events)
