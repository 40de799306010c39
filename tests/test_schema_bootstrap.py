from datetime import time, timedelta

import pytest

from teacher_performance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from teacher_performance.database.mysql_base import normalize_mysql_time
from teacher_performance.main import SCHEMA_PATH


def test_statements_split_outside_quotes():
    sql = """
    -- campuses
    CREATE TABLE a (x INT);
    INSERT INTO a VALUES ('semi;colon');
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == ["CREATE TABLE a (x INT)", "INSERT INTO a VALUES ('semi;colon')", "SELECT 1"]


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS school_db;\nUSE school_db;\nCREATE TABLE a (x INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE a (x INT)"]


def test_bundled_schema_defines_performance_table():
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert any("CREATE TABLE IF NOT EXISTS teacher_performances" in s for s in statements)


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(hours=8, minutes=15), time(8, 15)),
        ("07:45", time(7, 45)),
        ("07:45:30", time(7, 45, 30)),
        (time(9, 0), time(9, 0)),
        (None, None),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected
