import os
import sqlite3
from unittest.mock import MagicMock

import pytest
from pathlib import Path

from sqltemplate import StatementExecutor, SqliteConnectionProvider
from sqltemplate.db import ensure_schema

_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "sqltemplate_test.db"
    os.environ["SQLTEMPLATE_DB_PATH"] = str(path)
    ensure_schema(str(path), str(_PROJECT_ROOT / "schema.sql"))
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: only ever wipe the temp DB
    assert os.environ.get("SQLTEMPLATE_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM users")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def executor(tmp_db_path):
    return StatementExecutor(SqliteConnectionProvider(tmp_db_path))


class FakeDriver:
    """MagicMock-backed DB-API connection/cursor plus a provider counting acquires."""

    def __init__(self, rows=(), columns=("id", "account"), rowcount=1):
        self.cursor = MagicMock(name="cursor")
        self.cursor.description = [(c, None, None, None, None, None, None) for c in columns]
        self.cursor.fetchone.side_effect = list(rows) + [None]
        self.cursor.rowcount = rowcount
        self.connection = MagicMock(name="connection")
        self.connection.cursor.return_value = self.cursor
        self.provider = MagicMock(name="provider")
        self.provider.acquire.return_value = self.connection


@pytest.fixture()
def fake():
    return FakeDriver
