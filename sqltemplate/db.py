from __future__ import annotations

# sqltemplate/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol

import yaml

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env SQLTEMPLATE_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under test)
# 3) config.yaml db_path
# 4) fallback: <project root>/app.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "app.db")
_SCHEMA_SQL = os.path.join(_PROJECT_ROOT, "schema.sql")


def _read_config_yaml(cfg_path: str | None = None) -> dict:
    cfg_path = cfg_path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path(cfg_path: str | None = None) -> str:
    env_path = os.environ.get("SQLTEMPLATE_DB_PATH")
    cfg = _read_config_yaml(cfg_path)
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _DEFAULT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


class ConnectionProvider(Protocol):
    """Hands out live DB-API connections; the caller releases them with close()."""

    def acquire(self) -> Any: ...


class SqliteConnectionProvider:
    """
    Opens a fresh SQLite connection per acquire().
    Autocommit (isolation_level=None), foreign keys on, usable across threads.
    """

    def __init__(self, db_path: str | None = None, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout

    def acquire(self) -> sqlite3.Connection:
        path = self.db_path or get_db_path()
        conn = sqlite3.connect(
            path,
            timeout=self.timeout,
            check_same_thread=False,
            isolation_level=None,
        )
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
        except sqlite3.Error:
            conn.close()
            raise
        return conn


class FactoryConnectionProvider:
    """Wraps any zero-arg DB-API connect callable, e.g. partial(psycopg.connect, dsn)."""

    def __init__(self, factory: Callable[[], Any]):
        self._factory = factory

    def acquire(self) -> Any:
        return self._factory()


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Raw SQLite connection for schema setup and maintenance scripts.
    row_factory is sqlite3.Row; closed on exit.
    """
    conn = SqliteConnectionProvider(db_path).acquire()
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


def ensure_schema(db_path: str | None = None, schema_path: str | None = None):
    with open(schema_path or _SCHEMA_SQL, "r", encoding="utf-8") as f:
        ddl = f.read()
    with get_conn(db_path) as conn:
        conn.executescript(ddl)
