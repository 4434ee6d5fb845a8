"""
StatementExecutor: acquire -> prepare -> bind -> execute -> extract -> release.

Every connection, statement and row cursor opened by a call is closed exactly
once on every exit path, narrowest first (row cursor, statement, connection).
Driver errors are logged here and re-raised as DataAccessError; nothing below
this module leaks a raw driver exception to callers.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, TypeVar

from . import errors
from .binder import PreparedStatement, bind
from .db import ConnectionProvider
from .errors import (
    DataAccessError,
    EmptyResultError,
    Phase,
    ResultSizeExceededError,
)
from .rows import RowCursor, RowMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _close_quietly(resource, what: str):
    try:
        resource.close()
    except Exception:
        logger.warning("failed to close %s", what, exc_info=True)


class StatementExecutor:
    def __init__(self, provider: ConnectionProvider):
        self._provider = provider

    # ---------- mutation ----------

    def execute(self, sql: str, *args: Any) -> int:
        """Run insert/update/delete; returns the driver-reported affected row count."""
        with self._prepared("execute", sql, args) as stmt:
            with self._translating("execute", Phase.EXECUTE, sql):
                return stmt.execute_update()

    def insert(self, sql: str, *args: Any) -> int:
        return self.execute(sql, *args)

    def update(self, sql: str, *args: Any) -> int:
        return self.execute(sql, *args)

    def delete(self, sql: str, *args: Any) -> int:
        return self.execute(sql, *args)

    # ---------- query ----------

    def query(self, sql: str, mapper: RowMapper[T], *args: Any) -> List[T]:
        with self._prepared("query", sql, args) as stmt:
            with self._translating("query", Phase.EXECUTE, sql):
                rows = stmt.execute_query()
            try:
                return self._extract(rows, mapper, sql)
            finally:
                _close_quietly(rows, "row cursor")

    def query_for_object(self, sql: str, mapper: RowMapper[T], *args: Any) -> T:
        results = self.query(sql, mapper, *args)
        if not results:
            logger.debug("query_for_object result is empty: %s", sql)
            raise EmptyResultError()
        if len(results) > 1:
            logger.error("query_for_object result size over 1, result size is %d: %s", len(results), sql)
            raise ResultSizeExceededError(len(results))
        return results[0]

    # ---------- internals ----------

    def _extract(self, rows: RowCursor, mapper: RowMapper[T], sql: str) -> List[T]:
        out: List[T] = []
        index = 0
        while True:
            with self._translating("query", Phase.READ, sql):
                row = rows.next_row()
            if row is None:
                return out
            with self._translating("query", Phase.MAP, sql, f"row {index}"):
                out.append(mapper(row, index))
            index += 1

    def _acquire(self):
        try:
            return self._provider.acquire()
        except DataAccessError:
            raise
        except Exception:
            logger.error("cannot acquire database connection", exc_info=True)
            raise errors.ConnectionError() from None

    @contextmanager
    def _prepared(self, operation: str, sql: str, args) -> Iterator[PreparedStatement]:
        conn = self._acquire()
        try:
            with self._translating(operation, Phase.PREPARE, sql):
                stmt = PreparedStatement(conn.cursor(), sql)
            try:
                with self._translating(operation, Phase.BIND, sql):
                    bind(stmt, args)
                yield stmt
            finally:
                _close_quietly(stmt, "statement")
        finally:
            _close_quietly(conn, "connection")

    @contextmanager
    def _translating(self, operation: str, phase: Phase, sql: str, detail: str = ""):
        try:
            yield
        except DataAccessError as e:
            if e.sql is None:
                e.sql = sql
            logger.error("%s %s failed: %s | SQL: %s", operation, phase.value, e, sql)
            raise
        except Exception:
            msg = f"{operation} failed during {phase.value}"
            if detail:
                msg = f"{msg} ({detail})"
            logger.error("%s | SQL: %s", msg, sql, exc_info=True)
            raise DataAccessError(msg, phase=phase, sql=sql) from None
