"""Error taxonomy raised by the statement executor.

Everything the executor raises derives from ``TemplateError``. Storage
failures share the ``DataAccessError`` kind; the two cardinality errors of
``query_for_object`` are siblings so callers can tell "no such record" and
"ambiguous record" apart from "storage failure".
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Phase(str, Enum):
    CONNECT = "connect"
    PREPARE = "prepare"
    BIND = "bind"
    EXECUTE = "execute"
    READ = "read"
    MAP = "map"


class TemplateError(RuntimeError):
    """Base class for all errors raised by sqltemplate."""


class DataAccessError(TemplateError):
    def __init__(self, message: str, phase: Optional[Phase] = None, sql: Optional[str] = None):
        super().__init__(message)
        self.phase = phase
        self.sql = sql


class ConnectionError(DataAccessError):
    """The connection provider could not supply a usable connection."""

    def __init__(self, message: str = "Cannot acquire database connection"):
        super().__init__(message, phase=Phase.CONNECT)


class UnsupportedParameterTypeError(DataAccessError):
    def __init__(self, position: int, type_name: str):
        super().__init__(
            f"Unsupported parameter type at position {position}: {type_name}",
            phase=Phase.BIND,
        )
        self.position = position
        self.type_name = type_name


class EmptyResultError(TemplateError):
    def __init__(self, message: str = "query_for_object result is empty"):
        super().__init__(message)


class ResultSizeExceededError(TemplateError):
    def __init__(self, actual: int, expected: int = 1):
        super().__init__(f"query_for_object expected {expected} row, got {actual}")
        self.expected = expected
        self.actual = actual


class MappingError(TemplateError):
    """Raised by row mappers, e.g. when a column is missing."""
