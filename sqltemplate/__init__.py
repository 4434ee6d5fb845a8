"""sqltemplate: run parameterized SQL over DB-API connections and map rows to objects."""
from __future__ import annotations

import logging

from .db import ConnectionProvider, FactoryConnectionProvider, SqliteConnectionProvider
from .errors import (
    ConnectionError,
    DataAccessError,
    EmptyResultError,
    MappingError,
    Phase,
    ResultSizeExceededError,
    TemplateError,
    UnsupportedParameterTypeError,
)
from .rows import Row, RowMapper
from .template import StatementExecutor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConnectionProvider",
    "FactoryConnectionProvider",
    "SqliteConnectionProvider",
    "StatementExecutor",
    "Row",
    "RowMapper",
    "Phase",
    "TemplateError",
    "DataAccessError",
    "ConnectionError",
    "UnsupportedParameterTypeError",
    "EmptyResultError",
    "ResultSizeExceededError",
    "MappingError",
]
