"""Positional parameter binding.

Arguments are first turned into tagged variants, then each variant is bound
through its own setter on the prepared statement at position ``i + 1``.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Union

from .errors import UnsupportedParameterTypeError
from .rows import RowCursor


@dataclass(frozen=True)
class IntArg:
    value: int


@dataclass(frozen=True)
class FloatArg:
    value: float


@dataclass(frozen=True)
class TextArg:
    value: str


@dataclass(frozen=True)
class BytesArg:
    value: bytes


@dataclass(frozen=True)
class BoolArg:
    value: bool


@dataclass(frozen=True)
class NullArg:
    pass


@dataclass(frozen=True)
class DateArg:
    value: Union[dt.date, dt.datetime]


Argument = Union[IntArg, FloatArg, TextArg, BytesArg, BoolArg, NullArg, DateArg]
_VARIANTS = (IntArg, FloatArg, TextArg, BytesArg, BoolArg, NullArg, DateArg)


class PreparedStatement:
    """
    SQL text plus its positional parameter slots, executed on one DB-API cursor.
    Slots are 1-based; execution requires them to be contiguous from 1.
    """

    def __init__(self, cursor, sql: str):
        self._cursor = cursor
        self.sql = sql
        self._slots: Dict[int, Any] = {}

    def _set(self, position: int, value: Any):
        if position < 1:
            raise IndexError(f"parameter position must be >= 1, got {position}")
        self._slots[position] = value

    def set_int(self, position: int, value: int): self._set(position, int(value))
    def set_float(self, position: int, value: float): self._set(position, float(value))
    def set_text(self, position: int, value: str): self._set(position, value)
    def set_bytes(self, position: int, value: bytes): self._set(position, bytes(value))
    def set_bool(self, position: int, value: bool): self._set(position, bool(value))
    def set_null(self, position: int): self._set(position, None)

    def set_date(self, position: int, value: Union[dt.date, dt.datetime]):
        # Dates are stored as ISO text (YYYY-MM-DD / YYYY-MM-DDTHH:MM:SS)
        self._set(position, value.isoformat())

    def parameters(self) -> tuple:
        n = len(self._slots)
        missing = [i for i in range(1, n + 1) if i not in self._slots]
        if missing:
            raise ValueError(f"unbound parameter positions: {missing}")
        return tuple(self._slots[i] for i in range(1, n + 1))

    def execute_update(self) -> int:
        self._cursor.execute(self.sql, self.parameters())
        return self._cursor.rowcount

    def execute_query(self) -> RowCursor:
        self._cursor.execute(self.sql, self.parameters())
        return RowCursor(self._cursor)

    def close(self):
        self._cursor.close()


def to_argument(position: int, value: Any) -> Argument:
    if isinstance(value, _VARIANTS):
        return value
    if value is None:
        return NullArg()
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BoolArg(value)
    if isinstance(value, int):
        return IntArg(value)
    if isinstance(value, float):
        return FloatArg(value)
    if isinstance(value, str):
        return TextArg(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BytesArg(bytes(value))
    if isinstance(value, (dt.date, dt.datetime)):
        return DateArg(value)
    raise UnsupportedParameterTypeError(position, type(value).__name__)


def _bind_int(stmt: PreparedStatement, pos: int, arg: IntArg): stmt.set_int(pos, arg.value)
def _bind_float(stmt: PreparedStatement, pos: int, arg: FloatArg): stmt.set_float(pos, arg.value)
def _bind_text(stmt: PreparedStatement, pos: int, arg: TextArg): stmt.set_text(pos, arg.value)
def _bind_bytes(stmt: PreparedStatement, pos: int, arg: BytesArg): stmt.set_bytes(pos, arg.value)
def _bind_bool(stmt: PreparedStatement, pos: int, arg: BoolArg): stmt.set_bool(pos, arg.value)
def _bind_null(stmt: PreparedStatement, pos: int, arg: NullArg): stmt.set_null(pos)
def _bind_date(stmt: PreparedStatement, pos: int, arg: DateArg): stmt.set_date(pos, arg.value)


BINDERS: Dict[type, Callable[[PreparedStatement, int, Any], None]] = {
    IntArg: _bind_int,
    FloatArg: _bind_float,
    TextArg: _bind_text,
    BytesArg: _bind_bytes,
    BoolArg: _bind_bool,
    NullArg: _bind_null,
    DateArg: _bind_date,
}


def bind(stmt: PreparedStatement, args: Sequence[Any]):
    """Bind ``args[i]`` to placeholder ``i + 1`` for every argument, in order."""
    for i, value in enumerate(args):
        position = i + 1
        arg = to_argument(position, value)
        BINDERS[type(arg)](stmt, position, arg)
