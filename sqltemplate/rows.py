from __future__ import annotations

# sqltemplate/rows.py
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar, Union

from .errors import MappingError

T = TypeVar("T")


class Row:
    """
    One result row, addressable by column name or 0-based position.
    Only valid inside the mapper call that received it.
    """

    __slots__ = ("_columns", "_values", "_index")

    def __init__(self, columns: Sequence[str], values: Sequence[Any], index: Dict[str, int]):
        self._columns = columns
        self._values = values
        self._index = index

    def __getitem__(self, key: Union[str, int]) -> Any:
        if isinstance(key, int):
            if not -len(self._values) <= key < len(self._values):
                raise MappingError(f"no such column position: {key}")
            return self._values[key]
        pos = self._index.get(key)
        if pos is None:
            raise MappingError(f"no such column: {key}")
        return self._values[pos]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Row({self.as_dict()!r})"

    def keys(self) -> List[str]:
        return list(self._columns)

    def get(self, key: str, default: Any = None) -> Any:
        pos = self._index.get(key)
        return default if pos is None else self._values[pos]

    def as_dict(self) -> Dict[str, Any]:
        return {name: self._values[pos] for name, pos in self._index.items()}

    def get_int(self, key: Union[str, int]) -> Optional[int]:
        v = self[key]
        return None if v is None else int(v)

    def get_float(self, key: Union[str, int]) -> Optional[float]:
        v = self[key]
        return None if v is None else float(v)

    def get_str(self, key: Union[str, int]) -> Optional[str]:
        v = self[key]
        return None if v is None else str(v)


RowMapper = Callable[[Row, int], T]


class RowCursor:
    """
    Forward-only reader over an executed DB-API cursor.

    close() only marks this reader closed: in DB-API the result set lives on the
    statement's cursor, which PreparedStatement.close() releases afterwards.
    Duplicate column names resolve to the first occurrence, as sqlite3.Row does.
    """

    def __init__(self, cursor):
        self._cursor = cursor
        self.columns: List[str] = [d[0] for d in (cursor.description or ())]
        self._index: Dict[str, int] = {}
        for i, name in enumerate(self.columns):
            self._index.setdefault(name, i)
        self.closed = False

    def next_row(self) -> Optional[Row]:
        if self.closed:
            raise RuntimeError("row cursor is closed")
        raw = self._cursor.fetchone()
        if raw is None:
            return None
        return Row(self.columns, tuple(raw), self._index)

    def close(self):
        self.closed = True
