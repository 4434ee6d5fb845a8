from unittest.mock import MagicMock

import pytest

from sqltemplate.errors import MappingError
from sqltemplate.rows import RowCursor


def _cursor(rows, columns=("id", "account")):
    cur = MagicMock()
    cur.description = [(c, None, None, None, None, None, None) for c in columns]
    cur.fetchone.side_effect = list(rows) + [None]
    return cur


def test_row_access_by_name_and_position():
    rows = RowCursor(_cursor([(1, "alice")]))
    row = rows.next_row()
    assert row["account"] == "alice"
    assert row[0] == 1
    assert row.get_int("id") == 1
    assert row.get_str(0) == "1"
    assert row.keys() == ["id", "account"]
    assert row.as_dict() == {"id": 1, "account": "alice"}
    assert rows.next_row() is None


def test_missing_column_raises_mapping_error():
    row = RowCursor(_cursor([(1, "alice")])).next_row()
    with pytest.raises(MappingError):
        row["email"]
    assert row.get("email", "n/a") == "n/a"


def test_null_values_stay_none():
    row = RowCursor(_cursor([(None, None)])).next_row()
    assert row.get_int("id") is None
    assert row.get_float("id") is None
    assert row.get_str("account") is None


def test_closed_cursor_refuses_reads():
    cur = _cursor([(1, "alice")])
    rows = RowCursor(cur)
    rows.close()
    assert rows.closed
    with pytest.raises(RuntimeError):
        rows.next_row()
    cur.close.assert_not_called()


def test_duplicate_column_names_resolve_to_first():
    rows = RowCursor(_cursor([(1, 2, "alice")], columns=("id", "id", "account")))
    row = rows.next_row()
    assert row["id"] == 1
    assert row.get("id") == 1
    assert row.get_int("id") == 1
    assert row[1] == 2
    assert row.as_dict() == {"id": 1, "account": "alice"}


def test_bad_position_raises_mapping_error():
    row = RowCursor(_cursor([(1, "alice")])).next_row()
    assert row[-1] == "alice"
    with pytest.raises(MappingError):
        row[2]
    with pytest.raises(MappingError):
        row[-3]
