from __future__ import annotations

from typing import List, Optional

from ..domain.user import User, user_row_mapper
from ..errors import EmptyResultError
from ..template import StatementExecutor

_COLUMNS = "id, account, password, email"


def insert(executor: StatementExecutor, user: User) -> int:
    sql = "insert into users (account, password, email) values (?, ?, ?)"
    return executor.insert(sql, user.account, user.password, user.email)


def update(executor: StatementExecutor, user: User) -> int:
    sql = "update users set password = ?, email = ? where account = ?"
    return executor.update(sql, user.password, user.email, user.account)


def delete_by_account(executor: StatementExecutor, account: str) -> int:
    return executor.delete("delete from users where account = ?", account)


def find_all(executor: StatementExecutor) -> List[User]:
    return executor.query(f"select {_COLUMNS} from users order by id", user_row_mapper)


def find_by_id(executor: StatementExecutor, user_id: int) -> User:
    """Raises EmptyResultError when no user has this id."""
    return executor.query_for_object(f"select {_COLUMNS} from users where id = ?", user_row_mapper, user_id)


def find_by_account(executor: StatementExecutor, account: str) -> Optional[User]:
    try:
        return executor.query_for_object(
            f"select {_COLUMNS} from users where account = ?", user_row_mapper, account
        )
    except EmptyResultError:
        return None
