from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..rows import Row


class User(BaseModel):
    id: Optional[int] = None
    account: str
    password: str
    email: str


def user_row_mapper(row: Row, _index: int) -> User:
    return User(
        id=row.get_int("id"),
        account=row["account"],
        password=row["password"],
        email=row["email"],
    )
