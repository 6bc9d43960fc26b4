from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=str(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, email, password_hash, is_active FROM accounts WHERE id=%s", (account_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, email, password_hash, is_active FROM accounts WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create(self, *, account_id: str, email: str, password_hash: str) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO accounts(id, email, password_hash, is_active) VALUES(%s,%s,%s,1)",
                (account_id, email, password_hash),
            )
            return account_id

    def set_password_hash(self, account_id: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE accounts SET password_hash=%s WHERE id=%s", (password_hash, account_id))
            return cur.rowcount > 0
