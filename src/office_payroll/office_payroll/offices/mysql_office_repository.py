from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Office, OfficeLink
from .repository import OfficeRepository

_OFFICE_COLUMNS = "id, name, parent_id, auth_owner_id, office_phone, is_active, created_at"


def _row_to_office(r: dict) -> Office:
    return Office(
        office_id=str(r["id"]),
        name=r["name"],
        parent_id=r.get("parent_id"),
        owner_id=r.get("auth_owner_id"),
        phone=r.get("office_phone"),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
    )


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_links(self) -> Sequence[OfficeLink]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, parent_id FROM offices")
            rows = fetchall(cur)
            return [OfficeLink(office_id=str(r["id"]), parent_id=r.get("parent_id")) for r in rows]

    def list_all(self) -> Sequence[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICE_COLUMNS} FROM offices ORDER BY created_at DESC")
            return [_row_to_office(r) for r in fetchall(cur)]

    def get_by_id(self, office_id: str) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICE_COLUMNS} FROM offices WHERE id=%s", (office_id,))
            row = fetchone(cur)
            return _row_to_office(row) if row else None

    def get_by_owner(self, owner_id: str) -> Optional[Office]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICE_COLUMNS} FROM offices WHERE auth_owner_id=%s", (owner_id,))
            row = fetchone(cur)
            return _row_to_office(row) if row else None

    def create(self, *, office_id: str, name: str, parent_id: Optional[str], owner_id: Optional[str], created_at: datetime) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO offices(id, name, parent_id, auth_owner_id, is_active, created_at)
                VALUES(%s,%s,%s,%s,0,%s)
                """,
                (office_id, name, parent_id, owner_id, created_at),
            )
            return office_id

    def set_active(self, office_id: str, *, is_active: bool, activated_at: Optional[datetime] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if activated_at is not None:
                cur.execute(
                    "UPDATE offices SET is_active=%s, created_at=%s WHERE id=%s",
                    (1 if is_active else 0, activated_at, office_id),
                )
            else:
                cur.execute("UPDATE offices SET is_active=%s WHERE id=%s", (1 if is_active else 0, office_id))
            return cur.rowcount > 0
