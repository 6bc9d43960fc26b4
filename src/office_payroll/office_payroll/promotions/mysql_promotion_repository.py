from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, in_clause
from .model import Promotion
from .repository import PromotionRepository

_PROMOTION_COLUMNS = """
    id, employee_id, old_degree, old_level, old_salary,
    new_degree, new_level, new_salary, due_date, note
"""


def _row_to_promotion(r: dict) -> Promotion:
    return Promotion(
        promotion_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        old_degree=r.get("old_degree"),
        old_level=r.get("old_level"),
        old_salary=as_decimal(r.get("old_salary")),
        new_degree=r.get("new_degree"),
        new_level=r.get("new_level"),
        new_salary=as_decimal(r.get("new_salary")),
        due_date=r.get("due_date"),
        note=r.get("note"),
    )


def _params(p: Promotion) -> tuple:
    return (
        p.employee_id,
        p.old_degree,
        p.old_level,
        p.old_salary,
        p.new_degree,
        p.new_level,
        p.new_salary,
        p.due_date,
        p.note,
    )


class MySQLPromotionRepository(PromotionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employees(self, employee_ids: Sequence[str]) -> Sequence[Promotion]:
        if not employee_ids:
            return []
        placeholders, params = in_clause(employee_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_PROMOTION_COLUMNS} FROM promotions WHERE employee_id IN ({placeholders}) ORDER BY due_date",
                params,
            )
            return [_row_to_promotion(r) for r in fetchall(cur)]

    def get_by_id(self, promotion_id: str) -> Optional[Promotion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PROMOTION_COLUMNS} FROM promotions WHERE id=%s", (promotion_id,))
            row = fetchone(cur)
            return _row_to_promotion(row) if row else None

    def create(self, promotion: Promotion) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO promotions(id, employee_id, old_degree, old_level, old_salary,
                                       new_degree, new_level, new_salary, due_date, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (promotion.promotion_id,) + _params(promotion),
            )
            return promotion.promotion_id

    def update(self, promotion: Promotion) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE promotions
                SET employee_id=%s, old_degree=%s, old_level=%s, old_salary=%s,
                    new_degree=%s, new_level=%s, new_salary=%s, due_date=%s, note=%s
                WHERE id=%s
                """,
                _params(promotion) + (promotion.promotion_id,),
            )
            return cur.rowcount > 0
