from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from ..core.enums import EntryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, in_clause
from .model import Payment, PaymentDetail, PaymentEntry
from .repository import PaymentRepository

_PAYMENT_COLUMNS = """
    p.id, p.employee_id, p.month, p.degree, p.level, p.salary,
    p.certificate_percentage, p.risk_percentage, p.retire_percentage,
    p.trans_pay, p.note, p.created_at
"""


def _row_to_payment(r: dict, entries: Sequence[PaymentEntry] = ()) -> Payment:
    return Payment(
        payment_id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        month=r["month"],
        degree=r.get("degree"),
        level=r.get("level"),
        salary=as_decimal(r.get("salary")),
        certificate_percentage=as_decimal(r.get("certificate_percentage")),
        risk_percentage=as_decimal(r.get("risk_percentage")),
        retire_percentage=as_decimal(r.get("retire_percentage")),
        trans_pay=as_decimal(r.get("trans_pay")),
        note=r.get("note"),
        created_at=r.get("created_at"),
        entries=tuple(entries),
    )


def _payment_params(p: Payment) -> tuple:
    return (
        p.employee_id,
        p.month,
        p.degree,
        p.level,
        p.salary,
        p.certificate_percentage,
        p.risk_percentage,
        p.retire_percentage,
        p.trans_pay,
        p.note,
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_entries(self, cur, payment_ids: Sequence[str]) -> dict[str, list[PaymentEntry]]:
        grouped: dict[str, list[PaymentEntry]] = defaultdict(list)
        if not payment_ids:
            return grouped
        placeholders, params = in_clause(payment_ids)
        cur.execute(
            f"""
            SELECT id, payment_id, title, amount, type
            FROM payments_entries
            WHERE payment_id IN ({placeholders})
            ORDER BY seq
            """,
            params,
        )
        for r in fetchall(cur):
            grouped[str(r["payment_id"])].append(
                PaymentEntry(
                    entry_id=str(r["id"]),
                    payment_id=str(r["payment_id"]),
                    title=r["title"],
                    amount=as_decimal(r["amount"]),
                    entry_type=EntryType(r["type"]),
                )
            )
        return grouped

    def _insert_entries(self, cur, entries: Sequence[PaymentEntry]) -> None:
        if not entries:
            return
        cur.executemany(
            "INSERT INTO payments_entries(id, payment_id, title, amount, type) VALUES(%s,%s,%s,%s,%s)",
            [(e.entry_id, e.payment_id, e.title, e.amount, e.entry_type.value) for e in entries],
        )

    def list_details(self, employee_ids: Sequence[str], *, month: Optional[date] = None) -> Sequence[PaymentDetail]:
        if not employee_ids:
            return []
        placeholders, params = in_clause(employee_ids)
        sql = f"""
            SELECT {_PAYMENT_COLUMNS}, e.first_name, e.last_name, o.name AS office_name
            FROM payments p
            JOIN employees e ON e.id = p.employee_id
            LEFT JOIN offices o ON o.id = e.office_id
            WHERE p.employee_id IN ({placeholders})
        """
        if month is not None:
            sql += " AND p.month=%s"
            params = params + (month,)
        sql += " ORDER BY p.month, p.created_at, p.id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            entries = self._load_entries(cur, [str(r["id"]) for r in rows])
            return [
                PaymentDetail(
                    payment=_row_to_payment(r, entries.get(str(r["id"]), ())),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    office_name=r.get("office_name"),
                )
                for r in rows
            ]

    def list_for_month(self, employee_ids: Sequence[str], month: date) -> Sequence[Payment]:
        if not employee_ids:
            return []
        placeholders, params = in_clause(employee_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PAYMENT_COLUMNS}
                FROM payments p
                WHERE p.month=%s AND p.employee_id IN ({placeholders})
                ORDER BY p.created_at, p.id
                """,
                (month,) + params,
            )
            rows = fetchall(cur)
            entries = self._load_entries(cur, [str(r["id"]) for r in rows])
            return [_row_to_payment(r, entries.get(str(r["id"]), ())) for r in rows]

    def exists_for_month(self, employee_ids: Sequence[str], month: date) -> bool:
        if not employee_ids:
            return False
        placeholders, params = in_clause(employee_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id FROM payments WHERE month=%s AND employee_id IN ({placeholders}) LIMIT 1",
                (month,) + params,
            )
            return fetchone(cur) is not None

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PAYMENT_COLUMNS} FROM payments p WHERE p.id=%s", (payment_id,))
            row = fetchone(cur)
            if not row:
                return None
            entries = self._load_entries(cur, [payment_id])
            return _row_to_payment(row, entries.get(payment_id, ()))

    def create_with_entries(self, payment: Payment) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(id, employee_id, month, degree, level, salary,
                                     certificate_percentage, risk_percentage, retire_percentage,
                                     trans_pay, note, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (payment.payment_id,) + _payment_params(payment) + (payment.created_at,),
            )
            self._insert_entries(cur, payment.entries)
            return payment.payment_id

    def update_with_entries(self, payment: Payment) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payments
                SET employee_id=%s, month=%s, degree=%s, level=%s, salary=%s,
                    certificate_percentage=%s, risk_percentage=%s, retire_percentage=%s,
                    trans_pay=%s, note=%s
                WHERE id=%s
                """,
                _payment_params(payment) + (payment.payment_id,),
            )
            if cur.rowcount <= 0:
                return False
            cur.execute("DELETE FROM payments_entries WHERE payment_id=%s", (payment.payment_id,))
            self._insert_entries(cur, payment.entries)
            return True

    def delete(self, payment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments_entries WHERE payment_id=%s", (payment_id,))
            cur.execute("DELETE FROM payments WHERE id=%s", (payment_id,))
            return cur.rowcount > 0

    def insert_batch(self, payments: Sequence[Payment]) -> None:
        if not payments:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO payments(id, employee_id, month, degree, level, salary,
                                     certificate_percentage, risk_percentage, retire_percentage,
                                     trans_pay, note, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [(p.payment_id,) + _payment_params(p) + (p.created_at,) for p in payments],
            )
            self._insert_entries(cur, [e for p in payments for e in p.entries])

    def add_entries(self, entries: Sequence[PaymentEntry]) -> int:
        if not entries:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            self._insert_entries(cur, entries)
            return len(entries)

    def delete_entries(self, payment_ids: Sequence[str], *, title: str, entry_type: EntryType) -> int:
        if not payment_ids:
            return 0
        placeholders, params = in_clause(payment_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM payments_entries WHERE payment_id IN ({placeholders}) AND title=%s AND type=%s",
                params + (title, entry_type.value),
            )
            return int(cur.rowcount)
