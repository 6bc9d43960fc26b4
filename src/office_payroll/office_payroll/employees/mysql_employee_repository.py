from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Employee
from .repository import EmployeeRepository

_EMPLOYEE_SELECT = """
    SELECT e.id, e.first_name, e.last_name, e.office_id, e.certificate, e.job_title,
           e.hire_date, e.bank, e.bank_account, e.note, o.name AS office_name
    FROM employees e
    LEFT JOIN offices o ON o.id = e.office_id
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["id"]),
        first_name=r.get("first_name") or "",
        last_name=r.get("last_name"),
        office_id=str(r["office_id"]),
        certificate=r.get("certificate"),
        job_title=r.get("job_title"),
        hire_date=r.get("hire_date"),
        bank=r.get("bank"),
        bank_account=r.get("bank_account"),
        note=r.get("note"),
        office_name=r.get("office_name"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_ids_in_offices(self, office_ids: Sequence[str], *, bank: Optional[str] = None) -> Sequence[str]:
        if not office_ids:
            return []
        placeholders, params = in_clause(office_ids)
        sql = f"SELECT id FROM employees WHERE office_id IN ({placeholders})"
        if bank:
            sql += " AND bank=%s"
            params = params + (bank,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [str(r["id"]) for r in fetchall(cur)]

    def list_in_offices(self, office_ids: Sequence[str], *, bank: Optional[str] = None) -> Sequence[Employee]:
        if not office_ids:
            return []
        placeholders, params = in_clause(office_ids)
        sql = _EMPLOYEE_SELECT + f" WHERE e.office_id IN ({placeholders})"
        if bank:
            sql += " AND e.bank=%s"
            params = params + (bank,)
        sql += " ORDER BY e.first_name, e.last_name"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_employee(r) for r in fetchall(cur)]

    def search_by_first_name(self, office_id: str, text: str, limit: int = 20) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _EMPLOYEE_SELECT + " WHERE e.office_id=%s AND e.first_name LIKE %s ORDER BY e.first_name LIMIT %s",
                (office_id, f"%{text}%", int(limit)),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_banks(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT bank FROM employees WHERE bank IS NOT NULL AND bank <> '' ORDER BY bank")
            return [r["bank"] for r in fetchall(cur)]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_EMPLOYEE_SELECT + " WHERE e.id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create(self, employee: Employee) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(id, first_name, last_name, office_id, certificate, job_title,
                                      hire_date, bank, bank_account, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.employee_id,
                    employee.first_name,
                    employee.last_name,
                    employee.office_id,
                    employee.certificate,
                    employee.job_title,
                    employee.hire_date,
                    employee.bank,
                    employee.bank_account,
                    employee.note,
                ),
            )
            return employee.employee_id

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, office_id=%s, certificate=%s, job_title=%s,
                    hire_date=%s, bank=%s, bank_account=%s, note=%s
                WHERE id=%s
                """,
                (
                    employee.first_name,
                    employee.last_name,
                    employee.office_id,
                    employee.certificate,
                    employee.job_title,
                    employee.hire_date,
                    employee.bank,
                    employee.bank_account,
                    employee.note,
                    employee.employee_id,
                ),
            )
            return cur.rowcount > 0
