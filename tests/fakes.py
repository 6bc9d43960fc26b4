"""In-memory repositories shared by the service tests."""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from src.office_payroll.office_payroll.core.enums import EntryType
from src.office_payroll.office_payroll.core.exceptions import DuplicateRecordError, StoreError
from src.office_payroll.office_payroll.employees.model import Employee
from src.office_payroll.office_payroll.employees.service import EmployeeService
from src.office_payroll.office_payroll.offices.model import Office, OfficeLink
from src.office_payroll.office_payroll.offices.service import OfficeService
from src.office_payroll.office_payroll.payments.model import Payment, PaymentDetail, PaymentEntry
from src.office_payroll.office_payroll.payments.scoping import PayrollScoper


class FakeOfficeRepo:
    def __init__(self, offices=(), *, fail_links: bool = False):
        self.offices: dict[str, Office] = {o.office_id: o for o in offices}
        self.fail_links = fail_links

    def list_links(self):
        if self.fail_links:
            raise StoreError("offices unavailable")
        return [OfficeLink(office_id=o.office_id, parent_id=o.parent_id) for o in self.offices.values()]

    def list_all(self):
        return list(self.offices.values())

    def get_by_id(self, office_id):
        return self.offices.get(office_id)

    def get_by_owner(self, owner_id):
        for o in self.offices.values():
            if o.owner_id == owner_id:
                return o
        return None

    def create(self, *, office_id, name, parent_id, owner_id, created_at):
        self.offices[office_id] = Office(
            office_id=office_id,
            name=name,
            parent_id=parent_id,
            owner_id=owner_id,
            is_active=False,
            created_at=created_at,
        )
        return office_id

    def set_active(self, office_id, *, is_active, activated_at=None):
        office = self.offices.get(office_id)
        if not office:
            return False
        self.offices[office_id] = replace(office, is_active=is_active, created_at=activated_at or office.created_at)
        return True


class FakeEmployeeRepo:
    def __init__(self, employees=(), *, fail: bool = False):
        self.employees: dict[str, Employee] = {e.employee_id: e for e in employees}
        self.fail = fail
        self.scope_calls: list[tuple] = []

    def list_ids_in_offices(self, office_ids, *, bank=None):
        if self.fail:
            raise StoreError("employees unavailable")
        self.scope_calls.append((tuple(office_ids), bank))
        return [e.employee_id for e in self.list_in_offices(office_ids, bank=bank)]

    def list_in_offices(self, office_ids, *, bank=None):
        return [
            e
            for e in self.employees.values()
            if e.office_id in office_ids and (bank is None or e.bank == bank)
        ]

    def search_by_first_name(self, office_id, text, limit=20):
        found = [e for e in self.employees.values() if e.office_id == office_id and text in e.first_name]
        return found[:limit]

    def list_banks(self):
        return sorted({e.bank for e in self.employees.values() if e.bank})

    def get_by_id(self, employee_id):
        return self.employees.get(employee_id)

    def create(self, employee):
        self.employees[employee.employee_id] = employee
        return employee.employee_id

    def update(self, employee):
        if employee.employee_id not in self.employees:
            return False
        self.employees[employee.employee_id] = employee
        return True


class FakePaymentRepo:
    """Keeps the (employee_id, month) uniqueness the real table enforces."""

    def __init__(self, employees: Optional[FakeEmployeeRepo] = None):
        self.payments: dict[str, Payment] = {}
        self.employees = employees
        self.insert_batch_calls = 0

    def add(self, payment: Payment) -> Payment:
        self._check_unique(payment)
        self.payments[payment.payment_id] = payment
        return payment

    def _check_unique(self, payment: Payment, *, ignore_id: Optional[str] = None):
        for p in self.payments.values():
            if p.payment_id == ignore_id:
                continue
            if p.employee_id == payment.employee_id and p.month == payment.month:
                raise DuplicateRecordError("duplicate payment")

    def list_details(self, employee_ids, *, month=None):
        out = []
        for p in self.list_all(employee_ids):
            if month is not None and p.month != month:
                continue
            emp = self.employees.get_by_id(p.employee_id) if self.employees else None
            out.append(
                PaymentDetail(
                    payment=p,
                    first_name=emp.first_name if emp else None,
                    last_name=emp.last_name if emp else None,
                    office_name=emp.office_name if emp else None,
                )
            )
        return out

    def list_all(self, employee_ids):
        return [p for p in self.payments.values() if p.employee_id in employee_ids]

    def list_for_month(self, employee_ids, month):
        return [p for p in self.list_all(employee_ids) if p.month == month]

    def exists_for_month(self, employee_ids, month):
        return bool(self.list_for_month(employee_ids, month))

    def get_by_id(self, payment_id):
        return self.payments.get(payment_id)

    def create_with_entries(self, payment):
        return self.add(payment).payment_id

    def update_with_entries(self, payment):
        if payment.payment_id not in self.payments:
            return False
        self._check_unique(payment, ignore_id=payment.payment_id)
        self.payments[payment.payment_id] = payment
        return True

    def delete(self, payment_id):
        return self.payments.pop(payment_id, None) is not None

    def insert_batch(self, payments):
        self.insert_batch_calls += 1
        staged = dict(self.payments)
        for p in payments:
            for existing in staged.values():
                if existing.employee_id == p.employee_id and existing.month == p.month:
                    raise DuplicateRecordError("duplicate payment")
            staged[p.payment_id] = p
        self.payments = staged

    def add_entries(self, entries):
        for e in entries:
            p = self.payments[e.payment_id]
            self.payments[p.payment_id] = replace(p, entries=p.entries + (e,))
        return len(entries)

    def delete_entries(self, payment_ids, *, title, entry_type):
        removed = 0
        for pid in payment_ids:
            p = self.payments[pid]
            kept = tuple(e for e in p.entries if not (e.title == title and e.entry_type == entry_type))
            removed += len(p.entries) - len(kept)
            self.payments[pid] = replace(p, entries=kept)
        return removed


def office(office_id, parent_id=None, **kw) -> Office:
    kw.setdefault("name", office_id)
    return Office(office_id=office_id, parent_id=parent_id, **kw)


def employee(employee_id, office_id, first_name=None, last_name="", **kw) -> Employee:
    return Employee(
        employee_id=employee_id,
        first_name=first_name or employee_id,
        last_name=last_name,
        office_id=office_id,
        **kw,
    )


def entry(payment_id, title, amount, entry_type=EntryType.DEBIT, entry_id=None) -> PaymentEntry:
    return PaymentEntry(
        entry_id=entry_id or f"{payment_id}-{title}",
        payment_id=payment_id,
        title=title,
        amount=Decimal(str(amount)),
        entry_type=entry_type,
    )


def payment(payment_id, employee_id, month: date, salary="0", entries=(), **kw) -> Payment:
    return Payment(
        payment_id=payment_id,
        employee_id=employee_id,
        month=month,
        salary=Decimal(str(salary)),
        entries=tuple(entries),
        **kw,
    )


def build_scoper(offices=(), employees=(), *, fail_links=False):
    office_repo = FakeOfficeRepo(offices, fail_links=fail_links)
    employee_repo = FakeEmployeeRepo(employees)
    office_service = OfficeService(office_repo)
    employee_service = EmployeeService(employee_repo, office_service)
    return PayrollScoper(office_service, employee_service), office_repo, employee_repo
