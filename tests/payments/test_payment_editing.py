from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from fakes import FakeEmployeeRepo, FakeOfficeRepo, FakePaymentRepo, employee, office, payment
from src.office_payroll.office_payroll.core.enums import EntryType
from src.office_payroll.office_payroll.core.exceptions import AuthorizationError, ValidationError
from src.office_payroll.office_payroll.employees.service import EmployeeService
from src.office_payroll.office_payroll.offices.service import OfficeService
from src.office_payroll.office_payroll.payments.service import PaymentService

MAY = date(2024, 5, 1)


def _service():
    offices = OfficeService(FakeOfficeRepo([office("A"), office("B", "A"), office("X")]))
    employees = EmployeeService(
        FakeEmployeeRepo([employee("e1", "A"), employee("e2", "B"), employee("e9", "X")]),
        offices,
    )
    repo = FakePaymentRepo()
    return PaymentService(repo, offices, employees), repo


def test_create_payment_with_entries():
    service, repo = _service()
    pid = service.save_payment(
        employee_id="e1",
        month=date(2024, 5, 9),
        salary="750000",
        certificate_percentage="15",
        trans_pay=20000,
        entries=[
            {"title": "رسم طابع", "amount": "2000", "type": "debit"},
            {"title": "م زوجية", "amount": 50000, "type": "credit"},
        ],
    )
    saved = repo.get_by_id(pid)
    assert saved.month == MAY
    assert saved.salary == Decimal("750000")
    assert saved.certificate_percentage == Decimal("15")
    assert [(e.title, e.entry_type) for e in saved.entries] == [
        ("رسم طابع", EntryType.DEBIT),
        ("م زوجية", EntryType.CREDIT),
    ]
    assert all(e.payment_id == pid for e in saved.entries)


@pytest.mark.parametrize(
    "overrides",
    [
        {"employee_id": None},
        {"month": None},
        {"salary": "-1"},
        {"salary": "abc"},
        {"risk_percentage": "101"},
        {"degree": "x"},
        {"entries": [{"title": "", "amount": 1, "type": "debit"}]},
        {"entries": [{"title": "x", "amount": 1, "type": "bonus"}]},
        {"entries": [{"title": "x", "amount": "-5", "type": "credit"}]},
    ],
)
def test_invalid_input_writes_nothing(overrides):
    service, repo = _service()
    kwargs = dict(employee_id="e1", month=MAY, salary="1000")
    kwargs.update(overrides)
    with pytest.raises(ValidationError):
        service.save_payment(**kwargs)
    assert repo.payments == {}


def test_second_payment_same_month_is_rejected():
    service, repo = _service()
    service.save_payment(employee_id="e1", month=MAY, salary="1")
    with pytest.raises(ValidationError):
        service.save_payment(employee_id="e1", month=MAY, salary="2")
    assert len(repo.payments) == 1


def test_edit_replaces_entries():
    service, repo = _service()
    repo.add(payment("p1", "e1", MAY, salary="1000"))
    service.save_payment(
        payment_id="p1",
        employee_id="e1",
        month=MAY,
        salary="1200",
        entries=[{"title": "ضريبة", "amount": "30", "type": "debit"}],
    )
    saved = repo.get_by_id("p1")
    assert saved.salary == Decimal("1200")
    assert [e.title for e in saved.entries] == ["ضريبة"]


def test_edit_missing_payment():
    service, _ = _service()
    with pytest.raises(ValidationError):
        service.save_payment(payment_id="nope", employee_id="e1", month=MAY)


def test_delete_payment():
    service, repo = _service()
    repo.add(payment("p1", "e1", MAY))
    service.delete_payment("p1")
    assert repo.get_by_id("p1") is None
    with pytest.raises(ValidationError):
        service.delete_payment("p1")


def test_unknown_employee_is_a_validation_error():
    service, repo = _service()
    with pytest.raises(ValidationError):
        service.save_payment(employee_id="ghost", month=MAY, salary="1")
    assert repo.payments == {}


def test_caller_can_save_for_employees_in_subtree():
    service, repo = _service()
    pid = service.save_payment(employee_id="e2", month=MAY, salary="1", office_id="A")
    assert repo.get_by_id(pid).employee_id == "e2"


def test_payments_of_another_office_tree_are_off_limits():
    service, repo = _service()
    repo.add(payment("p1", "e1", MAY, salary="1000"))

    with pytest.raises(AuthorizationError):
        service.save_payment(employee_id="e1", month=MAY, salary="1", payment_id="p1", office_id="X")
    with pytest.raises(AuthorizationError):
        service.delete_payment("p1", office_id="X")
    with pytest.raises(AuthorizationError):
        service.get_payment("p1", office_id="X")
    with pytest.raises(AuthorizationError):
        service.save_payment(employee_id="e9", month=MAY, salary="1", office_id="A")

    assert repo.get_by_id("p1").salary == Decimal("1000")
    assert service.get_payment("p1", office_id="A").payment_id == "p1"


def test_edit_cannot_move_payment_to_foreign_employee():
    service, repo = _service()
    repo.add(payment("p1", "e1", MAY, salary="1000"))
    with pytest.raises(AuthorizationError):
        service.save_payment(employee_id="e9", month=MAY, salary="1", payment_id="p1", office_id="A")
    assert repo.get_by_id("p1").employee_id == "e1"
