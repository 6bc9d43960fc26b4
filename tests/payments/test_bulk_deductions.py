from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from fakes import FakePaymentRepo, build_scoper, employee, entry, office, payment
from src.office_payroll.office_payroll.core.enums import EntryType
from src.office_payroll.office_payroll.core.exceptions import ValidationError
from src.office_payroll.office_payroll.payments.deductions import DeductionService

MAY = date(2024, 5, 1)
STAMP = "رسم طابع"


def _setup():
    scoper, _, employees = build_scoper(
        offices=[office("A"), office("B", "A"), office("X")],
        employees=[employee("e1", "A"), employee("e2", "B"), employee("e3", "X")],
    )
    repo = FakePaymentRepo(employees)
    repo.add(payment("p1", "e1", MAY, salary="1000"))
    repo.add(payment("p2", "e2", MAY, salary="1000", entries=[entry("p2", STAMP, "2000")]))
    repo.add(payment("p3", "e3", MAY, salary="1000"))
    return DeductionService(repo, scoper), repo


def _stamps(repo, pid):
    return [e for e in repo.get_by_id(pid).entries if e.title == STAMP and e.entry_type == EntryType.DEBIT]


def test_apply_skips_payments_that_already_have_it():
    service, repo = _setup()
    result = service.apply_bulk_deduction(office_id="A", month=MAY, title=STAMP, amount="2000")

    assert (result.payments_seen, result.entries_changed) == (2, 1)
    assert len(_stamps(repo, "p1")) == 1
    assert len(_stamps(repo, "p2")) == 1
    assert _stamps(repo, "p1")[0].amount == Decimal("2000")
    assert _stamps(repo, "p3") == []


def test_apply_twice_is_idempotent():
    service, repo = _setup()
    service.apply_bulk_deduction(office_id="A", month=MAY, title=STAMP, amount="2000")
    again = service.apply_bulk_deduction(office_id="A", month=MAY, title=STAMP, amount="2000")
    assert again.entries_changed == 0
    assert len(_stamps(repo, "p1")) == 1


def test_remove_only_touches_scoped_payments():
    service, repo = _setup()
    repo.add_entries([entry("p3", STAMP, "2000")])
    result = service.remove_bulk_deduction(office_id="A", month=MAY, title=STAMP)

    assert result.entries_changed == 1
    assert _stamps(repo, "p2") == []
    assert len(_stamps(repo, "p3")) == 1


def test_month_without_payments_is_rejected():
    service, _ = _setup()
    with pytest.raises(ValidationError):
        service.apply_bulk_deduction(office_id="A", month=date(2024, 7, 1))
    with pytest.raises(ValidationError):
        service.remove_bulk_deduction(office_id="A", month=date(2024, 7, 1))


def test_negative_amount_is_rejected():
    service, repo = _setup()
    with pytest.raises(ValidationError):
        service.apply_bulk_deduction(office_id="A", month=MAY, title=STAMP, amount="-1")
    assert _stamps(repo, "p1") == []
