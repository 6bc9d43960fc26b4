from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import Decimal

from fakes import FakePaymentRepo, build_scoper, employee, entry, office, payment
from src.office_payroll.office_payroll.core.enums import EntryType, RolloverOutcome
from src.office_payroll.office_payroll.core.exceptions import DuplicateRecordError
from src.office_payroll.office_payroll.payments.calculator.standard_calculator import StandardPaymentCalculator
from src.office_payroll.office_payroll.payments.rollover import MonthRolloverService

MAY = date(2024, 5, 1)
JUNE = date(2024, 6, 1)


def _setup(*, fail_links=False):
    scoper, _, employees = build_scoper(
        offices=[office("A"), office("B", "A"), office("X")],
        employees=[employee("e1", "A"), employee("e2", "B"), employee("e3", "X")],
        fail_links=fail_links,
    )
    repo = FakePaymentRepo(employees)
    return MonthRolloverService(repo, scoper), repo


def _entries_multiset(payments):
    return Counter((e.title, e.amount, e.entry_type) for p in payments for e in p.entries)


def test_copies_payments_and_entries_to_next_month():
    service, repo = _setup()
    source = repo.add(
        payment(
            "p1",
            "e1",
            MAY,
            salary="1000000",
            certificate_percentage=Decimal("10"),
            risk_percentage=Decimal("5"),
            retire_percentage=Decimal("7"),
            trans_pay=Decimal("25000"),
            degree=3,
            level=2,
            entries=[entry("p1", "م منصب", "50000", EntryType.CREDIT)],
        )
    )
    repo.add(payment("p2", "e2", MAY, salary="500", entries=[entry("p2", "رسم طابع", "2000")]))

    result = service.roll_over(office_id="A", source_month=MAY)

    assert result.outcome == RolloverOutcome.COPIED
    assert result.copied
    assert (result.source_month, result.target_month) == (MAY, JUNE)
    assert (result.payments_created, result.entries_created) == (2, 2)

    june = repo.list_for_month(["e1", "e2", "e3"], JUNE)
    may = repo.list_for_month(["e1", "e2", "e3"], MAY)
    assert len(june) == len(may) == 2
    assert _entries_multiset(june) == _entries_multiset(may)

    clone = next(p for p in june if p.employee_id == "e1")
    assert clone.payment_id != source.payment_id
    assert (clone.salary, clone.degree, clone.level, clone.trans_pay) == (
        source.salary,
        source.degree,
        source.level,
        source.trans_pay,
    )
    assert all(e.payment_id == clone.payment_id for e in clone.entries)
    assert clone.entries[0].entry_id != source.entries[0].entry_id
    assert StandardPaymentCalculator().breakdown(clone).net == Decimal("1155000")


def test_out_of_scope_payments_are_not_copied():
    service, repo = _setup()
    repo.add(payment("p1", "e1", MAY, salary="1"))
    repo.add(payment("p3", "e3", MAY, salary="1"))
    service.roll_over(office_id="A", source_month=MAY)
    assert [p.employee_id for p in repo.list_for_month(["e1", "e2", "e3"], JUNE)] == ["e1"]


def test_second_rollover_is_a_no_op():
    service, repo = _setup()
    repo.add(payment("p1", "e1", MAY, salary="1"))

    assert service.roll_over(office_id="A", source_month=MAY).outcome == RolloverOutcome.COPIED
    count = len(repo.payments)
    second = service.roll_over(office_id="A", source_month=MAY)

    assert second.outcome == RolloverOutcome.ALREADY_GENERATED
    assert len(repo.payments) == count
    assert repo.insert_batch_calls == 1


def test_december_rolls_into_january():
    service, repo = _setup()
    repo.add(payment("p1", "e1", date(2024, 12, 1), salary="1"))
    result = service.roll_over(office_id="A", source_month=date(2024, 12, 20))
    assert result.target_month == date(2025, 1, 1)
    assert repo.exists_for_month(["e1"], date(2025, 1, 1))


def test_no_source_payments():
    service, repo = _setup()
    result = service.roll_over(office_id="A", source_month=MAY)
    assert result.outcome == RolloverOutcome.NO_SOURCE_PAYMENTS
    assert repo.insert_batch_calls == 0


def test_no_employees_in_scope():
    scoper, _, employees = build_scoper(offices=[office("A")])
    service = MonthRolloverService(FakePaymentRepo(employees), scoper)
    assert service.roll_over(office_id="A", source_month=MAY).outcome == RolloverOutcome.NO_EMPLOYEES


def test_degraded_scope_is_reported():
    service, repo = _setup(fail_links=True)
    repo.add(payment("p1", "e1", MAY, salary="1"))
    repo.add(payment("p2", "e2", MAY, salary="1"))
    result = service.roll_over(office_id="A", source_month=MAY)
    assert result.scope_complete is False
    assert result.payments_created == 1


def test_concurrent_rollover_reports_already_generated():
    class RacingRepo(FakePaymentRepo):
        def insert_batch(self, payments):
            raise DuplicateRecordError("duplicate payment")

    scoper, _, employees = build_scoper(offices=[office("A")], employees=[employee("e1", "A")])
    repo = RacingRepo(employees)
    repo.add(payment("p1", "e1", MAY, salary="1"))

    result = MonthRolloverService(repo, scoper).roll_over(office_id="A", source_month=MAY)
    assert result.outcome == RolloverOutcome.ALREADY_GENERATED
    assert not repo.exists_for_month(["e1"], JUNE)
