from __future__ import annotations

from datetime import date
from decimal import Decimal

from fakes import FakePaymentRepo, build_scoper, employee, entry, office, payment
from src.office_payroll.office_payroll.payments.service import PaymentReportService

MAY = date(2024, 5, 1)
JUNE = date(2024, 6, 1)


def _setup():
    scoper, _, employees = build_scoper(
        offices=[office("A"), office("B", "A"), office("X")],
        employees=[
            employee("e1", "A", first_name="زينب", bank="الرافدين"),
            employee("e2", "B", first_name="احمد", bank="الرشيد"),
            employee("e3", "X", first_name="علي", bank="الرافدين"),
        ],
    )
    repo = FakePaymentRepo(employees)
    repo.add(payment("p1", "e1", MAY, salary="1000"))
    repo.add(payment("p2", "e2", MAY, salary="2000", entries=[entry("p2", "رسم طابع", "100")]))
    repo.add(payment("p3", "e3", MAY, salary="4000"))
    repo.add(payment("p4", "e1", JUNE, salary="1000"))
    return PaymentReportService(repo, scoper)


def test_report_is_scoped_to_office_tree():
    report = _setup().build_payments_report(office_id="A", month=MAY)
    assert {r.detail.payment.payment_id for r in report.rows} == {"p1", "p2"}
    assert report.scope.complete is True


def test_totals_are_sums_of_rows():
    report = _setup().build_payments_report(office_id="A", month=MAY)
    assert report.totals.salary == Decimal("3000")
    assert report.totals.net == sum((r.breakdown.net for r in report.rows), Decimal("0"))
    assert report.totals.net == Decimal("2900")


def test_rows_sorted_by_employee_name():
    report = _setup().build_payments_report(office_id="A", month=MAY)
    assert [r.detail.employee_name for r in report.rows] == ["احمد", "زينب"]


def test_bank_filter_and_month_normalisation():
    report = _setup().build_payments_report(office_id="A", month=date(2024, 5, 17), bank="الرافدين")
    assert report.month == MAY
    assert report.bank == "الرافدين"
    assert [r.detail.payment.payment_id for r in report.rows] == ["p1"]


def test_without_month_lists_every_month():
    report = _setup().build_payments_report(office_id="A")
    assert {r.detail.payment.payment_id for r in report.rows} == {"p1", "p2", "p4"}


def test_office_without_employees_gives_empty_report():
    scoper, _, employees = build_scoper(offices=[office("A")])
    report = PaymentReportService(FakePaymentRepo(employees), scoper).build_payments_report(office_id="A", month=MAY)
    assert report.rows == []
    assert report.totals.net == Decimal("0")
