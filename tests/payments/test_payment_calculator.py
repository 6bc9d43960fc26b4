from __future__ import annotations

from datetime import date
from decimal import Decimal

from fakes import entry, payment
from src.office_payroll.office_payroll.core.enums import EntryType
from src.office_payroll.office_payroll.payments.calculator.standard_calculator import StandardPaymentCalculator
from src.office_payroll.office_payroll.payments.model import Payment


def _may_payment() -> Payment:
    return payment(
        "p1",
        "E",
        date(2024, 5, 1),
        salary="1000000",
        certificate_percentage=Decimal("10"),
        risk_percentage=Decimal("5"),
        retire_percentage=Decimal("7"),
        trans_pay=Decimal("25000"),
        entries=[entry("p1", "م منصب", "50000", EntryType.CREDIT)],
    )


def test_standard_breakdown():
    b = StandardPaymentCalculator().breakdown(_may_payment())
    assert b.certificate_pay == Decimal("100000")
    assert b.risk_pay == Decimal("50000")
    assert b.retire_cut == Decimal("70000")
    assert b.gross_credit == Decimal("1225000")
    assert b.gross_debit == Decimal("70000")
    assert b.net == Decimal("1155000")


def test_debit_entries_reduce_net():
    p = payment(
        "p1",
        "E",
        date(2024, 5, 1),
        salary="500000",
        entries=[
            entry("p1", "رسم طابع", "2000"),
            entry("p1", "ضريبة", "15000"),
            entry("p1", "مكافأة", "10000", EntryType.CREDIT),
        ],
    )
    b = StandardPaymentCalculator().breakdown(p)
    assert b.debit_entries == Decimal("17000")
    assert b.credit_entries == Decimal("10000")
    assert b.net == Decimal("493000")


def test_missing_values_count_as_zero():
    p = Payment(payment_id="p1", employee_id="E", month=date(2024, 5, 1))
    b = StandardPaymentCalculator().breakdown(p)
    assert b.net == Decimal("0")
    assert b.gross_credit == b.gross_debit == Decimal("0")


def test_no_rounding_in_breakdown():
    p = payment("p1", "E", date(2024, 5, 1), salary="333333", certificate_percentage=Decimal("2.5"))
    b = StandardPaymentCalculator().breakdown(p)
    assert b.certificate_pay == Decimal("8333.325")


def test_net_identity():
    b = StandardPaymentCalculator().breakdown(_may_payment())
    assert b.net == (
        b.salary + b.certificate_pay + b.risk_pay + b.trans_pay + b.credit_entries
        - b.retire_cut - b.debit_entries
    )
