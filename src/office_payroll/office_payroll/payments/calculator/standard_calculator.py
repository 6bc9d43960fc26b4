from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...core.enums import EntryType
from ..model import Payment, PaymentBreakdown
from .base import PaymentCalculator

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _d(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class StandardPaymentCalculator(PaymentCalculator):
    """Standard rule.

    credits = salary + salary*cert% + salary*risk% + trans_pay + credit entries
    debits  = salary*retire% + debit entries
    net     = credits - debits

    Missing values count as zero. Nothing is rounded here.
    """

    def breakdown(self, payment: Payment) -> PaymentBreakdown:
        salary = _d(payment.salary)
        certificate_pay = salary * _d(payment.certificate_percentage) / _HUNDRED
        risk_pay = salary * _d(payment.risk_percentage) / _HUNDRED
        retire_cut = salary * _d(payment.retire_percentage) / _HUNDRED
        trans_pay = _d(payment.trans_pay)

        credit_entries = sum((_d(e.amount) for e in payment.entries if e.entry_type == EntryType.CREDIT), _ZERO)
        debit_entries = sum((_d(e.amount) for e in payment.entries if e.entry_type == EntryType.DEBIT), _ZERO)

        gross_credit = salary + certificate_pay + risk_pay + trans_pay + credit_entries
        gross_debit = retire_cut + debit_entries

        return PaymentBreakdown(
            salary=salary,
            certificate_pay=certificate_pay,
            risk_pay=risk_pay,
            trans_pay=trans_pay,
            retire_cut=retire_cut,
            credit_entries=credit_entries,
            debit_entries=debit_entries,
            gross_credit=gross_credit,
            gross_debit=gross_debit,
            net=gross_credit - gross_debit,
        )
