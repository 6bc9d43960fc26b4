from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import EntryType


@dataclass(frozen=True)
class PaymentEntry:
    """Ad-hoc allowance (credit) or deduction (debit) attached to a payment."""

    entry_id: str
    payment_id: str
    title: str
    amount: Decimal
    entry_type: EntryType


@dataclass(frozen=True)
class Payment:
    """One employee's salary sheet for one month (``month`` is the 1st)."""

    payment_id: str
    employee_id: str
    month: date
    degree: Optional[int] = None
    level: Optional[int] = None
    salary: Optional[Decimal] = None
    certificate_percentage: Optional[Decimal] = None
    risk_percentage: Optional[Decimal] = None
    retire_percentage: Optional[Decimal] = None
    trans_pay: Optional[Decimal] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    entries: tuple[PaymentEntry, ...] = ()


@dataclass(frozen=True)
class PaymentDetail:
    """Read-model: a payment joined with its employee and office names."""

    payment: Payment
    first_name: Optional[str]
    last_name: Optional[str]
    office_name: Optional[str]

    @property
    def employee_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class PaymentBreakdown:
    """Unrounded components of a payment's net pay."""

    salary: Decimal
    certificate_pay: Decimal
    risk_pay: Decimal
    trans_pay: Decimal
    retire_cut: Decimal
    credit_entries: Decimal
    debit_entries: Decimal
    gross_credit: Decimal
    gross_debit: Decimal
    net: Decimal

    @classmethod
    def zero(cls) -> "PaymentBreakdown":
        z = Decimal("0")
        return cls(z, z, z, z, z, z, z, z, z, z)

    def __add__(self, other: "PaymentBreakdown") -> "PaymentBreakdown":
        return PaymentBreakdown(
            salary=self.salary + other.salary,
            certificate_pay=self.certificate_pay + other.certificate_pay,
            risk_pay=self.risk_pay + other.risk_pay,
            trans_pay=self.trans_pay + other.trans_pay,
            retire_cut=self.retire_cut + other.retire_cut,
            credit_entries=self.credit_entries + other.credit_entries,
            debit_entries=self.debit_entries + other.debit_entries,
            gross_credit=self.gross_credit + other.gross_credit,
            gross_debit=self.gross_debit + other.gross_debit,
            net=self.net + other.net,
        )
