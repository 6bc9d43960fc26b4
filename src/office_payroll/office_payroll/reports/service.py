from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import month_start
from ..common.validators import require_percentage
from ..core.constants import DEFAULT_RETIREMENT_PERCENTAGE, TAX_ENTRY_TITLE
from ..offices.model import OfficeScope
from ..payments.model import PaymentDetail
from ..payments.repository import PaymentRepository
from ..payments.scoping import PayrollScoper

_ZERO = Decimal("0")


@dataclass(frozen=True)
class TaxReportRow:
    employee_id: str
    employee_name: str
    office_name: Optional[str]
    salary: Decimal
    tax: Decimal


@dataclass(frozen=True)
class TaxReport:
    scope: OfficeScope
    month: date
    rows: list[TaxReportRow]
    total_salary: Decimal
    total_tax: Decimal


@dataclass(frozen=True)
class RetirementReportRow:
    employee_id: str
    employee_name: str
    salary: Decimal
    cut: Decimal


@dataclass(frozen=True)
class RetirementReport:
    scope: OfficeScope
    month: date
    percentage: Decimal
    rows: list[RetirementReportRow]
    total_salary: Decimal
    total_cut: Decimal


def tax_amount(detail: PaymentDetail, *, title: str = TAX_ENTRY_TITLE) -> Decimal:
    """Amount of the first entry titled as tax, zero when there is none."""
    for entry in detail.payment.entries:
        if entry.title == title:
            return entry.amount or _ZERO
    return _ZERO


class StatutoryReportService:
    """Monthly tax-withholding and retirement-deduction reports for an office tree."""

    def __init__(
        self,
        payments: PaymentRepository,
        scoper: PayrollScoper,
        *,
        retirement_percentage: Any = DEFAULT_RETIREMENT_PERCENTAGE,
        tax_title: str = TAX_ENTRY_TITLE,
    ):
        self._payments = payments
        self._scoper = scoper
        self._retirement_percentage = Decimal(str(retirement_percentage))
        self._tax_title = tax_title

    def _month_details(self, office_id: str, month: date) -> tuple[OfficeScope, Sequence[PaymentDetail]]:
        scope = self._scoper.resolve(office_id)
        if not scope.employee_ids:
            return scope.office, []
        details = self._payments.list_details(list(scope.employee_ids), month=month)
        return scope.office, sorted(details, key=lambda d: d.employee_name)

    def build_tax_report(self, *, office_id: str, month: date) -> TaxReport:
        month = month_start(month)
        scope, details = self._month_details(office_id, month)

        rows = []
        for d in details:
            tax = tax_amount(d, title=self._tax_title)
            if tax <= 0:
                continue
            rows.append(
                TaxReportRow(
                    employee_id=d.payment.employee_id,
                    employee_name=d.employee_name,
                    office_name=d.office_name,
                    salary=d.payment.salary or _ZERO,
                    tax=tax,
                )
            )

        return TaxReport(
            scope=scope,
            month=month,
            rows=rows,
            total_salary=sum((r.salary for r in rows), _ZERO),
            total_tax=sum((r.tax for r in rows), _ZERO),
        )

    def build_retirement_report(
        self,
        *,
        office_id: str,
        month: date,
        percentage: Any = None,
    ) -> RetirementReport:
        month = month_start(month)
        pct = self._retirement_percentage if percentage in (None, "") else require_percentage(percentage, "نسبة التقاعد")
        scope, details = self._month_details(office_id, month)

        rows = [
            RetirementReportRow(
                employee_id=d.payment.employee_id,
                employee_name=d.employee_name,
                salary=d.payment.salary or _ZERO,
                cut=(d.payment.salary or _ZERO) * pct / Decimal("100"),
            )
            for d in details
        ]

        return RetirementReport(
            scope=scope,
            month=month,
            percentage=pct,
            rows=rows,
            total_salary=sum((r.salary for r in rows), _ZERO),
            total_cut=sum((r.cut for r in rows), _ZERO),
        )
