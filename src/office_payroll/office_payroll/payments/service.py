from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import month_start, now_local
from ..common.validators import require_non_empty, require_non_negative, require_percentage
from ..core.enums import EntryType
from ..core.exceptions import DuplicateRecordError, ValidationError
from ..employees.service import EmployeeService
from ..offices.model import OfficeScope
from ..offices.service import OfficeService
from .calculator.base import PaymentCalculator
from .calculator.standard_calculator import StandardPaymentCalculator
from .model import Payment, PaymentBreakdown, PaymentDetail, PaymentEntry
from .repository import PaymentRepository
from .scoping import PayrollScoper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReportRow:
    detail: PaymentDetail
    breakdown: PaymentBreakdown


@dataclass(frozen=True)
class PaymentsReport:
    scope: OfficeScope
    month: Optional[date]
    bank: Optional[str]
    rows: list[PaymentReportRow]
    totals: PaymentBreakdown


def total_breakdowns(breakdowns: Iterable[PaymentBreakdown]) -> PaymentBreakdown:
    total = PaymentBreakdown.zero()
    for b in breakdowns:
        total = total + b
    return total


class PaymentReportService:
    """Office-scoped payments report: rows with their net computation plus totals."""

    def __init__(
        self,
        payments: PaymentRepository,
        scoper: PayrollScoper,
        *,
        calculator: Optional[PaymentCalculator] = None,
    ):
        self._payments = payments
        self._scoper = scoper
        self._calculator = calculator or StandardPaymentCalculator()

    def build_payments_report(
        self,
        *,
        office_id: str,
        month: Optional[date] = None,
        bank: Optional[str] = None,
    ) -> PaymentsReport:
        month = month_start(month) if month else None
        scope = self._scoper.resolve(office_id, bank=bank)

        details: Sequence[PaymentDetail] = []
        if scope.employee_ids:
            details = self._payments.list_details(list(scope.employee_ids), month=month)

        rows = [PaymentReportRow(detail=d, breakdown=self._calculator.breakdown(d.payment)) for d in details]
        rows.sort(key=lambda r: (r.detail.employee_name, r.detail.payment.month))

        return PaymentsReport(
            scope=scope.office,
            month=month,
            bank=scope.bank,
            rows=rows,
            totals=total_breakdowns(r.breakdown for r in rows),
        )


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} ليس رقماً صحيحاً")


@dataclass(frozen=True)
class EntryInput:
    title: str
    amount: Any
    entry_type: Any


class PaymentService:
    """Use case: create, edit and delete a single payment sheet.

    Passing the caller's ``office_id`` limits every call to payments of
    employees inside that office tree (AuthorizationError otherwise).
    """

    def __init__(self, payments: PaymentRepository, offices: OfficeService, employees: EmployeeService):
        self._payments = payments
        self._offices = offices
        self._employees = employees

    def _require_employee(self, employee_id: str, office_id: Optional[str]) -> None:
        employee = self._employees.get_employee(employee_id)
        if not employee:
            raise ValidationError("الموظف غير موجود")
        if office_id:
            self._offices.require_in_scope(office_id, employee.office_id)

    @staticmethod
    def _parse_entries(entries: Sequence[Any], payment_id: str) -> tuple[PaymentEntry, ...]:
        out: list[PaymentEntry] = []
        for raw in entries or ():
            if isinstance(raw, Mapping):
                raw = EntryInput(
                    title=raw.get("title", ""),
                    amount=raw.get("amount"),
                    entry_type=raw.get("type", raw.get("entry_type")),
                )
            try:
                entry_type = EntryType(getattr(raw.entry_type, "value", raw.entry_type))
            except ValueError:
                raise ValidationError("نوع القيد يجب أن يكون استحقاق أو استقطاع")
            out.append(
                PaymentEntry(
                    entry_id=str(uuid.uuid4()),
                    payment_id=payment_id,
                    title=require_non_empty(raw.title, "عنوان القيد"),
                    amount=require_non_negative(raw.amount, "مبلغ القيد"),
                    entry_type=entry_type,
                )
            )
        return tuple(out)

    def save_payment(
        self,
        *,
        employee_id: Optional[str],
        month: Optional[date],
        salary: Any = 0,
        certificate_percentage: Any = 0,
        risk_percentage: Any = 0,
        retire_percentage: Any = 0,
        trans_pay: Any = 0,
        degree: Optional[int] = 1,
        level: Optional[int] = 1,
        note: str = "",
        entries: Sequence[Any] = (),
        payment_id: Optional[str] = None,
        office_id: Optional[str] = None,
    ) -> str:
        """Create (no ``payment_id``) or edit a payment; all checks run before any write."""

        if not employee_id or not month:
            raise ValidationError("يرجى اختيار الموظف والشهر!")

        is_edit = bool(payment_id)
        if is_edit:
            current = self._payments.get_by_id(payment_id)
            if not current:
                raise ValidationError("الراتب غير موجود")
            self._require_employee(current.employee_id, office_id)
        self._require_employee(employee_id, office_id)
        pid = payment_id or str(uuid.uuid4())

        payment = Payment(
            payment_id=pid,
            employee_id=employee_id,
            month=month_start(month),
            degree=_optional_int(degree, "الدرجة"),
            level=_optional_int(level, "المرحلة"),
            salary=require_non_negative(salary, "الراتب"),
            certificate_percentage=require_percentage(certificate_percentage, "نسبة الشهادة"),
            risk_percentage=require_percentage(risk_percentage, "نسبة الخطورة"),
            retire_percentage=require_percentage(retire_percentage, "نسبة التقاعد"),
            trans_pay=require_non_negative(trans_pay, "مخصصات النقل"),
            note=(note or "").strip() or None,
            created_at=now_local(),
            entries=self._parse_entries(entries, pid),
        )

        try:
            if is_edit:
                if not self._payments.update_with_entries(payment):
                    raise ValidationError("الراتب غير موجود")
            else:
                self._payments.create_with_entries(payment)
        except DuplicateRecordError:
            raise ValidationError("يوجد راتب لهذا الموظف في هذا الشهر")

        logger.info("payment %s %s for employee %s", pid, "updated" if is_edit else "created", employee_id)
        return pid

    def get_payment(self, payment_id: str, *, office_id: Optional[str] = None) -> Optional[Payment]:
        payment = self._payments.get_by_id(payment_id)
        if payment and office_id:
            self._require_employee(payment.employee_id, office_id)
        return payment

    def delete_payment(self, payment_id: str, *, office_id: Optional[str] = None) -> None:
        payment = self._payments.get_by_id(payment_id)
        if not payment:
            raise ValidationError("الراتب غير موجود")
        if office_id:
            self._require_employee(payment.employee_id, office_id)
        if not self._payments.delete(payment_id):
            raise ValidationError("الراتب غير موجود")
        logger.info("payment %s deleted", payment_id)
