from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..common.datetime_utils import month_start
from ..common.validators import require_non_empty, require_non_negative
from ..core.constants import DEFAULT_STAMP_FEE_AMOUNT, DEFAULT_STAMP_FEE_TITLE
from ..core.enums import EntryType
from ..core.exceptions import ValidationError
from .model import PaymentEntry
from .repository import PaymentRepository
from .scoping import PayrollScoper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkDeductionResult:
    month: date
    title: str
    payments_seen: int
    entries_changed: int


class DeductionService:
    """Use case: add or remove a named debit (stamp fee etc.) on a whole month's payments."""

    def __init__(self, payments: PaymentRepository, scoper: PayrollScoper):
        self._payments = payments
        self._scoper = scoper

    def _month_payments(self, office_id: str, month: date):
        scope = self._scoper.resolve(office_id)
        payments = self._payments.list_for_month(list(scope.employee_ids), month) if scope.employee_ids else []
        if not payments:
            raise ValidationError("لم يتم العثور على سجلات رواتب لهذا الشهر.")
        return payments

    def apply_bulk_deduction(
        self,
        *,
        office_id: str,
        month: date,
        title: str = DEFAULT_STAMP_FEE_TITLE,
        amount: Any = DEFAULT_STAMP_FEE_AMOUNT,
    ) -> BulkDeductionResult:
        """Payments that already carry a debit with this title are left alone."""
        month = month_start(month)
        title = require_non_empty(title, "نوع الاستقطاع")
        amount = require_non_negative(amount, "قيمة المبلغ")

        payments = self._month_payments(office_id, month)
        new_entries = [
            PaymentEntry(
                entry_id=str(uuid.uuid4()),
                payment_id=p.payment_id,
                title=title,
                amount=amount,
                entry_type=EntryType.DEBIT,
            )
            for p in payments
            if not any(e.title == title and e.entry_type == EntryType.DEBIT for e in p.entries)
        ]
        added = self._payments.add_entries(new_entries)
        logger.info("deduction %r added to %d of %d payments for %s", title, added, len(payments), month)
        return BulkDeductionResult(month=month, title=title, payments_seen=len(payments), entries_changed=added)

    def remove_bulk_deduction(self, *, office_id: str, month: date, title: str = DEFAULT_STAMP_FEE_TITLE) -> BulkDeductionResult:
        month = month_start(month)
        title = require_non_empty(title, "نوع الاستقطاع")

        payments = self._month_payments(office_id, month)
        removed = self._payments.delete_entries(
            [p.payment_id for p in payments],
            title=title,
            entry_type=EntryType.DEBIT,
        )
        logger.info("deduction %r removed from %d entries for %s", title, removed, month)
        return BulkDeductionResult(month=month, title=title, payments_seen=len(payments), entries_changed=removed)
