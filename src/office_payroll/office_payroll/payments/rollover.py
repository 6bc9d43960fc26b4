from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_start, next_month, now_local
from ..core.enums import RolloverOutcome
from ..core.exceptions import DuplicateRecordError
from .model import Payment
from .repository import PaymentRepository
from .scoping import PayrollScoper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolloverResult:
    outcome: RolloverOutcome
    source_month: date
    target_month: date
    payments_created: int = 0
    entries_created: int = 0
    scope_complete: bool = True

    @property
    def copied(self) -> bool:
        return self.outcome == RolloverOutcome.COPIED


def clone_for_month(payment: Payment, target_month: date, *, created_at) -> Payment:
    """Copy a payment into ``target_month`` with fresh ids for it and each entry."""
    new_id = str(uuid.uuid4())
    entries = tuple(
        replace(e, entry_id=str(uuid.uuid4()), payment_id=new_id)
        for e in payment.entries
    )
    return replace(payment, payment_id=new_id, month=target_month, created_at=created_at, entries=entries)


class MonthRolloverService:
    """Use case: generate next month's payments from the current month's."""

    def __init__(self, payments: PaymentRepository, scoper: PayrollScoper):
        self._payments = payments
        self._scoper = scoper

    def roll_over(self, *, office_id: str, source_month: date, bank: Optional[str] = None) -> RolloverResult:
        source = month_start(source_month)
        target = next_month(source)

        scope = self._scoper.resolve(office_id, bank=bank)
        result = RolloverResult(
            outcome=RolloverOutcome.NO_EMPLOYEES,
            source_month=source,
            target_month=target,
            scope_complete=scope.office.complete,
        )

        employee_ids = list(scope.employee_ids)
        if not employee_ids:
            return result

        if self._payments.exists_for_month(employee_ids, target):
            logger.info("rollover %s -> %s skipped for office %s: already generated", source, target, office_id)
            return replace(result, outcome=RolloverOutcome.ALREADY_GENERATED)

        current = self._payments.list_for_month(employee_ids, source)
        if not current:
            return replace(result, outcome=RolloverOutcome.NO_SOURCE_PAYMENTS)

        created_at = now_local()
        clones = [clone_for_month(p, target, created_at=created_at) for p in current]

        try:
            self._payments.insert_batch(clones)
        except DuplicateRecordError:
            # lost a race with a concurrent rollover for the same month
            logger.warning("rollover %s -> %s for office %s hit an existing payment", source, target, office_id)
            return replace(result, outcome=RolloverOutcome.ALREADY_GENERATED)

        entries_created = sum(len(p.entries) for p in clones)
        logger.info(
            "rollover %s -> %s for office %s: %d payments, %d entries",
            source,
            target,
            office_id,
            len(clones),
            entries_created,
        )
        return replace(
            result,
            outcome=RolloverOutcome.COPIED,
            payments_created=len(clones),
            entries_created=entries_created,
        )
