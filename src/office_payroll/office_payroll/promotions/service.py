from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..common.validators import require_non_negative
from ..core.exceptions import ValidationError
from ..employees.service import EmployeeService
from ..offices.service import OfficeService
from .model import Promotion
from .repository import PromotionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromotionRow:
    promotion: Promotion
    employee_name: str


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value in (None, "", 0, "0"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} ليس رقماً صحيحاً")


def _optional_amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value in (None, "", 0, "0"):
        return None
    return require_non_negative(value, field_name)


class PromotionService:
    def __init__(self, promotions: PromotionRepository, offices: OfficeService, employees: EmployeeService):
        self._promotions = promotions
        self._offices = offices
        self._employees = employees

    def list_promotions(
        self,
        *,
        office_id: str,
        search: str = "",
        due_month: Optional[date] = None,
    ) -> list[PromotionRow]:
        scope = self._offices.resolve_scope(office_id)
        names = {e.employee_id: e.full_name for e in self._employees.list_employees(scope)}
        if not names:
            return []

        term = (search or "").strip()
        rows: list[PromotionRow] = []
        for p in self._promotions.list_for_employees(list(names)):
            name = names.get(p.employee_id, "")
            if term and term not in name:
                continue
            if due_month and (
                not p.due_date or (p.due_date.year, p.due_date.month) != (due_month.year, due_month.month)
            ):
                continue
            rows.append(PromotionRow(promotion=p, employee_name=name))
        return rows

    def _require_employee_in_scope(self, employee_id: str, office_id: Optional[str]) -> None:
        employee = self._employees.get_employee(employee_id)
        if not employee:
            raise ValidationError("الموظف غير موجود")
        if office_id:
            self._offices.require_in_scope(office_id, employee.office_id)

    def get_promotion(self, promotion_id: str, *, office_id: Optional[str] = None) -> Optional[Promotion]:
        promotion = self._promotions.get_by_id(promotion_id)
        if promotion and office_id:
            self._require_employee_in_scope(promotion.employee_id, office_id)
        return promotion

    def save_promotion(
        self,
        *,
        employee_id: Optional[str],
        old_degree: Any = None,
        old_level: Any = None,
        old_salary: Any = None,
        new_degree: Any = None,
        new_level: Any = None,
        new_salary: Any = None,
        due_date: Optional[date] = None,
        note: str = "",
        promotion_id: Optional[str] = None,
        office_id: Optional[str] = None,
    ) -> str:
        """Create or update. With ``office_id`` the employee must sit inside that office tree."""
        if not employee_id:
            raise ValidationError("يرجى اختيار الموظف")
        if promotion_id:
            current = self._promotions.get_by_id(promotion_id)
            if not current:
                raise ValidationError("الترقية غير موجودة")
            self._require_employee_in_scope(current.employee_id, office_id)
        self._require_employee_in_scope(employee_id, office_id)

        promotion = Promotion(
            promotion_id=promotion_id or str(uuid.uuid4()),
            employee_id=employee_id,
            old_degree=_optional_int(old_degree, "الدرجة السابقة"),
            old_level=_optional_int(old_level, "المرحلة السابقة"),
            old_salary=_optional_amount(old_salary, "الراتب السابق"),
            new_degree=_optional_int(new_degree, "الدرجة الجديدة"),
            new_level=_optional_int(new_level, "المرحلة الجديدة"),
            new_salary=_optional_amount(new_salary, "الراتب الجديد"),
            due_date=due_date,
            note=(note or "").strip() or None,
        )

        if promotion_id:
            if not self._promotions.update(promotion):
                raise ValidationError("الترقية غير موجودة")
        else:
            self._promotions.create(promotion)

        logger.info("promotion %s saved for employee %s", promotion.promotion_id, employee_id)
        return promotion.promotion_id
