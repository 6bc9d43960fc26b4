from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import MIN_SEARCH_LENGTH
from ..core.exceptions import ValidationError
from ..offices.model import OfficeScope
from ..offices.service import OfficeService
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    v = (value or "").strip()
    return v or None


class EmployeeService:
    """Use cases: scope employees to an office tree and maintain employee records."""

    def __init__(self, employees: EmployeeRepository, offices: OfficeService):
        self._employees = employees
        self._offices = offices

    def _require_in_scope(self, caller_office_id: Optional[str], office_id: Optional[str]) -> None:
        if caller_office_id:
            self._offices.require_in_scope(caller_office_id, office_id)

    def scope_employee_ids(self, office_ids: Sequence[str], *, bank: Optional[str] = None) -> list[str]:
        """Employees whose office is in ``office_ids``, optionally only those paid through ``bank``.

        StoreError from the repository is not caught here.
        """
        if not office_ids:
            return []
        return list(self._employees.list_ids_in_offices(list(office_ids), bank=_clean(bank)))

    def list_employees(
        self,
        scope: OfficeScope,
        *,
        bank: Optional[str] = None,
        search: str = "",
    ) -> list[Employee]:
        employees = self._employees.list_in_offices(list(scope.office_ids), bank=_clean(bank))
        term = (search or "").strip()
        if term:
            employees = [e for e in employees if term in e.full_name]
        return list(employees)

    def list_banks(self) -> list[str]:
        return list(self._employees.list_banks())

    def search_by_name(self, *, office_id: str, text: str) -> list[Employee]:
        text = (text or "").strip()
        if len(text) < MIN_SEARCH_LENGTH:
            return []
        return list(self._employees.search_by_first_name(office_id, text))

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get_by_id(employee_id)

    def create_employee(
        self,
        *,
        office_id: str,
        first_name: str,
        last_name: str = "",
        certificate: str = "",
        job_title: str = "",
        hire_date: Optional[date] = None,
        bank: str = "",
        bank_account: str = "",
        note: str = "",
        caller_office_id: Optional[str] = None,
    ) -> str:
        """With ``caller_office_id`` the new employee must go into that office tree."""
        if not office_id:
            raise ValidationError("الدائرة غير محددة")
        self._require_in_scope(caller_office_id, office_id)

        employee = Employee(
            employee_id=str(uuid.uuid4()),
            first_name=require_non_empty(first_name, "الاسم الأول"),
            last_name=_clean(last_name),
            office_id=office_id,
            certificate=_clean(certificate),
            job_title=_clean(job_title),
            hire_date=hire_date,
            bank=_clean(bank),
            bank_account=_clean(bank_account),
            note=_clean(note),
        )
        employee_id = self._employees.create(employee)
        logger.info("employee %s created in office %s", employee_id, office_id)
        return employee_id

    def update_employee(self, *, employee_id: str, caller_office_id: Optional[str] = None, **changes) -> None:
        current = self._employees.get_by_id(employee_id)
        if not current:
            raise ValidationError("الموظف غير موجود")
        self._require_in_scope(caller_office_id, current.office_id)

        allowed = {
            "first_name",
            "last_name",
            "office_id",
            "certificate",
            "job_title",
            "hire_date",
            "bank",
            "bank_account",
            "note",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(f"حقول غير معروفة: {', '.join(sorted(unknown))}")

        cleaned = {}
        for key, value in changes.items():
            if key == "first_name":
                cleaned[key] = require_non_empty(value, "الاسم الأول")
            elif key == "office_id":
                if not value:
                    raise ValidationError("الدائرة غير محددة")
                self._require_in_scope(caller_office_id, value)
                cleaned[key] = value
            elif key == "hire_date":
                cleaned[key] = value
            else:
                cleaned[key] = _clean(value)

        if not self._employees.update(replace(current, **cleaned)):
            raise ValidationError("تعذر تحديث بيانات الموظف")
