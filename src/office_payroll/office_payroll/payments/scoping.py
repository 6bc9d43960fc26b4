from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..employees.service import EmployeeService
from ..offices.model import OfficeScope
from ..offices.service import OfficeService


@dataclass(frozen=True)
class PayrollScope:
    office: OfficeScope
    employee_ids: tuple[str, ...]
    bank: Optional[str] = None


class PayrollScoper:
    """Office tree -> employee ids, shared by every office-scoped payroll use case."""

    def __init__(self, offices: OfficeService, employees: EmployeeService):
        self._offices = offices
        self._employees = employees

    def resolve(self, office_id: str, *, bank: Optional[str] = None) -> PayrollScope:
        office_scope = self._offices.resolve_scope(office_id)
        employee_ids = self._employees.scope_employee_ids(office_scope.office_ids, bank=bank)
        return PayrollScope(office=office_scope, employee_ids=tuple(employee_ids), bank=bank or None)
