from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    employee_id: str
    first_name: str
    last_name: Optional[str]
    office_id: str
    certificate: Optional[str] = None
    job_title: Optional[str] = None
    hire_date: Optional[date] = None
    bank: Optional[str] = None
    bank_account: Optional[str] = None
    note: Optional[str] = None
    office_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
