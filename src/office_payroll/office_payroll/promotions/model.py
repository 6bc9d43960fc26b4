from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Promotion:
    """Historical grade change of an employee; not used by payment calculations."""

    promotion_id: str
    employee_id: str
    old_degree: Optional[int] = None
    old_level: Optional[int] = None
    old_salary: Optional[Decimal] = None
    new_degree: Optional[int] = None
    new_level: Optional[int] = None
    new_salary: Optional[Decimal] = None
    due_date: Optional[date] = None
    note: Optional[str] = None
