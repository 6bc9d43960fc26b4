from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_ids_in_offices(self, office_ids: Sequence[str], *, bank: Optional[str] = None) -> Sequence[str]:
        raise NotImplementedError

    def list_in_offices(self, office_ids: Sequence[str], *, bank: Optional[str] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def search_by_first_name(self, office_id: str, text: str, limit: int = 20) -> Sequence[Employee]:
        raise NotImplementedError

    def list_banks(self) -> Sequence[str]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee) -> str:
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError
