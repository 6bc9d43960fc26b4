from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Promotion


class PromotionRepository(Protocol):
    def list_for_employees(self, employee_ids: Sequence[str]) -> Sequence[Promotion]:
        raise NotImplementedError

    def get_by_id(self, promotion_id: str) -> Optional[Promotion]:
        raise NotImplementedError

    def create(self, promotion: Promotion) -> str:
        raise NotImplementedError

    def update(self, promotion: Promotion) -> bool:
        raise NotImplementedError
