from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Office, OfficeLink


class OfficeRepository(Protocol):
    def list_links(self) -> Sequence[OfficeLink]:
        """All (id, parent_id) pairs, fetched in one call."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Office]:
        raise NotImplementedError

    def get_by_id(self, office_id: str) -> Optional[Office]:
        raise NotImplementedError

    def get_by_owner(self, owner_id: str) -> Optional[Office]:
        raise NotImplementedError

    def create(self, *, office_id: str, name: str, parent_id: Optional[str], owner_id: Optional[str], created_at: datetime) -> str:
        raise NotImplementedError

    def set_active(self, office_id: str, *, is_active: bool, activated_at: Optional[datetime] = None) -> bool:
        raise NotImplementedError
