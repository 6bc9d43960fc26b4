from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import OFFICE_ACTIVATION_DAYS
from ..core.enums import OfficeStatus
from ..core.exceptions import AuthorizationError, StoreError, ValidationError
from .model import Office, OfficeListItem, OfficeScope
from .repository import OfficeRepository
from .tree import resolve_office_tree

logger = logging.getLogger(__name__)


def office_status(office: Office, *, now: datetime, activation_days: int = OFFICE_ACTIVATION_DAYS) -> OfficeStatus:
    """Inactive beats expired; an activation older than ``activation_days`` has expired."""
    if not office.is_active:
        return OfficeStatus.INACTIVE
    if office.created_at is None or now - office.created_at > timedelta(days=activation_days):
        return OfficeStatus.EXPIRED
    return OfficeStatus.ACTIVE


class OfficeService:
    """Use cases around offices: tree scoping, ownership and activation."""

    def __init__(self, offices: OfficeRepository, *, activation_days: int = OFFICE_ACTIVATION_DAYS):
        self._offices = offices
        self._activation_days = activation_days

    def resolve_scope(self, root_id: str) -> OfficeScope:
        try:
            links = self._offices.list_links()
        except StoreError:
            logger.warning("office list unavailable, scoping to office %s only", root_id, exc_info=True)
            return OfficeScope(root_id=root_id, office_ids=(root_id,), complete=False)

        return OfficeScope(root_id=root_id, office_ids=tuple(resolve_office_tree(root_id, links)))

    def require_in_scope(self, root_id: str, office_id: Optional[str]) -> None:
        """Raise AuthorizationError unless ``office_id`` lies in the tree under ``root_id``."""
        if not office_id or office_id not in self.resolve_scope(root_id).office_ids:
            raise AuthorizationError("لا تملك صلاحية على بيانات هذه الدائرة")

    def get_office_for_owner(self, owner_id: str) -> Optional[Office]:
        return self._offices.get_by_owner(owner_id)

    def list_options(self) -> list[Office]:
        return sorted(self._offices.list_all(), key=lambda o: o.name)

    def list_offices(self, *, search: str = "") -> list[OfficeListItem]:
        term = (search or "").strip().lower()
        now = now_local()
        out: list[OfficeListItem] = []
        for office in self._offices.list_all():
            if term and term not in office.name.lower() and term not in (office.phone or ""):
                continue
            out.append(
                OfficeListItem(
                    office=office,
                    status=office_status(office, now=now, activation_days=self._activation_days),
                )
            )
        return out

    def create_office(self, *, owner_id: str, name: str, parent_id: Optional[str] = None) -> str:
        name = require_non_empty(name, "اسم المكتب")

        if self._offices.get_by_owner(owner_id):
            raise ValidationError("لديك مكتب مسجل مسبقاً")

        if parent_id and not self._offices.get_by_id(parent_id):
            raise ValidationError("المكتب الأم غير موجود")

        office_id = str(uuid.uuid4())
        self._offices.create(
            office_id=office_id,
            name=name,
            parent_id=parent_id or None,
            owner_id=owner_id,
            created_at=now_local(),
        )
        logger.info("office %s created for owner %s", office_id, owner_id)
        return office_id

    def activate_office(self, office_id: str) -> None:
        if not self._offices.set_active(office_id, is_active=True, activated_at=now_local()):
            raise ValidationError("المكتب غير موجود")
        logger.info("office %s activated", office_id)

    def deactivate_office(self, office_id: str) -> None:
        if not self._offices.set_active(office_id, is_active=False):
            raise ValidationError("المكتب غير موجود")
        logger.info("office %s deactivated", office_id)
