from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import OfficeStatus


@dataclass(frozen=True)
class Office:
    """Organisational unit. ``parent_id`` links offices into a forest."""

    office_id: str
    name: str
    parent_id: Optional[str] = None
    owner_id: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class OfficeLink:
    """Minimal (id, parent) pair used to walk the office tree."""

    office_id: str
    parent_id: Optional[str]


@dataclass(frozen=True)
class OfficeScope:
    """Offices reachable from ``root_id``.

    ``complete`` is False when the office list could not be fetched and the
    scope fell back to the root office alone.
    """

    root_id: str
    office_ids: tuple[str, ...]
    complete: bool = True


@dataclass(frozen=True)
class OfficeListItem:
    office: Office
    status: OfficeStatus
