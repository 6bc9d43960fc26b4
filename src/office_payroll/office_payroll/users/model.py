from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """Login identity. Offices point at it through ``auth_owner_id``."""

    account_id: str
    email: str
    password_hash: str
    is_active: bool = True
