from __future__ import annotations

from enum import Enum


class EntryType(str, Enum):
    """Kind of ad-hoc ledger line attached to a payment."""

    CREDIT = "credit"
    DEBIT = "debit"


class OfficeStatus(str, Enum):
    """Subscription state shown on the offices admin list."""

    ACTIVE = "active"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class RolloverOutcome(str, Enum):
    """How a month rollover run ended."""

    COPIED = "COPIED"
    ALREADY_GENERATED = "ALREADY_GENERATED"
    NO_EMPLOYEES = "NO_EMPLOYEES"
    NO_SOURCE_PAYMENTS = "NO_SOURCE_PAYMENTS"
