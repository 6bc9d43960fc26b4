from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} غير صالح")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} يجب ألا يقل عن {min_len} أحرف")
    return value


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Coerce form/JSON input to Decimal; empty means zero."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} ليس رقماً صالحاً")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} ليس رقماً صالحاً")
    return amount


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} لا يمكن أن يكون سالباً")
    return amount


def require_percentage(value: Any, field_name: str) -> Decimal:
    pct = to_decimal(value, field_name)
    if pct < 0 or pct > 100:
        raise ValidationError(f"{field_name} يجب أن تكون بين 0 و 100")
    return pct
