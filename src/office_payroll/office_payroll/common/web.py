"""Shared Flask helpers for the JSON controllers."""
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import current_app, jsonify, session

MSG_LOGIN_REQUIRED = "يرجى تسجيل الدخول للمتابعة!"
MSG_NO_OFFICE = "لا يوجد دائرة مرتبطة بهذا الحساب"
MSG_FORBIDDEN = "ليس لديك صلاحية"


def to_jsonable(value: Any) -> Any:
    """Dataclasses, Decimals, dates and enums to plain JSON types.

    Decimals become strings so no precision is lost on the way out.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def json_ok(data: Any = None, *, message: str = "", status: int = 200):
    return jsonify({"success": True, "message": message, "data": to_jsonable(data)}), status


def json_error(message: str, *, status: int = 400, data: Any = None):
    return jsonify({"success": False, "message": message, "data": to_jsonable(data)}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error(MSG_LOGIN_REQUIRED, status=401)
        return view(*args, **kwargs)

    return wrapper


def office_required(view):
    """Logged in and linked to an office; the office id comes from the session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error(MSG_LOGIN_REQUIRED, status=401)
        if not session.get("office_id"):
            return json_error(MSG_NO_OFFICE, status=403)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error(MSG_LOGIN_REQUIRED, status=401)
        admins = {e.lower() for e in current_app.config.get("ADMIN_EMAILS", ())}
        if (session.get("email") or "").lower() not in admins:
            return json_error(MSG_FORBIDDEN, status=403)
        return view(*args, **kwargs)

    return wrapper
