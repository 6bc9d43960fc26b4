from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, OFFICE_ACTIVATION_DAYS
from ..core.enums import OfficeStatus
from ..core.exceptions import AuthenticationError, ValidationError
from ..offices.repository import OfficeRepository
from ..offices.service import office_status
from .repository import AccountRepository

logger = logging.getLogger(__name__)

INACTIVE_OFFICE_MESSAGE = "المكتب غير مفعل، يرجى التواصل مع الإدارة لتفعيل الاشتراك"
EXPIRED_OFFICE_MESSAGE = "انتهت صلاحية اشتراك المكتب، يرجى التواصل مع الإدارة لإعادة التفعيل"


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login.

    ``office_id`` is resolved once here and passed explicitly to services.
    """

    user_id: str
    email: str
    office_id: Optional[str]
    office_name: Optional[str]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(
        self,
        accounts: AccountRepository,
        offices: OfficeRepository,
        *,
        activation_days: int = OFFICE_ACTIVATION_DAYS,
    ):
        self._accounts = accounts
        self._offices = offices
        self._activation_days = activation_days

    def authenticate(self, email: str, password: str) -> SessionUser:
        account = self._accounts.get_by_email((email or "").strip().lower())
        if not account or not account.is_active:
            raise AuthenticationError("البريد الإلكتروني أو كلمة المرور غير صحيحة")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("البريد الإلكتروني أو كلمة المرور غير صحيحة")

        office = self._offices.get_by_owner(account.account_id)
        if office:
            status = office_status(office, now=now_local(), activation_days=self._activation_days)
            if status == OfficeStatus.INACTIVE:
                raise AuthenticationError(INACTIVE_OFFICE_MESSAGE)
            if status == OfficeStatus.EXPIRED:
                raise AuthenticationError(EXPIRED_OFFICE_MESSAGE)
        return SessionUser(
            user_id=account.account_id,
            email=account.email,
            office_id=office.office_id if office else None,
            office_name=office.name if office else None,
        )


class AccountService:
    """Use case: sign up and change password."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def sign_up(self, *, email: str, password: str, repeat_password: str) -> str:
        email = require_non_empty(email, "البريد الإلكتروني").lower()
        require_min_length(password, "كلمة المرور", MIN_PASSWORD_LENGTH)
        if password != repeat_password:
            raise ValidationError("كلمتا المرور غير متطابقتين")

        if self._accounts.get_by_email(email):
            raise ValidationError("البريد الإلكتروني مسجل مسبقاً")

        account_id = self._accounts.create(
            account_id=str(uuid.uuid4()),
            email=email,
            password_hash=generate_password_hash(password),
        )
        logger.info("account %s signed up", account_id)
        return account_id

    def change_password(self, *, account_id: str, new_password: str) -> None:
        require_min_length(new_password, "كلمة المرور", MIN_PASSWORD_LENGTH)
        if not self._accounts.set_password_hash(account_id, generate_password_hash(new_password)):
            raise ValidationError("الحساب غير موجود")
