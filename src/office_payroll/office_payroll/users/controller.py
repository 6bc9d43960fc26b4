from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, request, session

from ..common.web import json_error, json_ok, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except AuthenticationError as e:
            return json_error(str(e), status=401)
        except Exception:
            logger.exception("login failed")
            return json_error("خطأ في النظام أثناء تسجيل الدخول", status=500)

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["email"] = s_user.email
        session["office_id"] = s_user.office_id
        session["office_name"] = s_user.office_name

        return json_ok(s_user, message="تم تسجيل الدخول بنجاح!")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return json_ok(message="تم تسجيل الخروج.")

    @app.route("/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = _payload()
        try:
            account_id = container.account_service.sign_up(
                email=data.get("email", ""),
                password=data.get("password", ""),
                repeat_password=data.get("repeat_password", ""),
            )
        except ValidationError as e:
            return json_error(str(e))
        except Exception:
            logger.exception("sign up failed")
            return json_error("خطأ في النظام أثناء إنشاء الحساب", status=500)
        return json_ok({"user_id": account_id}, message="تم إنشاء الحساب بنجاح", status=201)

    @app.route("/account/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = _payload()
        try:
            container.account_service.change_password(
                account_id=session["user_id"],
                new_password=data.get("password", ""),
            )
        except ValidationError as e:
            return json_error(str(e))
        except Exception:
            logger.exception("password change failed")
            return json_error("خطأ في النظام أثناء تغيير كلمة المرور", status=500)
        return json_ok(message="تم تغيير كلمة المرور")

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return json_ok(
            {
                "user_id": session.get("user_id"),
                "email": session.get("email"),
                "office_id": session.get("office_id"),
                "office_name": session.get("office_name"),
            }
        )
