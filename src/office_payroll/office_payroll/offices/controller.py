from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.web import admin_required, json_error, json_ok, login_required
from ..core.exceptions import StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/offices", methods=["GET"], endpoint="offices")
    @admin_required
    def offices():
        try:
            items = container.office_service.list_offices(search=request.args.get("q", ""))
        except StoreError:
            logger.exception("offices fetch failed")
            return json_error("تعذر جلب الدوائر", status=502, data=[])
        return json_ok(items)

    @app.route("/offices/<office_id>/activate", methods=["POST"], endpoint="activate_office")
    @admin_required
    def activate_office(office_id: str):
        try:
            container.office_service.activate_office(office_id)
        except ValidationError as e:
            return json_error(str(e), status=404)
        except StoreError:
            logger.exception("office activation failed")
            return json_error("حدث خطأ أثناء التفعيل", status=502)
        return json_ok(message="تم تفعيل المكتب بنجاح")

    @app.route("/offices/<office_id>/deactivate", methods=["POST"], endpoint="deactivate_office")
    @admin_required
    def deactivate_office(office_id: str):
        try:
            container.office_service.deactivate_office(office_id)
        except ValidationError as e:
            return json_error(str(e), status=404)
        except StoreError:
            logger.exception("office deactivation failed")
            return json_error("حدث خطأ أثناء إلغاء التفعيل", status=502)
        return json_ok(message="تم إلغاء تفعيل المكتب")

    @app.route("/offices/mine", methods=["GET"], endpoint="my_office")
    @login_required
    def my_office():
        try:
            office = container.office_service.get_office_for_owner(session["user_id"])
        except StoreError:
            logger.exception("office fetch failed")
            return json_error("تعذر جلب بيانات المكتب", status=502)
        if not office:
            return json_error("لا يوجد مكتب لهذا الحساب", status=404)
        return json_ok(office)

    @app.route("/offices/options", methods=["GET"], endpoint="office_options")
    @login_required
    def office_options():
        try:
            options = container.office_service.list_options()
        except StoreError:
            logger.exception("office options fetch failed")
            return json_error("تعذر جلب الدوائر", status=502, data=[])
        return json_ok([{"id": o.office_id, "name": o.name} for o in options])

    @app.route("/offices/new", methods=["POST"], endpoint="add_office")
    @login_required
    def add_office():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            office_id = container.office_service.create_office(
                owner_id=session["user_id"],
                name=data.get("name", ""),
                parent_id=data.get("parent_id") or None,
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError:
            logger.exception("office insert failed")
            return json_error("❌ حدث خطأ أثناء حفظ المكتب.", status=502)

        # usable after an admin activates it and the owner logs in again
        return json_ok({"office_id": office_id}, message="تم حفظ المكتب، بانتظار التفعيل", status=201)
