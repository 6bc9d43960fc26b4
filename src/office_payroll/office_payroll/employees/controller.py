from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import json_error, json_ok, office_required
from ..core.exceptions import AuthorizationError, StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

_EMPLOYEE_FIELDS = ("first_name", "last_name", "certificate", "job_title", "bank", "bank_account", "note")


def _employee_form(data: dict) -> dict:
    out = {k: data[k] for k in _EMPLOYEE_FIELDS if k in data}
    if data.get("hire_date"):
        try:
            out["hire_date"] = parse_iso_date(data["hire_date"])
        except ValueError:
            raise ValidationError("تاريخ التعيين غير صالح")
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/employees", methods=["GET"], endpoint="employees")
    @office_required
    def employees():
        try:
            scope = container.office_service.resolve_scope(session["office_id"])
            items = container.employee_service.list_employees(
                scope,
                bank=request.args.get("bank"),
                search=request.args.get("q", ""),
            )
        except StoreError:
            logger.exception("employees fetch failed")
            return json_error("تعذر جلب بيانات الموظفين", status=502, data=[])
        return json_ok({"complete": scope.complete, "employees": items})

    @app.route("/employees/banks", methods=["GET"], endpoint="employee_banks")
    @office_required
    def employee_banks():
        try:
            banks = container.employee_service.list_banks()
        except StoreError:
            logger.exception("banks fetch failed")
            return json_error("تعذر جلب المصارف", status=502, data=[])
        return json_ok(banks)

    @app.route("/employees/search", methods=["GET"], endpoint="employee_search")
    @office_required
    def employee_search():
        try:
            found = container.employee_service.search_by_name(
                office_id=session["office_id"],
                text=request.args.get("q", ""),
            )
        except StoreError:
            logger.exception("employee search failed")
            return json_error("تعذر البحث عن الموظفين", status=502, data=[])
        return json_ok([{"id": e.employee_id, "name": e.full_name} for e in found])

    @app.route("/employees", methods=["POST"], endpoint="add_employee")
    @office_required
    def add_employee():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            employee_id = container.employee_service.create_employee(
                office_id=data.get("office_id") or session["office_id"],
                caller_office_id=session["office_id"],
                **_employee_form(data),
            )
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("employee insert failed")
            return json_error("حدث خطأ أثناء حفظ الموظف", status=502)
        return json_ok({"employee_id": employee_id}, message="تم حفظ الموظف", status=201)

    @app.route("/employees/<employee_id>", methods=["PUT", "POST"], endpoint="edit_employee")
    @office_required
    def edit_employee(employee_id: str):
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            changes = _employee_form(data)
            if data.get("office_id"):
                changes["office_id"] = data["office_id"]
            container.employee_service.update_employee(
                employee_id=employee_id,
                caller_office_id=session["office_id"],
                **changes,
            )
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("employee update failed")
            return json_error("حدث خطأ أثناء تحديث الموظف", status=502)
        return json_ok(message="تم تحديث بيانات الموظف")
