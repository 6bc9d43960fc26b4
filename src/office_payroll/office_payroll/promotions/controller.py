from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.web import json_error, json_ok, office_required
from ..core.exceptions import AuthorizationError, StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/promotions", methods=["GET"], endpoint="promotions")
    @office_required
    def promotions():
        try:
            month_s = request.args.get("month")
            rows = container.promotion_service.list_promotions(
                office_id=session["office_id"],
                search=request.args.get("q", ""),
                due_month=parse_month(month_s) if month_s else None,
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError:
            logger.exception("promotions fetch failed")
            return json_error("تعذر جلب الترقيات", status=502, data=[])
        return json_ok(rows)

    @app.route("/promotions", methods=["POST"], endpoint="save_promotion")
    @office_required
    def save_promotion():
        data = request.get_json(silent=True) or request.form.to_dict()
        try:
            due_date = None
            if data.get("due_date"):
                try:
                    due_date = parse_iso_date(data["due_date"])
                except ValueError:
                    raise ValidationError("تاريخ الاستحقاق غير صالح")
            promotion_id = container.promotion_service.save_promotion(
                promotion_id=data.get("id") or None,
                employee_id=data.get("employee_id"),
                old_degree=data.get("old_degree"),
                old_level=data.get("old_level"),
                old_salary=data.get("old_salary"),
                new_degree=data.get("new_degree"),
                new_level=data.get("new_level"),
                new_salary=data.get("new_salary"),
                due_date=due_date,
                note=data.get("note") or "",
                office_id=session["office_id"],
            )
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("promotion save failed")
            return json_error("حدث خطأ أثناء حفظ الترقية", status=502)
        return json_ok({"promotion_id": promotion_id}, message="تم حفظ الترقية بنجاح")

    @app.route("/promotions/<promotion_id>", methods=["GET"], endpoint="promotion_detail")
    @office_required
    def promotion_detail(promotion_id: str):
        try:
            promotion = container.promotion_service.get_promotion(promotion_id, office_id=session["office_id"])
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("promotion fetch failed")
            return json_error("تعذر جلب الترقية", status=502)
        if not promotion:
            return json_error("الترقية غير موجودة", status=404)
        return json_ok(promotion)
