from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.datetime_utils import parse_month
from ..common.formatting import format_arabic_month, format_money
from ..common.web import json_error, json_ok, office_required, to_jsonable
from ..core.exceptions import StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/reports/tax", methods=["GET"], endpoint="tax_report")
    @office_required
    def tax_report():
        if not request.args.get("month"):
            return json_error("يرجى اختيار الشهر", data={"rows": []})
        try:
            report = container.statutory_report_service.build_tax_report(
                office_id=session["office_id"],
                month=parse_month(request.args["month"]),
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError:
            logger.exception("tax report fetch failed")
            return json_error("حدث خطأ أثناء جلب بيانات الرواتب.", status=502, data={"rows": []})

        data = to_jsonable(report)
        data["month_label"] = format_arabic_month(report.month)
        data["total_salary_display"] = format_money(report.total_salary)
        data["total_tax_display"] = format_money(report.total_tax)
        return json_ok(data)

    @app.route("/reports/retirement", methods=["GET"], endpoint="retirement_report")
    @office_required
    def retirement_report():
        if not request.args.get("month"):
            return json_error("يرجى اختيار الشهر", data={"rows": []})
        try:
            report = container.statutory_report_service.build_retirement_report(
                office_id=session["office_id"],
                month=parse_month(request.args["month"]),
                percentage=request.args.get("percentage"),
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError:
            logger.exception("retirement report fetch failed")
            return json_error("حدث خطأ أثناء جلب بيانات الرواتب.", status=502, data={"rows": []})

        data = to_jsonable(report)
        data["month_label"] = format_arabic_month(report.month)
        data["total_salary_display"] = format_money(report.total_salary)
        data["total_cut_display"] = format_money(report.total_cut)
        return json_ok(data)
