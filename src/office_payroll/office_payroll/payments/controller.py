from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, current_app, request, session

from ..common.datetime_utils import parse_month
from ..common.formatting import format_arabic_month, format_money
from ..common.web import json_error, json_ok, office_required, to_jsonable
from ..core.enums import RolloverOutcome
from ..core.exceptions import AuthorizationError, StoreError, ValidationError
from ..container import Container
from .model import PaymentBreakdown
from .service import PaymentsReport

logger = logging.getLogger(__name__)

ROLLOVER_MESSAGES = {
    RolloverOutcome.COPIED: "تم إنشاء رواتب الشهر القادم بنجاح!",
    RolloverOutcome.ALREADY_GENERATED: "تم إنشاء رواتب هذا الشهر مسبقًا!",
    RolloverOutcome.NO_EMPLOYEES: "لا يوجد موظفون في هذه الدائرة.",
    RolloverOutcome.NO_SOURCE_PAYMENTS: "لا توجد رواتب لهذا الشهر.",
}


def _optional_month(value: Optional[str]) -> Optional[date]:
    return parse_month(value) if value else None


def _display(b: PaymentBreakdown) -> dict:
    return {
        "salary": format_money(b.salary),
        "certificate_pay": format_money(b.certificate_pay),
        "risk_pay": format_money(b.risk_pay),
        "trans_pay": format_money(b.trans_pay),
        "retire_cut": format_money(b.retire_cut),
        "gross_credit": format_money(b.gross_credit),
        "gross_debit": format_money(b.gross_debit),
        "net": format_money(b.net),
    }


def _report_to_json(report: PaymentsReport) -> dict:
    rows = []
    for r in report.rows:
        p = r.detail.payment
        rows.append(
            {
                "payment": to_jsonable(p),
                "employee_name": r.detail.employee_name,
                "office_name": r.detail.office_name,
                "breakdown": to_jsonable(r.breakdown),
                "display": _display(r.breakdown),
            }
        )
    return {
        "office_id": report.scope.root_id,
        "complete": report.scope.complete,
        "month": report.month.isoformat() if report.month else None,
        "month_label": format_arabic_month(report.month) if report.month else None,
        "bank": report.bank,
        "rows": rows,
        "totals": to_jsonable(report.totals),
        "totals_display": _display(report.totals),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/payments/report", methods=["GET"], endpoint="payments_report")
    @office_required
    def payments_report():
        try:
            report = container.payment_report_service.build_payments_report(
                office_id=session["office_id"],
                month=_optional_month(request.args.get("month")),
                bank=request.args.get("bank") or None,
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError:
            logger.exception("payments fetch failed")
            return json_error("حدث خطأ أثناء جلب بيانات الرواتب.", status=502, data={"rows": []})
        return json_ok(_report_to_json(report))

    @app.route("/payments", methods=["POST"], endpoint="save_payment")
    @office_required
    def save_payment():
        data = request.get_json(silent=True) or {}
        try:
            payment_id = container.payment_service.save_payment(
                payment_id=data.get("id") or None,
                employee_id=data.get("employee_id"),
                month=_optional_month(data.get("month")),
                salary=data.get("salary"),
                certificate_percentage=data.get("certificate_percentage"),
                risk_percentage=data.get("risk_percentage"),
                retire_percentage=data.get("retire_percentage"),
                trans_pay=data.get("trans_pay"),
                degree=data.get("degree", 1),
                level=data.get("level", 1),
                note=data.get("note") or "",
                entries=data.get("entries") or [],
                office_id=session["office_id"],
            )
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("payment save failed")
            return json_error("حدث خطأ أثناء الحفظ", status=502)
        return json_ok({"payment_id": payment_id}, message="تم الحفظ بنجاح ✅")

    @app.route("/payments/<payment_id>", methods=["GET"], endpoint="payment_detail")
    @office_required
    def payment_detail(payment_id: str):
        try:
            p = container.payment_service.get_payment(payment_id, office_id=session["office_id"])
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("payment fetch failed")
            return json_error("حدث خطأ أثناء جلب الراتب", status=502)
        if not p:
            return json_error("الراتب غير موجود", status=404)
        return json_ok(p)

    @app.route("/payments/<payment_id>", methods=["DELETE"], endpoint="delete_payment")
    @office_required
    def delete_payment(payment_id: str):
        try:
            container.payment_service.delete_payment(payment_id, office_id=session["office_id"])
        except ValidationError as e:
            return json_error(str(e), status=404)
        except AuthorizationError as e:
            return json_error(str(e), status=403)
        except StoreError:
            logger.exception("payment delete failed")
            return json_error("حدث خطأ أثناء الحذف", status=502)
        return json_ok(message="تم حذف الراتب بنجاح")

    @app.route("/payments/rollover", methods=["POST"], endpoint="payments_rollover")
    @office_required
    def payments_rollover():
        data = request.get_json(silent=True) or request.form.to_dict()
        if not data.get("month"):
            return json_error("يرجى اختيار الشهر الحالي أولاً")
        try:
            result = container.rollover_service.roll_over(
                office_id=session["office_id"],
                source_month=parse_month(data["month"]),
                bank=data.get("bank") or None,
            )
        except ValidationError as e:
            return json_error(str(e))
        except StoreError as e:
            logger.exception("rollover failed")
            return json_error(f"حدث خطأ: {e}", status=502)
        return json_ok(result, message=ROLLOVER_MESSAGES[result.outcome])

    @app.route("/payments/deductions", methods=["POST", "DELETE"], endpoint="payments_deductions")
    @office_required
    def payments_deductions():
        data = request.get_json(silent=True) or request.form.to_dict()
        if not data.get("month"):
            return json_error("يرجى اختيار الشهر")
        title = data.get("title") or current_app.config.get("STAMP_FEE_TITLE")
        try:
            month = parse_month(data["month"])
            if request.method == "DELETE":
                result = container.deduction_service.remove_bulk_deduction(
                    office_id=session["office_id"],
                    month=month,
                    title=title,
                )
                message = f'✅ تم حذف "{result.title}" لهذا الشهر بنجاح.'
            else:
                result = container.deduction_service.apply_bulk_deduction(
                    office_id=session["office_id"],
                    month=month,
                    title=title,
                    amount=data.get("amount", current_app.config.get("STAMP_FEE_AMOUNT")),
                )
                message = f'✅ تمت إضافة الاستقطاع "{result.title}" لـ {result.entries_changed} موظف.'
        except ValidationError as e:
            return json_error(f"❌ {e}")
        except StoreError:
            logger.exception("bulk deduction failed")
            return json_error("❌ حدث خطأ أثناء التنفيذ.", status=502)
        return json_ok(result, message=message)
