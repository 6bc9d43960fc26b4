"""Example: use the service layer directly (no Flask).

Prints the current month's payments report for one office tree.
Usage: python examples/example_usage.py OFFICE_ID [YYYY-MM]
"""

import importlib
import sys

from config import get_settings_module

from src.office_payroll.office_payroll.common.datetime_utils import now_local, parse_month
from src.office_payroll.office_payroll.common.formatting import format_arabic_month, format_money
from src.office_payroll.office_payroll.container import build_container


def main(argv):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    office_id = argv[0]
    month = parse_month(argv[1]) if len(argv) > 1 else now_local().date()
    report = container.payment_report_service.build_payments_report(office_id=office_id, month=month)

    print(format_arabic_month(report.month))
    for row in report.rows:
        print(f"{row.detail.employee_name}\t{format_money(row.breakdown.net)}")
    print(f"المجموع\t{format_money(report.totals.net)}")


if __name__ == "__main__":
    main(sys.argv[1:])
