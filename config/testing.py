import os
from decimal import Decimal

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_payroll_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ADMIN_EMAILS = ["admin@example.com"]

RETIREMENT_PERCENTAGE = Decimal("10")
STAMP_FEE_TITLE = "رسم طابع"
STAMP_FEE_AMOUNT = Decimal("2000")
OFFICE_ACTIVATION_DAYS = 30
