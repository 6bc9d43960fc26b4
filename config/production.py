import os
from decimal import Decimal

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_payroll"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ADMIN_EMAILS = [e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()]

RETIREMENT_PERCENTAGE = Decimal(os.getenv("RETIREMENT_PERCENTAGE", "10"))
STAMP_FEE_TITLE = os.getenv("STAMP_FEE_TITLE", "رسم طابع")
STAMP_FEE_AMOUNT = Decimal(os.getenv("STAMP_FEE_AMOUNT", "2000"))
OFFICE_ACTIVATION_DAYS = int(os.getenv("OFFICE_ACTIVATION_DAYS", "30"))
