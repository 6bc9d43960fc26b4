import os
from decimal import Decimal

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "office_payroll"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Comma separated; these logins may list and activate offices.
ADMIN_EMAILS = [e.strip().lower() for e in os.getenv("ADMIN_EMAILS", "").split(",") if e.strip()]

RETIREMENT_PERCENTAGE = Decimal(os.getenv("RETIREMENT_PERCENTAGE", "10"))
STAMP_FEE_TITLE = os.getenv("STAMP_FEE_TITLE", "رسم طابع")
STAMP_FEE_AMOUNT = Decimal(os.getenv("STAMP_FEE_AMOUNT", "2000"))
OFFICE_ACTIVATION_DAYS = int(os.getenv("OFFICE_ACTIVATION_DAYS", "30"))
