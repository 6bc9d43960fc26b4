"""Create (or reset) an administrator login.

Usage: python scripts/create_admin.py admin@example.com secret123

The email must also be listed in ADMIN_EMAILS to reach the office pages.
"""
from __future__ import annotations

import importlib
import logging
import sys
import uuid
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.office_payroll.office_payroll.core.constants import MIN_PASSWORD_LENGTH
from src.office_payroll.office_payroll.database.bootstrap import ensure_account

logger = logging.getLogger("create_admin")


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    if len(argv) != 2:
        logger.error("usage: create_admin.py EMAIL PASSWORD")
        return 2
    email, password = argv
    if len(password) < MIN_PASSWORD_LENGTH:
        logger.error("password must be at least %d characters", MIN_PASSWORD_LENGTH)
        return 2

    settings = importlib.import_module(get_settings_module())
    ensure_account(dict(settings.DB_CONFIG), account_id=str(uuid.uuid4()), email=email, password=password)
    logger.info("account ready: %s", email)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
