"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_RETIREMENT_PERCENTAGE = 10
DEFAULT_STAMP_FEE_AMOUNT = 2000
DEFAULT_STAMP_FEE_TITLE = "رسم طابع"
TAX_ENTRY_TITLE = "ضريبة"
OFFICE_ACTIVATION_DAYS = 30
MIN_SEARCH_LENGTH = 2
MIN_PASSWORD_LENGTH = 6
