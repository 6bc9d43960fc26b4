"""Presentation helpers.

Amounts travel through the services as unrounded Decimals; these helpers are
the single place where they get rounded for display.
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

ARABIC_MONTH_NAMES = (
    "كانون الثاني",
    "شباط",
    "آذار",
    "نيسان",
    "أيار",
    "حزيران",
    "تموز",
    "آب",
    "أيلول",
    "تشرين الأول",
    "تشرين الثاني",
    "كانون الأول",
)

Number = Union[int, float, Decimal, str]


def to_arabic_indic(value: Optional[Number]) -> str:
    if value is None:
        return "-"
    return "".join(ARABIC_INDIC_DIGITS[int(ch)] if ch.isdigit() else ch for ch in str(value))


def round_amount(value: Optional[Number]) -> int:
    if value is None:
        return 0
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_money(value: Optional[Number], *, arabic_digits: bool = True) -> str:
    text = f"{round_amount(value):,}"
    return to_arabic_indic(text) if arabic_digits else text


def format_percentage(value: Optional[Number], *, arabic_digits: bool = True) -> str:
    text = f"{round_amount(value)}%"
    return to_arabic_indic(text) if arabic_digits else text


def format_arabic_month(value: date, *, arabic_digits: bool = True) -> str:
    year = to_arabic_indic(value.year) if arabic_digits else str(value.year)
    return f"{ARABIC_MONTH_NAMES[value.month - 1]} {year}"
