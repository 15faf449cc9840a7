"""
Business rules for donor records.

This module is the single source of truth for which donor fields are
required, how a missing generated id is synthesized, how donation counts
are normalized and how a donor's age is derived from the birth date.
"""
from datetime import date, datetime
from typing import Any, List, Optional

GENERATED_ID_PREFIX = "DN"
GENERATED_ID_FORMAT = "%Y%m%d%H%M%S"
# How many consecutive seconds a create may try before giving up with a conflict
GENERATED_ID_ATTEMPTS = 5

# The unset/default date; date.min is what a zero-initialized date decodes to
ZERO_DATE = date.min


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_zero_date(value: Optional[date]) -> bool:
    return value is None or value == ZERO_DATE


def validate_donor(payload: Any) -> List[str]:
    """
    Check the required donor fields and collect every violation.

    Args:
        payload: Any object exposing full_name, phone, birth_date and gender

    Returns:
        List of human-readable messages; empty when the payload is valid
    """
    errors = []
    if _is_blank(payload.full_name):
        errors.append("Full name is required")
    if _is_blank(payload.phone):
        errors.append("Phone number is required")
    if is_zero_date(payload.birth_date):
        errors.append("Birth date is required")
    if _is_blank(payload.gender):
        errors.append("Gender is required")
    return errors


def generate_donor_id(now: Optional[datetime] = None) -> str:
    """Build a human-facing id such as DN20250705013859 from the creation time."""
    now = now or datetime.now()
    return f"{GENERATED_ID_PREFIX}{now.strftime(GENERATED_ID_FORMAT)}"


def resolve_generated_id(generated_id: Optional[str], now: Optional[datetime] = None) -> str:
    if _is_blank(generated_id):
        return generate_donor_id(now)
    return generated_id


def normalize_donations(count: Optional[int]) -> int:
    if count is None or count < 0:
        return 0
    return count


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """
    Whole years between birth_date and today.

    One year is taken off when today's day-of-year is strictly before the
    birth day-of-year. Comparing day-of-year rather than month/day means a
    leap year shifts the boundary by one day after February.
    """
    today = today or date.today()
    age = today.year - birth_date.year
    if today.timetuple().tm_yday < birth_date.timetuple().tm_yday:
        age -= 1
    return age
