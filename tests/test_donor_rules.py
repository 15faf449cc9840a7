"""Unit tests for donor rules: required fields, generated id, donation count, age."""
import re
from datetime import date, datetime

from app.schemas.donor import DonorPayload
from app.services.donor_rules import (
    calculate_age,
    generate_donor_id,
    is_zero_date,
    normalize_donations,
    resolve_generated_id,
    validate_donor,
)


def test_valid_payload_has_no_errors():
    payload = DonorPayload(full_name="Amina", phone="555", birth_date=date(1990, 3, 21), gender="Female")
    assert validate_donor(payload) == []


def test_all_violations_collected():
    payload = DonorPayload(full_name="", phone="", gender="")
    errors = validate_donor(payload)
    assert errors == [
        "Full name is required",
        "Phone number is required",
        "Birth date is required",
        "Gender is required",
    ]


def test_whitespace_only_counts_as_missing():
    payload = DonorPayload(full_name="   ", phone="555", birth_date=date(1990, 3, 21), gender="\t")
    assert validate_donor(payload) == ["Full name is required", "Gender is required"]


def test_min_date_is_zero_date():
    assert is_zero_date(None)
    assert is_zero_date(date(1, 1, 1))
    assert not is_zero_date(date(1990, 3, 21))
    payload = DonorPayload(full_name="A", phone="1", birth_date=date(1, 1, 1), gender="Male")
    assert validate_donor(payload) == ["Birth date is required"]


def test_generated_id_format():
    assert generate_donor_id(datetime(2025, 7, 5, 1, 38, 59)) == "DN20250705013859"
    assert re.fullmatch(r"DN\d{14}", generate_donor_id())


def test_supplied_generated_id_kept():
    assert resolve_generated_id("DN-CUSTOM-1") == "DN-CUSTOM-1"


def test_blank_generated_id_replaced():
    now = datetime(2024, 1, 2, 3, 4, 5)
    assert resolve_generated_id(None, now) == "DN20240102030405"
    assert resolve_generated_id("  ", now) == "DN20240102030405"


def test_negative_donations_normalized():
    assert normalize_donations(-4) == 0
    assert normalize_donations(None) == 0
    assert normalize_donations(0) == 0
    assert normalize_donations(7) == 7


def test_age_day_before_birthday():
    assert calculate_age(date(2000, 6, 15), today=date(2024, 6, 14)) == 23


def test_age_day_after_birthday():
    assert calculate_age(date(2000, 6, 15), today=date(2024, 6, 16)) == 24


def test_age_compares_day_of_year():
    # 2000 is a leap year: June 15 is day 167, and day 167 of 2023 is June 16
    assert calculate_age(date(2000, 6, 15), today=date(2023, 6, 15)) == 22
    assert calculate_age(date(2000, 6, 15), today=date(2023, 6, 16)) == 23
