from __future__ import annotations

from decimal import Decimal

import pytest

from salon.application.dto.booking_form import validate_booking_fields
from salon.application.utils.money import format_amount, parse_amount, to_cents
from salon.application.utils.phone import format_phone_number, is_complete_phone
from conftest import booking_fields


def test_phone_mask_full_number():
    """Ten digits render as (XXX) XXX-XXXX."""
    assert format_phone_number("5551234567") == "(555) 123-4567"


def test_phone_mask_strips_non_digits_and_extra_digits():
    assert format_phone_number("555.123.4567 ext 89") == "(555) 123-4567"
    assert format_phone_number("+1 (555) 123") == "(155) 512-3"


def test_phone_mask_partial_input():
    assert format_phone_number("") == ""
    assert format_phone_number("55") == "(55"
    assert format_phone_number("5551") == "(555) 1"
    assert format_phone_number("5551234") == "(555) 123-4"
    assert not is_complete_phone("555123")
    assert is_complete_phone("555-123-4567")


def test_amount_helpers():
    assert parse_amount("25") == Decimal("25.00")
    assert parse_amount(25.005) == Decimal("25.01")
    assert to_cents(Decimal("25.00")) == 2500
    assert format_amount(Decimal("7.5")) == "7.50"
    with pytest.raises(ValueError):
        parse_amount("twenty")


def test_valid_booking_form():
    """A complete form validates and the phone is stored masked."""
    result = validate_booking_fields(booking_fields(customerPhone="555 123 4567", specialRequests="  "))
    assert result.ok
    assert result.form.customer_phone == "(555) 123-4567"
    assert result.form.special_requests is None
    assert result.form.appointment_at.isoformat() == "2026-11-02T10:30:00"


def test_booking_form_reports_each_missing_field():
    result = validate_booking_fields({})
    assert not result.ok
    assert result.errors["serviceId"] == "Please select a service"
    assert result.errors["appointmentDate"] == "Please select a date"
    assert result.errors["appointmentTime"] == "Please select a time"
    assert result.errors["customerName"] == "Name is required"
    assert result.errors["customerPhone"] == "Valid phone number required"
    assert result.errors["customerEmail"] == "Valid email required"


def test_booking_form_rejects_bad_email_and_short_phone():
    result = validate_booking_fields(booking_fields(customerEmail="not-an-email", customerPhone="555-12"))
    assert set(result.errors) == {"customerEmail", "customerPhone"}


def test_booking_form_rejects_unknown_fields():
    result = validate_booking_fields(booking_fields(couponCode="FREE"))
    assert result.errors == {"couponCode": "Unknown field"}
