# invoicer/api/v1/schemas/common.py
"""Field checks shared by the request schemas."""

from __future__ import annotations

from invoicer.domain.services.gstin_pan_validation import (
    normalize_code,
    validate_email,
    validate_gst_number,
    validate_phone,
)


def optional_gstin(value: str | None) -> str | None:
    """Empty means "not given"; otherwise stored normalised (upper-case)."""
    if value is None or not value.strip():
        return None
    if not validate_gst_number(value):
        raise ValueError("Invalid GST number")
    return normalize_code(value)


def optional_phone(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    if not validate_phone(value):
        raise ValueError("Invalid phone number")
    return value.strip()


def optional_email(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    if not validate_email(value):
        raise ValueError("Invalid email")
    return value.strip()


def not_null(value):
    """A PATCH may omit a required column but not clear it."""
    if value is None:
        raise ValueError("This field cannot be null")
    return value
