"""Business profile (the seller block printed on every invoice)."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from invoicer.api.v1.schemas.common import optional_email, optional_gstin, optional_phone


class BusinessProfile(BaseModel):
    business_name: str | None
    business_address: str | None
    business_state: str | None
    business_gst: str | None
    business_phone: str | None
    business_email: str | None
    is_complete: bool


class BusinessUpdate(BaseModel):
    business_name: str | None = Field(default=None, min_length=2, max_length=255)
    business_address: str | None = Field(default=None, min_length=5)
    business_state: str | None = Field(default=None, max_length=100)
    business_gst: str | None = None
    business_phone: str | None = None
    business_email: str | None = None

    check_gst = field_validator("business_gst")(optional_gstin)
    check_phone = field_validator("business_phone")(optional_phone)
    check_email = field_validator("business_email")(optional_email)
