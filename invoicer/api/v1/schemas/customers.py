"""Request and response schemas for customer endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from invoicer.api.v1.schemas.common import optional_email, optional_gstin, optional_phone


class CustomerCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    gst_number: str | None = None
    address: str = Field(min_length=5)
    state: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    email: str | None = None

    check_gst = field_validator("gst_number")(optional_gstin)
    check_phone = field_validator("phone")(optional_phone)
    check_email = field_validator("email")(optional_email)


class CustomerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    gst_number: str | None = None
    address: str | None = Field(default=None, min_length=5)
    state: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    email: str | None = None

    check_gst = field_validator("gst_number")(optional_gstin)
    check_phone = field_validator("phone")(optional_phone)
    check_email = field_validator("email")(optional_email)


class CustomerDetail(BaseModel):
    id: str
    name: str
    gst_number: str | None
    address: str
    state: str | None
    phone: str | None
    email: str | None
    invoice_count: int | None = None
    total_revenue: Decimal | None = None
    created_at: datetime | None
