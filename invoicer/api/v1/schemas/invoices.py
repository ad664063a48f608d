"""Request and response schemas for invoice endpoints."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from invoicer.api.v1.schemas.common import not_null, optional_email, optional_gstin, optional_phone

InvoiceStatus = Literal["DRAFT", "GENERATED", "CANCELLED"]
PaymentStatus = Literal["PENDING", "PARTIAL", "PAID"]


class InvoiceItemIn(BaseModel):
    description: str = Field(min_length=1)
    quantity: Decimal = Field(gt=0, max_digits=12, decimal_places=3)
    rate: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    gst_rate: Decimal | None = Field(default=None, ge=0, le=28, decimal_places=2)
    hsn_sac_code: str | None = Field(default=None, max_length=8)
    hsn_sac_type: Literal["HSN", "SAC"] = "HSN"
    unit_of_measurement: str = Field(default="NOS", max_length=10)


class InvoiceCreate(BaseModel):
    customer_id: UUID | None = None
    customer_name: str | None = Field(default=None, min_length=2, max_length=255)
    customer_gst: str | None = None
    customer_address: str | None = Field(default=None, min_length=5)
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_state: str | None = Field(default=None, max_length=100)

    invoice_date: date | None = None
    due_date: date | None = None
    is_inter_state: bool | None = Field(
        default=None,
        description="Omit to derive from the seller and buyer states",
    )
    status: Literal["DRAFT", "GENERATED"] = "DRAFT"
    payment_status: PaymentStatus = "PENDING"
    terms_conditions: str | None = None
    notes: str | None = None
    items: list[InvoiceItemIn] = Field(min_length=1)

    check_gst = field_validator("customer_gst")(optional_gstin)
    check_phone = field_validator("customer_phone")(optional_phone)
    check_email = field_validator("customer_email")(optional_email)


class InvoiceUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""

    customer_id: UUID | None = None
    customer_name: str | None = Field(default=None, min_length=2, max_length=255)
    customer_gst: str | None = None
    customer_address: str | None = Field(default=None, min_length=5)
    customer_phone: str | None = None
    customer_email: str | None = None
    customer_state: str | None = Field(default=None, max_length=100)

    invoice_date: date | None = None
    due_date: date | None = None
    is_inter_state: bool | None = None
    status: InvoiceStatus | None = None
    payment_status: PaymentStatus | None = None
    terms_conditions: str | None = None
    notes: str | None = None
    items: list[InvoiceItemIn] | None = Field(default=None, min_length=1)

    check_gst = field_validator("customer_gst")(optional_gstin)
    check_phone = field_validator("customer_phone")(optional_phone)
    check_email = field_validator("customer_email")(optional_email)
    check_required = field_validator(
        "customer_name", "customer_address", "invoice_date", "payment_status", "items"
    )(not_null)


class StatusChange(BaseModel):
    status: InvoiceStatus


class CalculateRequest(BaseModel):
    """Stateless preview: either ``is_inter_state`` or both states."""

    items: list[InvoiceItemIn] = Field(min_length=1)
    is_inter_state: bool | None = None
    seller_state: str | None = None
    buyer_state: str | None = None


class InvoiceItemDetail(BaseModel):
    id: str
    description: str
    hsn_sac_code: str | None
    hsn_sac_type: str | None
    unit_of_measurement: str | None
    quantity: Decimal
    rate: Decimal
    gst_rate: Decimal
    amount: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_amount: Decimal


class InvoiceSummary(BaseModel):
    id: str
    invoice_number: str
    status: str
    payment_status: str
    invoice_date: date
    due_date: date | None
    customer_id: str | None
    customer_name: str
    customer_gst: str | None
    is_inter_state: bool
    subtotal: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_amount: Decimal
    created_at: datetime | None


class InvoiceDetail(InvoiceSummary):
    customer_address: str
    customer_phone: str | None
    customer_email: str | None
    customer_state: str | None
    terms_conditions: str | None
    notes: str | None
    amount_in_words: str
    items: list[InvoiceItemDetail]
