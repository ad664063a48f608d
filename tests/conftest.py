"""Shared test fixtures for the GST invoicer test suite."""

import asyncio
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def seller():
    """A user whose business profile is complete (Assam, GSTIN state code 18)."""
    return SimpleNamespace(
        id=uuid.uuid4(),
        email="owner@example.com",
        name="Owner",
        business_name="Brahmaputra Traders",
        business_address="12 GS Road, Guwahati",
        business_state="Assam",
        business_gst="18AABCU9603R1ZM",
        business_phone="9876543210",
        business_email="billing@example.com",
    )


@pytest.fixture
def sample_items() -> list[dict]:
    return [
        {"description": "Laptop", "quantity": 2, "rate": 50000, "gst_rate": 18},
        {"description": "Printed manual", "quantity": 10, "rate": 150, "gst_rate": 12},
    ]


def make_invoice_row(**overrides):
    """Stand-in for an ``Invoice`` ORM row with one intra-state item."""
    item = SimpleNamespace(
        id=uuid.uuid4(),
        description="Laptop",
        hsn_sac_code="8471",
        hsn_sac_type="HSN",
        unit_of_measurement="NOS",
        quantity=Decimal("1.000"),
        rate=Decimal("1000.00"),
        gst_rate=Decimal("18.00"),
        amount=Decimal("1000.00"),
        cgst=Decimal("90.00"),
        sgst=Decimal("90.00"),
        igst=Decimal("0.00"),
        total_amount=Decimal("1180.00"),
    )
    fields = dict(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        customer_id=None,
        invoice_number="INV-2503-0001",
        status="DRAFT",
        payment_status="PENDING",
        invoice_date=date(2025, 3, 14),
        due_date=None,
        customer_name="Acme Corp",
        customer_gst="18AADCB2230M1ZP",
        customer_address="Fancy Bazar, Guwahati",
        customer_phone=None,
        customer_email=None,
        customer_state="Assam",
        is_inter_state=False,
        subtotal=Decimal("1000.00"),
        cgst=Decimal("90.00"),
        sgst=Decimal("90.00"),
        igst=Decimal("0.00"),
        total_amount=Decimal("1180.00"),
        terms_conditions=None,
        notes=None,
        created_at=datetime(2025, 3, 14, 10, 0, tzinfo=timezone.utc),
        items=[item],
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def invoice_row():
    return make_invoice_row()


@pytest.fixture
def invoice_factory():
    return make_invoice_row
