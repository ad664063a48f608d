import pytest
from pydantic import ValidationError

from invoicer.api.v1.schemas.hsn_sac import HsnSacCreate
from invoicer.api.v1.schemas.invoices import InvoiceCreate, InvoiceUpdate

ITEM = {"description": "Consulting", "quantity": "2", "rate": "1000"}


def test_blank_optional_buyer_fields_become_none():
    body = InvoiceCreate(customer_name="Acme", customer_address="Somewhere", customer_gst="  ",
                         customer_phone="", items=[ITEM])
    assert body.customer_gst is None
    assert body.customer_phone is None
    assert body.items[0].gst_rate is None


def test_gstin_is_normalised():
    body = InvoiceCreate(customer_gst="18aabcu9603r1zm", items=[ITEM])
    assert body.customer_gst == "18AABCU9603R1ZM"


def test_invalid_gstin_rejected():
    with pytest.raises(ValidationError):
        InvoiceCreate(customer_gst="18AABCU9603R1Z", items=[ITEM])


def test_items_required():
    with pytest.raises(ValidationError):
        InvoiceCreate(customer_name="Acme", items=[])


@pytest.mark.parametrize("field,value", [("quantity", "0"), ("rate", "-5"), ("gst_rate", "40")])
def test_item_bounds(field, value):
    with pytest.raises(ValidationError):
        InvoiceCreate(items=[{**ITEM, field: value}])


def test_cannot_create_cancelled():
    with pytest.raises(ValidationError):
        InvoiceCreate(items=[ITEM], status="CANCELLED")


def test_update_tracks_only_sent_fields():
    body = InvoiceUpdate(notes="Deliver by Friday")
    assert body.model_dump(exclude_unset=True) == {"notes": "Deliver by Friday"}


def test_sac_code_must_be_six_digits():
    with pytest.raises(ValidationError):
        HsnSacCreate(code="99821", type="SAC", description="Software", category="IT")
    assert HsnSacCreate(code="998214", type="SAC", description="Software", category="IT").code == "998214"


@pytest.mark.parametrize("field", ["customer_name", "customer_address", "invoice_date", "payment_status"])
def test_update_cannot_clear_required_columns(field):
    with pytest.raises(ValidationError):
        InvoiceUpdate(**{field: None})


def test_update_may_clear_optional_columns():
    body = InvoiceUpdate(customer_gst=None, due_date=None, notes=None)
    assert body.model_dump(exclude_unset=True) == {"customer_gst": None, "due_date": None, "notes": None}


@pytest.mark.parametrize("field,value", [("rate", "10.555"), ("quantity", "1.2345")])
def test_item_precision_matches_storage(field, value):
    with pytest.raises(ValidationError):
        InvoiceCreate(items=[{**ITEM, field: value}])


def test_item_precision_within_storage():
    item = InvoiceCreate(items=[{**ITEM, "rate": "10.55", "quantity": "1.125"}]).items[0]
    assert str(item.rate) == "10.55"
    assert str(item.quantity) == "1.125"
