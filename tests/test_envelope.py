from decimal import Decimal

from invoicer.api.v1.envelope import error, ok, paginated, validation_details


def test_ok_serialises_decimals():
    body = ok(data={"total": Decimal("1180.00")}, message="done")
    assert body["status"] == "ok"
    assert body["message"] == "done"
    assert body["data"]["total"] == "1180.00"
    assert body["errors"] is None


def test_error():
    body = error("Invoice not found")
    assert body == {"status": "error", "data": None, "message": "Invoice not found", "errors": None}


def test_paginated_has_more():
    body = paginated(items=[1, 2], total=5, limit=2, offset=2)
    assert body["data"]["has_more"] is True
    assert paginated(items=[5], total=5, limit=2, offset=4)["data"]["has_more"] is False


def test_error_details():
    body = error("Validation failed", [{"field": "items.0.rate", "message": "too many decimals"}])
    assert body["errors"] == [{"field": "items.0.rate", "message": "too many decimals"}]


def test_validation_details_strip_location_prefix():
    details = validation_details([
        {"loc": ("body", "items", 0, "rate"), "msg": "Input should be greater than 0"},
        {"loc": ("body",), "msg": "Field required"},
    ])
    assert details[0].field == "items.0.rate"
    assert details[0].message == "Input should be greater than 0"
    assert details[1].field is None
