import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from invoicer.domain.exceptions import DuplicateError, InvoicerError, NotFoundError
from invoicer.domain.services import customer_service


@pytest.fixture
def customers():
    repo = MagicMock()
    repo.get_by_gst_number = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=lambda user_id, fields: SimpleNamespace(id=uuid.uuid4(), **fields))
    repo.update = AsyncMock(side_effect=lambda customer, fields: SimpleNamespace(**{**vars(customer), **fields}))
    repo.delete = AsyncMock()
    repo.count_invoices = AsyncMock(return_value=0)
    return repo


def _customer(**overrides):
    fields = dict(
        id=uuid.uuid4(),
        name="Kochi Spices",
        gst_number="32AADCB2230M1ZP",
        address="MG Road, Kochi",
        state="Kerala",
        phone=None,
        email=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_create_derives_state_from_gstin(event_loop, customers):
    created = event_loop.run_until_complete(
        customer_service.create_customer(
            uuid.uuid4(),
            {"name": "Kochi Spices", "gst_number": " 32aadcb2230m1zp ", "address": "MG Road", "phone": ""},
            customers=customers,
        )
    )
    assert created.gst_number == "32AADCB2230M1ZP"
    assert created.state == "Kerala"
    assert created.phone is None


def test_explicit_state_is_kept(event_loop, customers):
    created = event_loop.run_until_complete(
        customer_service.create_customer(
            uuid.uuid4(),
            {"name": "Branch", "gst_number": "32AADCB2230M1ZP", "address": "x", "state": "Karnataka"},
            customers=customers,
        )
    )
    assert created.state == "Karnataka"


def test_duplicate_gstin_is_rejected(event_loop, customers):
    customers.get_by_gst_number = AsyncMock(return_value=_customer())
    with pytest.raises(DuplicateError):
        event_loop.run_until_complete(
            customer_service.create_customer(
                uuid.uuid4(), {"name": "Again", "gst_number": "32AADCB2230M1ZP", "address": "x"},
                customers=customers,
            )
        )
    customers.create.assert_not_awaited()


def test_update_to_another_customers_gstin(event_loop, customers):
    customers.get_for_user = AsyncMock(return_value=_customer())
    customers.get_by_gst_number = AsyncMock(return_value=_customer(gst_number="18AABCU9603R1ZM"))
    with pytest.raises(DuplicateError):
        event_loop.run_until_complete(
            customer_service.update_customer(
                uuid.uuid4(), uuid.uuid4(), {"gst_number": "18AABCU9603R1ZM"}, customers=customers
            )
        )


def test_update_gstin_moves_state(event_loop, customers):
    customers.get_for_user = AsyncMock(return_value=_customer())
    updated = event_loop.run_until_complete(
        customer_service.update_customer(
            uuid.uuid4(), uuid.uuid4(), {"gst_number": "18AABCU9603R1ZM"}, customers=customers
        )
    )
    assert updated.state == "Assam"


def test_missing_customer(event_loop, customers):
    customers.get_for_user = AsyncMock(return_value=None)
    with pytest.raises(NotFoundError):
        event_loop.run_until_complete(
            customer_service.get_customer(uuid.uuid4(), uuid.uuid4(), customers=customers)
        )


def test_delete_blocked_by_invoices(event_loop, customers):
    customers.get_for_user = AsyncMock(return_value=_customer())
    customers.count_invoices = AsyncMock(return_value=2)
    with pytest.raises(InvoicerError, match="existing invoices"):
        event_loop.run_until_complete(
            customer_service.delete_customer(uuid.uuid4(), uuid.uuid4(), customers=customers)
        )
    customers.delete.assert_not_awaited()


def test_delete_unused_customer(event_loop, customers):
    customer = _customer()
    customers.get_for_user = AsyncMock(return_value=customer)
    user_id = uuid.uuid4()
    event_loop.run_until_complete(
        customer_service.delete_customer(user_id, customer.id, customers=customers)
    )
    customers.count_invoices.assert_awaited_once_with(customer.id, user_id)
    customers.delete.assert_awaited_once_with(customer)
