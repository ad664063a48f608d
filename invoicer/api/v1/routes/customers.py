# invoicer/api/v1/routes/customers.py
"""Customer CRUD endpoints."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from invoicer.domain.services import customer_service
from invoicer.domain.services.gst_calculator import round_money
from invoicer.infrastructure.db.models import Customer, User
from invoicer.infrastructure.db.repositories import CustomerRepository, InvoiceRepository

from invoicer.api.v1.deps import customer_repo, get_current_user, invoice_repo
from invoicer.api.v1.envelope import ok, paginated
from invoicer.api.v1.routes.invoices import invoice_to_summary
from invoicer.api.v1.schemas.customers import CustomerCreate, CustomerDetail, CustomerUpdate

logger = logging.getLogger("api.v1.customers")

router = APIRouter(prefix="/customers", tags=["Customers"])


def _customer_to_detail(customer: Customer, invoice_count: int | None = None, revenue=None) -> dict:
    return CustomerDetail(
        id=str(customer.id),
        name=customer.name,
        gst_number=customer.gst_number,
        address=customer.address,
        state=customer.state,
        phone=customer.phone,
        email=customer.email,
        invoice_count=invoice_count,
        total_revenue=round_money(revenue) if revenue is not None else None,
        created_at=customer.created_at,
    ).model_dump()


@router.get("", response_model=dict)
async def list_customers(
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    search: str | None = Query(default=None, description="Name, GSTIN, email or phone"),
    user: User = Depends(get_current_user),
    customers: CustomerRepository = Depends(customer_repo),
):
    rows, total = await customers.list_for_user(user.id, limit=limit, offset=offset, search=search)
    return paginated(
        items=[_customer_to_detail(customer, count) for customer, count in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: CustomerCreate,
    user: User = Depends(get_current_user),
    customers: CustomerRepository = Depends(customer_repo),
):
    customer = await customer_service.create_customer(user.id, body.model_dump(), customers=customers)
    return ok(data=_customer_to_detail(customer, 0), message="Customer created")


@router.get("/{customer_id}", response_model=dict)
async def get_customer(
    customer_id: UUID,
    user: User = Depends(get_current_user),
    customers: CustomerRepository = Depends(customer_repo),
    invoices: InvoiceRepository = Depends(invoice_repo),
):
    """Customer with invoice count, lifetime revenue and the latest invoices."""
    customer = await customer_service.get_customer(user.id, customer_id, customers=customers)
    count = await customers.count_invoices(customer.id, user.id)
    revenue = await invoices.total_revenue(user.id, customer_id=customer.id)
    recent = await invoices.recent_for_customer(customer.id, user.id)

    data = _customer_to_detail(customer, count, revenue)
    data["recent_invoices"] = [invoice_to_summary(inv) for inv in recent]
    return ok(data=data)


@router.patch("/{customer_id}", response_model=dict)
async def update_customer(
    customer_id: UUID,
    body: CustomerUpdate,
    user: User = Depends(get_current_user),
    customers: CustomerRepository = Depends(customer_repo),
):
    customer = await customer_service.update_customer(
        user.id, customer_id, body.model_dump(exclude_unset=True), customers=customers
    )
    return ok(data=_customer_to_detail(customer), message="Customer updated")


@router.delete("/{customer_id}", response_model=dict)
async def delete_customer(
    customer_id: UUID,
    user: User = Depends(get_current_user),
    customers: CustomerRepository = Depends(customer_repo),
):
    await customer_service.delete_customer(user.id, customer_id, customers=customers)
    return ok(message="Customer deleted")
